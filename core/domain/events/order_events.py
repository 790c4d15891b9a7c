"""
Order Domain Events.

Events that occur during the order finalization lifecycle. Stored in the
order event store as an audit trail of every committed transition.
"""
from dataclasses import dataclass
from typing import Optional

from .base import DomainEvent


@dataclass
class _OrderEvent(DomainEvent):
    order_id: str = ""

    def __post_init__(self):
        """Set aggregate_id to order_id."""
        if not self.aggregate_id and self.order_id:
            object.__setattr__(self, 'aggregate_id', self.order_id)
        super().__post_init__()


@dataclass
class OrderPlacedEvent(_OrderEvent):
    """
    Order was created.

    Trigger: checkout initiation (PENDING) or pay-and-confirm checkout.
    """

    gateway_order_id: str = ""
    amount: str = ""
    discount_amount: str = ""
    coupon_code: Optional[str] = None
    items_count: int = 0


@dataclass
class OrderConfirmedEvent(_OrderEvent):
    """
    Payment for the order was confirmed and inventory committed.

    Trigger: first successful finalize through either confirmation path.
    """

    payment_id: str = ""
    source: str = ""
    amount_minor: int = 0


@dataclass
class OrderStatusChangedEvent(_OrderEvent):
    """Order status changed."""

    previous_status: str = ""
    new_status: str = ""
    reason: Optional[str] = None
