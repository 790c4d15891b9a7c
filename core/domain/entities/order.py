"""
Order aggregate root.

Owns the order state machine and the frozen item snapshots. The finalize
transaction itself lives in the application layer; this module decides
whether a confirmation is allowed and what it changes.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional
import uuid

from ..clock import utcnow
from ..errors import InvalidStateTransition, OrderExpired
from ..events.base import DomainEvent
from ..events.order_events import (
    OrderConfirmedEvent,
    OrderPlacedEvent,
    OrderStatusChangedEvent,
)
from ..value_objects import ExecutionID, Money


class OrderStatus(str, Enum):
    """Order lifecycle states."""
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# A confirmation arriving for an order in one of these states is a replay.
CONFIRMED_STATUSES = frozenset({
    OrderStatus.PROCESSING,
    OrderStatus.PAID,
    OrderStatus.SHIPPED,
})

# Both confirmation paths converge on the same post-state.
CONFIRMATION_TARGET_STATUS = OrderStatus.PROCESSING


class ConfirmationSource(str, Enum):
    """Which ingress produced a confirmation."""
    REDIRECT = "redirect"
    WEBHOOK = "webhook"
    CHECKOUT = "checkout"


@dataclass(frozen=True)
class CustomerDetails:
    """Contact fields captured at checkout."""
    name: str
    email: str
    phone: str
    address: str


@dataclass
class OrderItem:
    """
    Line item snapshot.

    Title and price are copied at order time and never re-read from the
    live product. ``product_id`` is None for custom items that have no
    catalog product (and therefore no stock).
    """
    title: str
    price: Money
    quantity: int
    product_id: Optional[str] = None

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError(f"Quantity must be at least 1, got {self.quantity}")
        if self.price.is_negative():
            raise ValueError(f"Price cannot be negative: {self.price}")

    @property
    def is_catalog_item(self) -> bool:
        return self.product_id is not None

    def line_total(self) -> Money:
        return self.price * self.quantity


@dataclass
class Order:
    """
    Order aggregate root.

    Invariant: amount = subtotal - discount_amount, amount >= 0.
    """
    order_id: str
    gateway_order_id: str
    customer: CustomerDetails
    items: List[OrderItem]
    subtotal: Money
    discount_amount: Money
    amount: Money
    status: OrderStatus = OrderStatus.PENDING
    coupon_code: Optional[str] = None
    payment_id: Optional[str] = None
    expires_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=utcnow)

    # Event collection
    _domain_events: List[DomainEvent] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        if self.amount != self.subtotal - self.discount_amount:
            raise ValueError(
                f"Amount {self.amount} does not equal subtotal {self.subtotal} "
                f"minus discount {self.discount_amount}"
            )
        if self.amount.is_negative():
            raise ValueError(f"Order amount cannot be negative: {self.amount}")

    @property
    def currency(self) -> str:
        return self.amount.currency

    @classmethod
    def place(
        cls,
        gateway_order_id: str,
        customer: CustomerDetails,
        items: List[OrderItem],
        discount_amount: Money,
        coupon_code: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        order_id: Optional[str] = None,
    ) -> 'Order':
        """
        Factory method to create a new PENDING order.

        Subtotal is derived from the item snapshots. Records OrderPlacedEvent.
        """
        if not items:
            raise ValueError("Order must contain at least one item")

        currency = discount_amount.currency
        subtotal = Money.zero(currency)
        for item in items:
            subtotal = subtotal + item.line_total()

        order = cls(
            order_id=order_id or str(uuid.uuid4()),
            gateway_order_id=gateway_order_id,
            customer=customer,
            items=list(items),
            subtotal=subtotal,
            discount_amount=discount_amount,
            amount=subtotal - discount_amount,
            coupon_code=coupon_code,
            expires_at=expires_at,
        )
        order._record_event(
            OrderPlacedEvent(
                order_id=order.order_id,
                gateway_order_id=gateway_order_id,
                amount=str(order.amount.amount),
                discount_amount=str(discount_amount.amount),
                coupon_code=coupon_code,
                items_count=len(order.items),
            )
        )
        return order

    # =========================================================================
    # STATE MACHINE
    # =========================================================================

    def is_confirmed(self) -> bool:
        return self.status in CONFIRMED_STATUSES

    def check_confirmable(self, now: datetime) -> bool:
        """
        Decide whether a confirmation may proceed.

        Returns:
            True if the order is PENDING and unexpired, False if it is
            already confirmed (idempotent replay).

        Raises:
            InvalidStateTransition: order is in any other state
            OrderExpired: payment window has passed
        """
        if self.is_confirmed():
            return False

        if self.status != OrderStatus.PENDING:
            raise InvalidStateTransition(
                f"Order {self.order_id} is {self.status.value}, cannot confirm",
                order_id=self.order_id,
                status=self.status.value,
            )

        if self.expires_at is not None and now > self.expires_at:
            raise OrderExpired(
                f"Order {self.order_id} expired at {self.expires_at.isoformat()}",
                order_id=self.order_id,
            )

        return True

    def mark_confirmed(
        self,
        payment_id: str,
        source: ConfirmationSource,
        execution_id: Optional[ExecutionID] = None,
    ) -> None:
        """Move PENDING -> PROCESSING and record the payment id."""
        if self.status != OrderStatus.PENDING:
            raise InvalidStateTransition(
                f"Order {self.order_id} is {self.status.value}, cannot confirm",
                order_id=self.order_id,
                status=self.status.value,
            )

        previous_status = self.status
        self.status = CONFIRMATION_TARGET_STATUS
        self.payment_id = payment_id

        execution_id_str = str(execution_id) if execution_id else None
        self._record_event(
            OrderConfirmedEvent(
                order_id=self.order_id,
                payment_id=payment_id,
                source=source.value,
                amount_minor=self.amount.to_minor_units(),
                execution_id=execution_id_str,
            )
        )
        self._record_event(
            OrderStatusChangedEvent(
                order_id=self.order_id,
                previous_status=previous_status.value,
                new_status=self.status.value,
                reason=f"Payment confirmed via {source.value}",
                execution_id=execution_id_str,
            )
        )

    def catalog_items(self) -> List[OrderItem]:
        """Items bound to a real product (the only ones that hold stock)."""
        return [item for item in self.items if item.is_catalog_item]

    # =========================================================================
    # EVENT COLLECTION
    # =========================================================================

    def get_domain_events(self) -> List[DomainEvent]:
        return list(self._domain_events)

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    def _record_event(self, event: DomainEvent) -> None:
        self._domain_events.append(event)
