"""Domain events."""

from .base import DomainEvent
from .order_events import OrderConfirmedEvent, OrderPlacedEvent, OrderStatusChangedEvent

__all__ = [
    "DomainEvent",
    "OrderConfirmedEvent",
    "OrderPlacedEvent",
    "OrderStatusChangedEvent",
]
