"""Domain entities."""

from .catalog import Coupon, DiscountType, Product, normalize_coupon_code
from .order import (
    CONFIRMATION_TARGET_STATUS,
    CONFIRMED_STATUSES,
    ConfirmationSource,
    CustomerDetails,
    Order,
    OrderItem,
    OrderStatus,
)

__all__ = [
    "CONFIRMATION_TARGET_STATUS",
    "CONFIRMED_STATUSES",
    "ConfirmationSource",
    "Coupon",
    "CustomerDetails",
    "DiscountType",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Product",
    "normalize_coupon_code",
]
