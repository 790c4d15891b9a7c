"""Domain layer - pure domain models and interfaces."""

from .entities import (
    ConfirmationSource,
    Coupon,
    CustomerDetails,
    DiscountType,
    Order,
    OrderItem,
    OrderStatus,
    Product,
)
from .repositories import CouponRepository, OrderRepository, ProductRepository
from .value_objects import ExecutionID, Money

__all__ = [
    "ConfirmationSource",
    "Coupon",
    "CouponRepository",
    "CustomerDetails",
    "DiscountType",
    "ExecutionID",
    "Money",
    "Order",
    "OrderItem",
    "OrderRepository",
    "OrderStatus",
    "Product",
    "ProductRepository",
]
