"""Database models."""

from .base import Base
from .catalog_model import CouponModel, ProductModel
from .event_model import OrderEventModel
from .order_model import OrderItemModel, OrderModel

__all__ = [
    "Base",
    "CouponModel",
    "OrderEventModel",
    "OrderItemModel",
    "OrderModel",
    "ProductModel",
]
