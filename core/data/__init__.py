"""Data layer - infrastructure persistence and mapping."""

from .event_store import EventStore
from .mappers import CouponMapper, OrderItemMapper, OrderMapper, ProductMapper
from .models import (
    Base,
    CouponModel,
    OrderEventModel,
    OrderItemModel,
    OrderModel,
    ProductModel,
)
from .repositories import (
    SqlAlchemyCouponRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyProductRepository,
)
from .uow import UnitOfWork, create_uow

__all__ = [
    "Base",
    "CouponMapper",
    "CouponModel",
    "create_uow",
    "EventStore",
    "OrderEventModel",
    "OrderItemMapper",
    "OrderItemModel",
    "OrderMapper",
    "OrderModel",
    "ProductMapper",
    "ProductModel",
    "SqlAlchemyCouponRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyProductRepository",
    "UnitOfWork",
]
