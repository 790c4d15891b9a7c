"""Repository implementations."""

from .coupon_repository_impl import SqlAlchemyCouponRepository
from .order_repository_impl import SqlAlchemyOrderRepository
from .product_repository_impl import SqlAlchemyProductRepository

__all__ = [
    "SqlAlchemyCouponRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyProductRepository",
]
