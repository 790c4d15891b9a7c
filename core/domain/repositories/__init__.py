"""Domain repository interfaces."""

from .catalog_repository import CouponRepository, ProductRepository
from .order_repository import OrderRepository

__all__ = ["CouponRepository", "OrderRepository", "ProductRepository"]
