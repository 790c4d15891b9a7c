"""Repository interfaces for catalog entities mutated during checkout."""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional

from ..entities.catalog import Coupon, Product


class ProductRepository(ABC):
    """Abstract repository for products and their stock counters."""

    @abstractmethod
    async def add(self, product: Product) -> None:
        pass

    @abstractmethod
    async def find_many(self, product_ids: Iterable[str]) -> Dict[str, Product]:
        """Load products by id.

        Returns:
            Mapping of product id to Product for the ids that exist
        """
        pass

    @abstractmethod
    async def decrement_stock(self, product_id: str, quantity: int) -> bool:
        """Conditionally decrement stock.

        The decrement applies only if current stock >= quantity, evaluated
        atomically with the write.

        Returns:
            True if stock was decremented, False if the condition failed
        """
        pass


class CouponRepository(ABC):
    """Abstract repository for coupons and their usage counters."""

    @abstractmethod
    async def add(self, coupon: Coupon) -> None:
        pass

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[Coupon]:
        """Look up a coupon by code (case-insensitive)."""
        pass

    @abstractmethod
    async def increment_usage(self, code: str) -> bool:
        """Conditionally increment used_count by one.

        Applies only while used_count < usage_limit (or no limit is set).

        Returns:
            True if incremented, False if the limit was already reached
            or the coupon does not exist
        """
        pass
