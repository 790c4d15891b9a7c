"""
Catalog entities touched by checkout: Product and Coupon.

Both are long-lived and managed elsewhere; the finalize transaction is the
only place this service mutates them (stock decrement, usage increment).

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from ..value_objects import Money


@dataclass
class Product:
    """Sellable product with a live price and stock counter."""
    product_id: str
    title: str
    price: Money
    stock: int

    def __post_init__(self):
        if self.stock < 0:
            raise ValueError(f"Stock cannot be negative: {self.stock}")

    def has_stock_for(self, quantity: int) -> bool:
        return self.stock >= quantity


class DiscountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


def normalize_coupon_code(code: str) -> str:
    """Coupon codes are case-insensitive and stored upper-cased."""
    return code.strip().upper()


@dataclass
class Coupon:
    """
    Discount coupon.

    Invariant: used_count <= usage_limit whenever usage_limit is set.
    """
    code: str
    discount_type: DiscountType
    value: Decimal
    end_date: datetime
    usage_limit: Optional[int] = None
    used_count: int = 0
    is_active: bool = True

    def __post_init__(self):
        self.code = normalize_coupon_code(self.code)
        if not isinstance(self.value, Decimal):
            self.value = Decimal(str(self.value))
        if self.usage_limit is not None and self.used_count > self.usage_limit:
            raise ValueError(
                f"Coupon {self.code} used {self.used_count} times, limit {self.usage_limit}"
            )

    def is_redeemable(self, now: datetime) -> bool:
        """Active, not past its end date, and under its usage limit."""
        if not self.is_active:
            return False
        if now > self.end_date:
            return False
        if self.usage_limit is not None and self.used_count >= self.usage_limit:
            return False
        return True

    def discount_for(self, subtotal: Money, now: datetime) -> Money:
        """
        Server-side discount for a subtotal.

        Zero when the coupon is not redeemable; never more than the subtotal.
        """
        if not self.is_redeemable(now):
            return Money.zero(subtotal.currency)

        if self.discount_type == DiscountType.PERCENTAGE:
            discount = subtotal.amount * self.value / 100
        else:
            discount = self.value

        discount = min(max(discount, Decimal("0")), subtotal.amount)
        return Money(amount=discount, currency=subtotal.currency)
