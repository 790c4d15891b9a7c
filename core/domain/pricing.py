"""
Server-side cart pricing.

Prices always come from the live catalog, never from the client. Custom
packs are the only client-priced lines and must match an allowed price.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from .entities.catalog import Coupon, Product
from .entities.order import OrderItem
from .errors import PaymentValidationError, ProductNotFound, StockConflict
from .value_objects import Money

DEFAULT_CUSTOM_TITLE = "Custom Sticker Pack"


@dataclass(frozen=True)
class CartLine:
    """One requested line: a catalog product, or a custom pack."""
    quantity: int
    product_id: Optional[str] = None
    custom_price: Optional[Decimal] = None
    custom_title: Optional[str] = None

    @property
    def is_custom(self) -> bool:
        return self.custom_price is not None


@dataclass(frozen=True)
class PriceQuote:
    """Result of pricing a cart. ``coupon_code`` is set only if the coupon applied."""
    items: List[OrderItem]
    subtotal: Money
    discount: Money
    coupon_code: Optional[str] = None

    @property
    def amount(self) -> Money:
        return self.subtotal - self.discount


def quote_cart(
    lines: Iterable[CartLine],
    products: Dict[str, Product],
    coupon: Optional[Coupon],
    now: datetime,
    currency: str = "INR",
    custom_pack_prices: Iterable[Decimal] = (),
) -> PriceQuote:
    """
    Price a cart against the live catalog.

    Raises:
        PaymentValidationError: empty cart or tampered custom price
        ProductNotFound: a referenced product does not exist
        StockConflict: a product does not have enough stock right now
    """
    allowed_custom = {Decimal(str(p)) for p in custom_pack_prices}
    items: List[OrderItem] = []
    # Requested quantity per product across all lines
    requested: Dict[str, int] = {}

    for line in lines:
        if line.quantity < 1:
            raise PaymentValidationError(f"Invalid quantity: {line.quantity}")

        if line.is_custom:
            price = Decimal(str(line.custom_price))
            if price not in allowed_custom:
                raise PaymentValidationError(
                    f"Price tampering detected: custom price {price} not allowed",
                    custom_price=str(price),
                )
            items.append(
                OrderItem(
                    title=line.custom_title or DEFAULT_CUSTOM_TITLE,
                    price=Money(amount=price, currency=currency),
                    quantity=line.quantity,
                )
            )
            continue

        product = products.get(line.product_id)
        if product is None:
            raise ProductNotFound(
                f"Product {line.product_id} not found",
                product_id=line.product_id,
            )
        requested[product.product_id] = requested.get(product.product_id, 0) + line.quantity
        if not product.has_stock_for(requested[product.product_id]):
            raise StockConflict(
                f"Out of stock: {product.title} "
                f"(requested {requested[product.product_id]}, have {product.stock})",
                product_id=product.product_id,
            )
        items.append(
            OrderItem(
                title=product.title,
                price=Money(amount=product.price.amount, currency=currency),
                quantity=line.quantity,
                product_id=product.product_id,
            )
        )

    if not items:
        raise PaymentValidationError("Cart cannot be empty")

    subtotal = Money.zero(currency)
    for item in items:
        subtotal = subtotal + item.line_total()

    discount = Money.zero(currency)
    applied_code = None
    if coupon is not None and coupon.is_redeemable(now):
        discount = coupon.discount_for(subtotal, now)
        applied_code = coupon.code

    return PriceQuote(
        items=items,
        subtotal=subtotal,
        discount=discount,
        coupon_code=applied_code,
    )
