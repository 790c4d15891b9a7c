"""
Unit tests for server-side cart pricing and coupon rules.
"""
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from core.domain.entities.catalog import Coupon, DiscountType, Product
from core.domain.errors import PaymentValidationError, ProductNotFound, StockConflict
from core.domain.pricing import DEFAULT_CUSTOM_TITLE, CartLine, quote_cart
from core.domain.value_objects import Money

NOW = datetime(2025, 1, 15, 12, 0, 0)
CUSTOM_PRICES = (Decimal("249"), Decimal("399"), Decimal("799"))


@pytest.fixture
def products():
    return {
        "prod-1": Product("prod-1", "Holographic Sticker Pack", Money(Decimal("499.00")), stock=5),
        "prod-2": Product("prod-2", "Laptop Skin", Money(Decimal("150.50")), stock=1),
    }


def _coupon(**overrides) -> Coupon:
    fields = dict(
        code="save10",
        discount_type=DiscountType.PERCENTAGE,
        value=Decimal("10"),
        end_date=NOW + timedelta(days=30),
    )
    fields.update(overrides)
    return Coupon(**fields)


def test_prices_come_from_catalog(products):
    quote = quote_cart(
        [CartLine(quantity=2, product_id="prod-1"), CartLine(quantity=1, product_id="prod-2")],
        products,
        None,
        NOW,
    )

    assert quote.subtotal == Money(Decimal("1148.50"))
    assert quote.discount.is_zero()
    assert quote.amount == quote.subtotal
    assert quote.coupon_code is None
    assert [item.product_id for item in quote.items] == ["prod-1", "prod-2"]


def test_percentage_coupon(products):
    quote = quote_cart([CartLine(quantity=2, product_id="prod-1")], products, _coupon(), NOW)

    assert quote.discount == Money(Decimal("99.80"))
    assert quote.amount == Money(Decimal("898.20"))
    assert quote.coupon_code == "SAVE10"


def test_fixed_coupon_is_capped_at_subtotal(products):
    coupon = _coupon(discount_type=DiscountType.FIXED, value=Decimal("1000"))
    quote = quote_cart([CartLine(quantity=1, product_id="prod-2")], products, coupon, NOW)

    assert quote.discount == Money(Decimal("150.50"))
    assert quote.amount.is_zero()


@pytest.mark.parametrize(
    "overrides",
    [
        {"usage_limit": 3, "used_count": 3},
        {"end_date": NOW - timedelta(seconds=1)},
        {"is_active": False},
    ],
    ids=["exhausted", "expired", "inactive"],
)
def test_unredeemable_coupon_gives_no_discount(products, overrides):
    quote = quote_cart([CartLine(quantity=1, product_id="prod-1")], products, _coupon(**overrides), NOW)

    assert quote.discount.is_zero()
    assert quote.coupon_code is None


def test_coupon_code_is_normalized():
    assert _coupon(code="  summer25 ").code == "SUMMER25"


def test_coupon_usage_invariant():
    with pytest.raises(ValueError):
        _coupon(usage_limit=1, used_count=2)


def test_custom_pack_at_allowed_price(products):
    quote = quote_cart(
        [CartLine(quantity=2, custom_price=Decimal("399"))],
        products,
        None,
        NOW,
        custom_pack_prices=CUSTOM_PRICES,
    )

    (item,) = quote.items
    assert item.product_id is None
    assert item.title == DEFAULT_CUSTOM_TITLE
    assert quote.amount == Money(Decimal("798.00"))


def test_custom_pack_price_tampering_rejected(products):
    with pytest.raises(PaymentValidationError):
        quote_cart(
            [CartLine(quantity=1, custom_price=Decimal("1"))],
            products,
            None,
            NOW,
            custom_pack_prices=CUSTOM_PRICES,
        )


def test_unknown_product(products):
    with pytest.raises(ProductNotFound) as exc_info:
        quote_cart([CartLine(quantity=1, product_id="missing")], products, None, NOW)
    assert exc_info.value.context["product_id"] == "missing"


def test_insufficient_stock(products):
    with pytest.raises(StockConflict):
        quote_cart([CartLine(quantity=2, product_id="prod-2")], products, None, NOW)


def test_empty_cart(products):
    with pytest.raises(PaymentValidationError):
        quote_cart([], products, None, NOW)


def test_non_positive_quantity(products):
    with pytest.raises(PaymentValidationError):
        quote_cart([CartLine(quantity=0, product_id="prod-1")], products, None, NOW)


def test_stock_checked_against_total_across_lines(products):
    lines = [CartLine(quantity=1, product_id="prod-2"), CartLine(quantity=1, product_id="prod-2")]

    with pytest.raises(StockConflict) as exc_info:
        quote_cart(lines, products, None, NOW)
    assert exc_info.value.context["product_id"] == "prod-2"


def test_repeated_lines_within_stock(products):
    lines = [CartLine(quantity=2, product_id="prod-1"), CartLine(quantity=3, product_id="prod-1")]

    quote = quote_cart(lines, products, None, NOW)

    assert [item.quantity for item in quote.items] == [2, 3]
    assert quote.amount == Money(Decimal("2495.00"))
