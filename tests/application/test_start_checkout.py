"""
Tests for checkout initiation.
"""
from datetime import timedelta
from decimal import Decimal

import pytest

from core.application.use_cases.start_checkout import (
    StartCheckoutCommand,
    StartCheckoutUseCase,
)
from core.domain.entities.order import OrderStatus
from core.domain.errors import GatewayUnavailable, PaymentValidationError, StockConflict
from core.domain.pricing import CartLine
from core.domain.value_objects import Money

from tests.support import CUSTOMER, FIXED_NOW


@pytest.fixture
def use_case(session_factory, gateway):
    return StartCheckoutUseCase(
        session_factory,
        gateway,
        payment_window=timedelta(minutes=15),
        custom_pack_prices=(Decimal("249"),),
        clock=lambda: FIXED_NOW,
    )


@pytest.mark.asyncio
async def test_creates_pending_order_and_gateway_order(use_case, seed, gateway):
    await seed.product(stock=10)
    await seed.coupon()

    order = await use_case.execute(
        StartCheckoutCommand(
            customer=CUSTOMER,
            lines=[CartLine(quantity=2, product_id="prod-1")],
            coupon_code="SAVE10",
        )
    )

    assert order.status == OrderStatus.PENDING
    assert order.amount == Money(Decimal("898.20"))
    assert order.expires_at == FIXED_NOW + timedelta(minutes=15)

    gateway_order = gateway.orders[order.gateway_order_id]
    assert gateway_order.amount_minor == 89820
    assert gateway_order.notes["receipt"] == order.order_id

    stored = await seed.order(order.order_id)
    assert stored.status == OrderStatus.PENDING
    assert stored.coupon_code == "SAVE10"
    assert [e["event_type"] for e in await seed.events(order.order_id)] == ["OrderPlacedEvent"]

    # Nothing is reserved until payment is confirmed
    assert await seed.stock() == 10
    assert await seed.coupon_used() == 0


@pytest.mark.asyncio
async def test_amount_below_gateway_minimum(use_case, seed, gateway):
    await seed.product(price="0.50")

    with pytest.raises(PaymentValidationError):
        await use_case.execute(
            StartCheckoutCommand(customer=CUSTOMER, lines=[CartLine(quantity=1, product_id="prod-1")])
        )

    assert gateway.orders == {}


@pytest.mark.asyncio
async def test_out_of_stock(use_case, seed, gateway):
    await seed.product(stock=0)

    with pytest.raises(StockConflict):
        await use_case.execute(
            StartCheckoutCommand(customer=CUSTOMER, lines=[CartLine(quantity=1, product_id="prod-1")])
        )

    assert gateway.orders == {}


@pytest.mark.asyncio
async def test_repeated_lines_exceeding_stock(use_case, seed, gateway):
    await seed.product(stock=1)
    lines = [CartLine(quantity=1, product_id="prod-1"), CartLine(quantity=1, product_id="prod-1")]

    with pytest.raises(StockConflict):
        await use_case.execute(StartCheckoutCommand(customer=CUSTOMER, lines=lines))

    assert gateway.orders == {}
    assert await seed.stock() == 1


@pytest.mark.asyncio
async def test_gateway_unavailable(use_case, seed, gateway):
    await seed.product()
    gateway.available = False

    with pytest.raises(GatewayUnavailable):
        await use_case.execute(
            StartCheckoutCommand(customer=CUSTOMER, lines=[CartLine(quantity=1, product_id="prod-1")])
        )
