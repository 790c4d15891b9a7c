"""Test support: constants, seed helpers and scripted collaborators."""

import asyncio
import json
from datetime import datetime, timedelta
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from core.application.interfaces import GatewayOrder
from core.data.uow import create_uow
from core.domain.clock import utcnow
from core.domain.entities.catalog import Coupon, DiscountType, Product
from core.domain.entities.order import CustomerDetails, Order, OrderItem, OrderStatus
from core.domain.value_objects import Money
from core.infrastructure.adapters.gateway.mock_gateway import MockPaymentGateway
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService


KEY_SECRET = "test_key_secret"
WEBHOOK_SECRET = "test_webhook_secret"
TEST_KEY_ID = "rzp_test_key"

FIXED_NOW = datetime(2025, 1, 15, 12, 0, 0)

CUSTOMER = CustomerDetails(
    name="Asha Rao",
    email="asha@example.com",
    phone="9876543210",
    address="12 MG Road, Bengaluru",
)

# (product_id or None, title, price, quantity)
ItemSpec = Tuple[Optional[str], str, str, int]


class Seeder:
    """Writes fixtures through the real repositories and reads state back."""

    def __init__(self, session_factory):
        self.session_factory = session_factory

    async def product(
        self,
        product_id: str = "prod-1",
        price: str = "499.00",
        stock: int = 10,
        title: str = "Holographic Sticker Pack",
    ) -> Product:
        product = Product(
            product_id=product_id,
            title=title,
            price=Money(Decimal(price)),
            stock=stock,
        )
        async with create_uow(self.session_factory) as uow:
            await uow.products.add(product)
            await uow.commit()
        return product

    async def coupon(
        self,
        code: str = "SAVE10",
        discount_type: DiscountType = DiscountType.PERCENTAGE,
        value: str = "10",
        usage_limit: Optional[int] = None,
        used_count: int = 0,
        is_active: bool = True,
        end_date: Optional[datetime] = None,
    ) -> Coupon:
        coupon = Coupon(
            code=code,
            discount_type=discount_type,
            value=Decimal(value),
            end_date=end_date or utcnow() + timedelta(days=365),
            usage_limit=usage_limit,
            used_count=used_count,
            is_active=is_active,
        )
        async with create_uow(self.session_factory) as uow:
            await uow.coupons.add(coupon)
            await uow.commit()
        return coupon

    async def pending_order(
        self,
        gateway_order_id: str = "order_TEST001",
        items: Sequence[ItemSpec] = (("prod-1", "Holographic Sticker Pack", "499.00", 1),),
        discount: str = "0",
        coupon_code: Optional[str] = None,
        expires_at: Optional[datetime] = None,
        status: OrderStatus = OrderStatus.PENDING,
    ) -> Order:
        order = Order.place(
            gateway_order_id=gateway_order_id,
            customer=CUSTOMER,
            items=[
                OrderItem(
                    title=title,
                    price=Money(Decimal(price)),
                    quantity=quantity,
                    product_id=product_id,
                )
                for product_id, title, price, quantity in items
            ],
            discount_amount=Money(Decimal(discount)),
            coupon_code=coupon_code,
            expires_at=expires_at or utcnow() + timedelta(minutes=15),
        )
        order.status = status
        async with create_uow(self.session_factory) as uow:
            await uow.orders.add(order)
            await uow.commit()
        order.clear_domain_events()
        return order

    async def stock(self, product_id: str = "prod-1") -> int:
        async with create_uow(self.session_factory) as uow:
            products = await uow.products.find_many([product_id])
            return products[product_id].stock

    async def coupon_used(self, code: str = "SAVE10") -> int:
        async with create_uow(self.session_factory) as uow:
            coupon = await uow.coupons.find_by_code(code)
            return coupon.used_count

    async def order(self, order_id: str) -> Optional[Order]:
        async with create_uow(self.session_factory) as uow:
            return await uow.orders.find_by_id(order_id)

    async def order_by_gateway_id(self, gateway_order_id: str) -> Optional[Order]:
        async with create_uow(self.session_factory) as uow:
            return await uow.orders.find_by_gateway_order_id(gateway_order_id)

    async def events(self, order_id: str) -> List[dict]:
        async with create_uow(self.session_factory) as uow:
            return await uow.events.get_events(order_id)


# =============================================================================
# SCRIPTED COLLABORATORS
# =============================================================================

class SignallingNotifier(MockNotificationService):
    """Records like the mock and sets ``sent`` after every confirmation."""

    def __init__(self):
        super().__init__()
        self.sent = asyncio.Event()

    async def send_order_confirmation(self, order_id, recipient, customer_name, amount, items) -> bool:
        result = await super().send_order_confirmation(
            order_id=order_id,
            recipient=recipient,
            customer_name=customer_name,
            amount=amount,
            items=items,
        )
        self.sent.set()
        return result


class SequencedGateway(MockPaymentGateway):
    """
    Lets the first fetch through; every later fetch waits for ``release``.

    Paired with SignallingNotifier.sent, the second confirmation only reaches
    its transaction after the first one has committed.
    """

    def __init__(self, release: asyncio.Event):
        super().__init__()
        self._release = release
        self._first = True

    async def fetch_order(self, gateway_order_id: str) -> GatewayOrder:
        if self._first:
            self._first = False
        else:
            await asyncio.wait_for(self._release.wait(), timeout=5)
        return await super().fetch_order(gateway_order_id)


def webhook_body(
    gateway_order_id: str,
    payment_id: str = "pay_TEST001",
    amount: Optional[int] = 49900,
    event: str = "payment.captured",
) -> bytes:
    entity = {
        "id": payment_id,
        "entity": "payment",
        "order_id": gateway_order_id,
        "currency": "INR",
        "status": "captured",
    }
    if amount is not None:
        entity["amount"] = amount
    return json.dumps({
        "entity": "event",
        "event": event,
        "payload": {"payment": {"entity": entity}},
    }).encode("utf-8")
