"""
Start Checkout Use Case.

Creates the PENDING order a later confirmation will finalize: prices the
cart server-side, opens a gateway order for the exact amount and stores
the order with a payment window.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Iterable, List, Optional
import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.interfaces import IPaymentGateway
from core.data.uow import create_uow
from core.domain.clock import utcnow
from core.domain.entities.order import CustomerDetails, Order
from core.domain.errors import PaymentValidationError, TransientStoreFailure
from core.domain.pricing import CartLine, quote_cart
from core.domain.value_objects import ExecutionID


logger = logging.getLogger(__name__)

# Smallest amount the gateway accepts, in minor units
MIN_GATEWAY_AMOUNT_MINOR = 100


@dataclass(frozen=True)
class StartCheckoutCommand:
    """Input for checkout initiation."""
    customer: CustomerDetails
    lines: List[CartLine]
    coupon_code: Optional[str] = None


class StartCheckoutUseCase:
    """Price a cart, open a gateway order and persist a PENDING order."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        gateway: IPaymentGateway,
        currency: str = "INR",
        payment_window: timedelta = timedelta(minutes=15),
        custom_pack_prices: Iterable = (),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session_factory = session_factory
        self.gateway = gateway
        self.currency = currency
        self.payment_window = payment_window
        self.custom_pack_prices = tuple(custom_pack_prices)
        self.clock = clock

    async def execute(self, command: StartCheckoutCommand) -> Order:
        """
        Execute checkout initiation.

        Returns:
            The persisted PENDING order

        Raises:
            PaymentValidationError: empty cart, tampered custom price, amount too small
            ProductNotFound: a product does not exist
            StockConflict: not enough stock right now
            GatewayUnavailable: gateway order could not be created
            TransientStoreFailure: database error
        """
        execution_id = ExecutionID.generate()
        now = self.clock()

        logger.info(f"[{execution_id}] Starting checkout ({len(command.lines)} line(s))")

        try:
            async with create_uow(self.session_factory, execution_id) as uow:
                product_ids = [line.product_id for line in command.lines if not line.is_custom]
                products = await uow.products.find_many(product_ids)
                coupon = (
                    await uow.coupons.find_by_code(command.coupon_code)
                    if command.coupon_code
                    else None
                )
        except SQLAlchemyError as e:
            raise TransientStoreFailure("Store failure loading catalog") from e

        quote = quote_cart(
            command.lines,
            products,
            coupon,
            now,
            currency=self.currency,
            custom_pack_prices=self.custom_pack_prices,
        )

        amount_minor = quote.amount.to_minor_units()
        if amount_minor < MIN_GATEWAY_AMOUNT_MINOR:
            raise PaymentValidationError(
                f"Order amount {quote.amount} is below the gateway minimum",
                amount_minor=amount_minor,
            )

        order_id = str(uuid.uuid4())
        gateway_order = await self.gateway.create_order(
            amount_minor=amount_minor,
            currency=self.currency,
            receipt=order_id,
            notes={"order_id": order_id, "email": command.customer.email},
        )

        order = Order.place(
            gateway_order_id=gateway_order.gateway_order_id,
            customer=command.customer,
            items=quote.items,
            discount_amount=quote.discount,
            coupon_code=quote.coupon_code,
            expires_at=now + self.payment_window,
            order_id=order_id,
        )

        try:
            async with create_uow(self.session_factory, execution_id) as uow:
                await uow.orders.add(order)
                await uow.events.append_all(order.get_domain_events())
                await uow.commit()
        except SQLAlchemyError as e:
            logger.error(f"[{execution_id}] ❌ Store failure saving order {order_id}: {e}")
            raise TransientStoreFailure(
                f"Store failure saving order {order_id}",
                order_id=order_id,
            ) from e

        order.clear_domain_events()
        logger.info(
            f"[{execution_id}] ✅ Pending order {order.order_id} created "
            f"(gateway={order.gateway_order_id}, amount={order.amount}, "
            f"expires={order.expires_at.isoformat()})"
        )
        return order
