"""
Place Paid Order Use Case.

Combined create-and-confirm path: the buyer has already paid against a
gateway order and submits the cart together with the payment signature.
Nothing the client says about prices or discounts is trusted; the cart is
re-priced from the live catalog and the coupon is re-validated.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.interfaces import INotificationService
from core.application.use_cases.finalize_order import (
    FinalizeResult,
    dispatch_order_confirmation,
)
from core.data.uow import create_uow
from core.domain.clock import utcnow
from core.domain.entities.order import ConfirmationSource, CustomerDetails, Order
from core.domain.errors import (
    CouponConflict,
    InvalidStateTransition,
    StockConflict,
    TransientStoreFailure,
)
from core.domain.pricing import CartLine, PriceQuote, quote_cart
from core.domain.value_objects import ExecutionID
from core.infrastructure.security.signature_verifier import SignatureVerifier


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacePaidOrderCommand:
    """Input for the combined create-and-confirm path."""
    customer: CustomerDetails
    lines: List[CartLine]
    gateway_order_id: str
    payment_id: str
    signature: str
    coupon_code: Optional[str] = None


class PlacePaidOrderUseCase:
    """
    Create an order directly in the confirmed state.

    Idempotent on the gateway order id: a replay (or a concurrent duplicate
    that loses on the unique constraint) returns the existing order.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        verifier: SignatureVerifier,
        notification_service: INotificationService,
        currency: str = "INR",
        custom_pack_prices: Iterable = (),
        clock: Callable[[], datetime] = utcnow,
    ):
        self.session_factory = session_factory
        self.verifier = verifier
        self.notification_service = notification_service
        self.currency = currency
        self.custom_pack_prices = tuple(custom_pack_prices)
        self.clock = clock

    async def execute(self, command: PlacePaidOrderCommand) -> FinalizeResult:
        """
        Execute the create-and-confirm workflow.

        Raises:
            SignatureMismatch: payment signature does not verify
            PaymentValidationError: empty cart or tampered custom price
            ProductNotFound: a product no longer exists
            StockConflict: not enough stock (at quote time or in the transaction)
            CouponConflict: coupon exhausted between pricing and commit
            InvalidStateTransition: a non-confirmed order already uses this gateway order
            TransientStoreFailure: database error, nothing was committed
        """
        execution_id = ExecutionID.generate()
        gateway_order_id = command.gateway_order_id

        # ================================================================
        # STEP 1: Fraud gate
        # ================================================================
        self.verifier.verify_payment(gateway_order_id, command.payment_id, command.signature)

        logger.info(
            f"[{execution_id}] Placing paid order for {gateway_order_id} "
            f"({len(command.lines)} line(s))"
        )

        # ================================================================
        # STEP 2: Replay detection and server-side pricing
        # ================================================================
        now = self.clock()
        try:
            async with create_uow(self.session_factory, execution_id) as uow:
                existing = await uow.orders.find_by_gateway_order_id(gateway_order_id)
                if existing is None:
                    quote = await self._quote(uow, command, now)
        except SQLAlchemyError as e:
            raise TransientStoreFailure(
                f"Store failure pricing {gateway_order_id}",
                gateway_order_id=gateway_order_id,
            ) from e

        if existing is not None:
            return self._replay_result(execution_id, existing)

        if command.coupon_code and quote.coupon_code is None:
            logger.info(
                f"[{execution_id}] Coupon {command.coupon_code!r} not redeemable, "
                f"pricing without discount"
            )

        # ================================================================
        # STEP 3: One transaction, insert confirmed + stock + coupon
        # ================================================================
        order = Order.place(
            gateway_order_id=gateway_order_id,
            customer=command.customer,
            items=quote.items,
            discount_amount=quote.discount,
            coupon_code=quote.coupon_code,
        )
        order.mark_confirmed(command.payment_id, ConfirmationSource.CHECKOUT, execution_id)

        try:
            async with create_uow(self.session_factory, execution_id) as uow:
                await uow.orders.add(order)

                for item in order.catalog_items():
                    if not await uow.products.decrement_stock(item.product_id, item.quantity):
                        logger.error(
                            f"[{execution_id}] ❌ Stock conflict on {item.product_id}, rolling back"
                        )
                        raise StockConflict(
                            f"Insufficient stock for {item.title}",
                            product_id=item.product_id,
                        )

                if order.coupon_code:
                    if not await uow.coupons.increment_usage(order.coupon_code):
                        raise CouponConflict(
                            f"Coupon {order.coupon_code} usage limit reached",
                            coupon_code=order.coupon_code,
                        )

                await uow.events.append_all(order.get_domain_events())
                await uow.commit()
        except IntegrityError as e:
            logger.warning(
                f"[{execution_id}] Duplicate insert for {gateway_order_id}, re-reading"
            )
            return await self._resolve_duplicate(execution_id, gateway_order_id, e)
        except SQLAlchemyError as e:
            logger.error(f"[{execution_id}] ❌ Store failure placing {gateway_order_id}: {e}")
            raise TransientStoreFailure(
                f"Store failure placing {gateway_order_id}",
                gateway_order_id=gateway_order_id,
            ) from e

        order.clear_domain_events()
        logger.info(
            f"[{execution_id}] ✅ Order {order.order_id} placed and confirmed "
            f"(amount={order.amount}, discount={order.discount_amount})"
        )

        await dispatch_order_confirmation(self.notification_service, order, execution_id)

        return FinalizeResult(
            order_id=order.order_id,
            status=order.status,
            already_confirmed=False,
        )

    async def _quote(self, uow, command: PlacePaidOrderCommand, now: datetime) -> PriceQuote:
        product_ids = [line.product_id for line in command.lines if not line.is_custom]
        products = await uow.products.find_many(product_ids)
        coupon = (
            await uow.coupons.find_by_code(command.coupon_code)
            if command.coupon_code
            else None
        )
        return quote_cart(
            command.lines,
            products,
            coupon,
            now,
            currency=self.currency,
            custom_pack_prices=self.custom_pack_prices,
        )

    def _replay_result(self, execution_id: ExecutionID, existing: Order) -> FinalizeResult:
        if not existing.is_confirmed():
            raise InvalidStateTransition(
                f"Order {existing.order_id} for {existing.gateway_order_id} is "
                f"{existing.status.value}",
                order_id=existing.order_id,
                status=existing.status.value,
            )
        logger.info(
            f"[{execution_id}] Order {existing.order_id} already placed "
            f"({existing.status.value}), nothing to do"
        )
        return FinalizeResult(
            order_id=existing.order_id,
            status=existing.status,
            already_confirmed=True,
        )

    async def _resolve_duplicate(
        self,
        execution_id: ExecutionID,
        gateway_order_id: str,
        cause: IntegrityError,
    ) -> FinalizeResult:
        try:
            async with create_uow(self.session_factory, execution_id) as uow:
                existing = await uow.orders.find_by_gateway_order_id(gateway_order_id)
        except SQLAlchemyError as e:
            raise TransientStoreFailure(
                f"Store failure re-reading {gateway_order_id}",
                gateway_order_id=gateway_order_id,
            ) from e

        if existing is None:
            raise TransientStoreFailure(
                f"Integrity error placing {gateway_order_id}",
                gateway_order_id=gateway_order_id,
            ) from cause
        return self._replay_result(execution_id, existing)
