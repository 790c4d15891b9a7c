"""
Finalize Order Use Case.

Turns a verified payment confirmation into exactly one state transition.

Flow:
1. Look up the order by gateway order id
2. Replay on an already confirmed order -> success, no mutation
3. Enforce the payment window
4. Cross-check the amount with the gateway (no transaction held open)
5. One transaction: status compare-and-set, stock decrements, coupon
   redemption, event append
6. Notify the buyer once, after commit

Callers must have verified the confirmation's signature already.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.interfaces import INotificationService, IPaymentGateway
from core.data.uow import UnitOfWork, create_uow
from core.domain.clock import utcnow
from core.domain.entities.order import (
    CONFIRMATION_TARGET_STATUS,
    CONFIRMED_STATUSES,
    ConfirmationSource,
    Order,
    OrderStatus,
)
from core.domain.errors import (
    AmountMismatch,
    CouponConflict,
    InvalidStateTransition,
    OrderNotFound,
    StockConflict,
    TransientStoreFailure,
)
from core.domain.value_objects import ExecutionID


logger = logging.getLogger(__name__)

AMOUNT_MISMATCH_SEVERITY = 90


# =============================================================================
# REQUEST / RESPONSE (Application Layer)
# =============================================================================

@dataclass(frozen=True)
class PaymentConfirmation:
    """
    A signature-verified claim that a gateway order was paid.

    ``captured_amount_minor`` is set when the ingress itself reports the
    captured amount (webhook payment entity).
    """
    gateway_order_id: str
    payment_id: str
    source: ConfirmationSource
    captured_amount_minor: Optional[int] = None


@dataclass(frozen=True)
class FinalizeResult:
    """Outcome of a confirmation that did not fail."""
    order_id: str
    status: OrderStatus
    already_confirmed: bool


# =============================================================================
# NOTIFICATION DISPATCH
# =============================================================================

async def dispatch_order_confirmation(
    notification_service: INotificationService,
    order: Order,
    execution_id: ExecutionID,
) -> None:
    """
    Hand the confirmation to the notifier.

    Runs after commit. A notifier failure never changes the outcome of the
    confirmation, it is only logged.
    """
    items = [
        {
            "title": item.title,
            "quantity": item.quantity,
            "price": str(item.price.amount),
        }
        for item in order.items
    ]
    try:
        sent = await notification_service.send_order_confirmation(
            order_id=order.order_id,
            recipient=order.customer.email,
            customer_name=order.customer.name,
            amount=str(order.amount),
            items=items,
        )
        if not sent:
            logger.warning(f"[{execution_id}] Order confirmation not sent for {order.order_id}")
    except Exception as e:
        logger.error(
            f"[{execution_id}] ❌ Notifier failed for order {order.order_id}: {e}",
            exc_info=True,
        )


# =============================================================================
# USE CASE
# =============================================================================

class FinalizeOrderUseCase:
    """
    Idempotent PENDING -> PROCESSING transition for a paid order.

    Any number of confirmations for the same order, from either ingress and
    in any interleaving, produce at most one transition, one set of stock
    decrements, one coupon redemption and one notification.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        gateway: IPaymentGateway,
        notification_service: INotificationService,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Initialize use case with dependencies.

        Args:
            session_factory: SQLAlchemy async session factory
            gateway: Payment gateway for the amount cross-check
            notification_service: Buyer notifications and operator alerts
            clock: Source of "now" (naive UTC)
        """
        self.session_factory = session_factory
        self.gateway = gateway
        self.notification_service = notification_service
        self.clock = clock

    async def execute(self, confirmation: PaymentConfirmation) -> FinalizeResult:
        """
        Execute the finalize workflow.

        Raises:
            OrderNotFound: no order for the gateway order id
            InvalidStateTransition: order is CANCELLED, DELIVERED, ...
            OrderExpired: payment window has passed
            AmountMismatch: gateway amount differs from the order amount
            GatewayUnavailable: gateway lookup failed
            StockConflict: a product ran out before this order could claim it
            CouponConflict: the coupon's usage limit was reached meanwhile
            TransientStoreFailure: database error, nothing was committed
        """
        execution_id = ExecutionID.generate()
        gateway_order_id = confirmation.gateway_order_id

        logger.info(
            f"[{execution_id}] Finalizing {gateway_order_id} "
            f"(payment={confirmation.payment_id}, source={confirmation.source.value})"
        )

        # ================================================================
        # STEP 1-3: Lookup, replay detection, expiry
        # ================================================================
        order = await self._load_order(execution_id, gateway_order_id)

        if not order.check_confirmable(self.clock()):
            logger.info(
                f"[{execution_id}] Order {order.order_id} already {order.status.value}, "
                f"nothing to do"
            )
            return FinalizeResult(
                order_id=order.order_id,
                status=order.status,
                already_confirmed=True,
            )

        # ================================================================
        # STEP 4: Amount cross-check against the gateway
        # ================================================================
        await self._verify_amount(execution_id, order, confirmation)

        # ================================================================
        # STEP 5: Atomic transition
        # ================================================================
        try:
            async with create_uow(self.session_factory, execution_id) as uow:
                applied = await self._apply(uow, order, confirmation)
                if not applied:
                    status = order.status
                    logger.info(
                        f"[{execution_id}] Lost the race for {order.order_id}, "
                        f"already {status.value}"
                    )
                    return FinalizeResult(
                        order_id=order.order_id,
                        status=status,
                        already_confirmed=True,
                    )
                await uow.commit()
        except SQLAlchemyError as e:
            logger.error(f"[{execution_id}] ❌ Store failure finalizing {order.order_id}: {e}")
            raise TransientStoreFailure(
                f"Store failure finalizing {order.order_id}",
                order_id=order.order_id,
            ) from e

        logger.info(
            f"[{execution_id}] ✅ Order {order.order_id} confirmed "
            f"(payment={confirmation.payment_id}, amount={order.amount})"
        )

        # ================================================================
        # STEP 6: Notify once, after commit
        # ================================================================
        await dispatch_order_confirmation(self.notification_service, order, execution_id)

        return FinalizeResult(
            order_id=order.order_id,
            status=order.status,
            already_confirmed=False,
        )

    async def _load_order(self, execution_id: ExecutionID, gateway_order_id: str) -> Order:
        try:
            async with create_uow(self.session_factory, execution_id) as uow:
                order = await uow.orders.find_by_gateway_order_id(gateway_order_id)
        except SQLAlchemyError as e:
            raise TransientStoreFailure(
                f"Store failure loading {gateway_order_id}",
                gateway_order_id=gateway_order_id,
            ) from e

        if order is None:
            logger.warning(f"[{execution_id}] No order for gateway order {gateway_order_id}")
            raise OrderNotFound(
                f"Order not found for gateway order {gateway_order_id}",
                gateway_order_id=gateway_order_id,
            )
        return order

    async def _verify_amount(
        self,
        execution_id: ExecutionID,
        order: Order,
        confirmation: PaymentConfirmation,
    ) -> None:
        expected_minor = order.amount.to_minor_units()

        gateway_order = await self.gateway.fetch_order(order.gateway_order_id)
        if gateway_order.amount_minor != expected_minor:
            await self._alert_amount_mismatch(
                execution_id, order, expected_minor, gateway_order.amount_minor, "gateway order"
            )

        captured = confirmation.captured_amount_minor
        if captured is not None and captured != expected_minor:
            await self._alert_amount_mismatch(
                execution_id, order, expected_minor, captured, "captured payment"
            )

    async def _alert_amount_mismatch(
        self,
        execution_id: ExecutionID,
        order: Order,
        expected_minor: int,
        actual_minor: int,
        origin: str,
    ) -> None:
        message = (
            f"Amount mismatch on order {order.order_id} ({order.gateway_order_id}): "
            f"expected {expected_minor}, {origin} reported {actual_minor}"
        )
        logger.critical(f"[{execution_id}] 🚨 {message}")
        try:
            await self.notification_service.notify(message, severity=AMOUNT_MISMATCH_SEVERITY)
        except Exception as e:
            logger.error(f"[{execution_id}] Failed to send amount mismatch alert: {e}")

        raise AmountMismatch(
            expected_minor=expected_minor,
            actual_minor=actual_minor,
            order_id=order.order_id,
        )

    async def _apply(
        self,
        uow: UnitOfWork,
        order: Order,
        confirmation: PaymentConfirmation,
    ) -> bool:
        """
        Run the transition inside ``uow``.

        Returns:
            True if this call performed the transition, False if a concurrent
            confirmation got there first (``order.status`` is refreshed).
        """
        execution_id = uow.execution_id

        # a. Status compare-and-set
        transitioned = await uow.orders.transition_status(
            order.order_id,
            from_status=OrderStatus.PENDING,
            to_status=CONFIRMATION_TARGET_STATUS,
            payment_id=confirmation.payment_id,
        )
        if not transitioned:
            current = await uow.orders.get_status(order.order_id)
            if current in CONFIRMED_STATUSES:
                order.status = current
                return False
            raise InvalidStateTransition(
                f"Order {order.order_id} moved to {current.value if current else 'nowhere'} "
                f"during confirmation",
                order_id=order.order_id,
            )

        # b. Stock, catalog items only
        for item in order.catalog_items():
            if not await uow.products.decrement_stock(item.product_id, item.quantity):
                logger.error(
                    f"[{execution_id}] ❌ Stock conflict on {item.product_id} "
                    f"(order {order.order_id}, qty {item.quantity}), rolling back"
                )
                raise StockConflict(
                    f"Insufficient stock for {item.title}",
                    order_id=order.order_id,
                    product_id=item.product_id,
                )

        # c. Coupon redemption
        if order.coupon_code:
            if not await uow.coupons.increment_usage(order.coupon_code):
                logger.error(
                    f"[{execution_id}] ❌ Coupon {order.coupon_code} exhausted "
                    f"(order {order.order_id}), rolling back"
                )
                raise CouponConflict(
                    f"Coupon {order.coupon_code} usage limit reached",
                    order_id=order.order_id,
                    coupon_code=order.coupon_code,
                )

        # d. Audit trail
        order.mark_confirmed(confirmation.payment_id, confirmation.source, execution_id)
        await uow.events.append_all(order.get_domain_events())
        order.clear_domain_events()
        return True
