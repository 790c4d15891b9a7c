"""
Confirmation ingress.

Both confirmation paths land here: the buyer's redirect ("verify now") and
the gateway's webhook. Each is authenticated with its own signature scheme
and then handed to the same finalizer.
"""
from typing import Optional
import logging

from pydantic import ValidationError

from core.application.dtos.payment_dto import (
    ConfirmationResponse,
    VerifyPaymentRequest,
    WebhookAck,
    WebhookEvent,
)
from core.application.use_cases.finalize_order import (
    FinalizeOrderUseCase,
    PaymentConfirmation,
)
from core.domain.entities.order import ConfirmationSource
from core.domain.errors import PaymentError, PaymentValidationError, SignatureMismatch
from core.infrastructure.security.signature_verifier import SignatureVerifier


logger = logging.getLogger(__name__)

HANDLED_WEBHOOK_EVENTS = frozenset({"payment.captured", "order.paid"})


class PaymentConfirmationService:
    """Authenticates confirmation signals and forwards them to the finalizer."""

    def __init__(self, finalizer: FinalizeOrderUseCase, verifier: SignatureVerifier) -> None:
        self._finalizer = finalizer
        self._verifier = verifier

    async def confirm_redirect(self, request: VerifyPaymentRequest) -> ConfirmationResponse:
        """
        Buyer-redirect confirmation.

        Raises:
            SignatureMismatch: signature does not verify
            PaymentError: any finalize failure
        """
        self._verifier.verify_payment(
            request.razorpay_order_id,
            request.razorpay_payment_id,
            request.razorpay_signature,
        )

        result = await self._finalizer.execute(
            PaymentConfirmation(
                gateway_order_id=request.razorpay_order_id,
                payment_id=request.razorpay_payment_id,
                source=ConfirmationSource.REDIRECT,
            )
        )
        return ConfirmationResponse(
            order_id=result.order_id,
            status=result.status.value,
            already_confirmed=result.already_confirmed,
        )

    async def handle_webhook(self, raw_body: bytes, signature: Optional[str]) -> WebhookAck:
        """
        Gateway webhook.

        The signature is checked over the raw bytes before anything is parsed.
        Terminal outcomes are acknowledged so the gateway stops redelivering;
        only signature failures and retryable errors propagate.

        Raises:
            SignatureMismatch: header missing or wrong
            PaymentError: retryable failure (gateway or store unavailable)
        """
        self._verifier.verify_webhook(raw_body, signature)

        try:
            return await self._process_webhook(raw_body)
        except SignatureMismatch:
            raise
        except PaymentError as e:
            if e.retryable:
                logger.warning(f"Webhook processing deferred ({e.code}): {e}")
                raise
            logger.warning(f"Webhook acknowledged without effect ({e.code}): {e}")
            return WebhookAck(
                status="ignored",
                order_id=e.context.get("order_id"),
                reason=e.code,
            )

    async def _process_webhook(self, raw_body: bytes) -> WebhookAck:
        try:
            event = WebhookEvent.model_validate_json(raw_body)
        except ValidationError as e:
            raise PaymentValidationError(f"Malformed webhook body: {e.error_count()} error(s)") from e

        if event.event not in HANDLED_WEBHOOK_EVENTS:
            logger.info(f"Webhook event {event.event!r} ignored")
            return WebhookAck(status="ignored", reason="UNHANDLED_EVENT")

        payment = event.payload.payment.entity if event.payload.payment else None
        if payment is None or not payment.order_id:
            raise PaymentValidationError(f"Webhook {event.event} carries no payment order id")

        logger.info(f"Webhook {event.event}: payment={payment.id} order={payment.order_id}")

        result = await self._finalizer.execute(
            PaymentConfirmation(
                gateway_order_id=payment.order_id,
                payment_id=payment.id,
                source=ConfirmationSource.WEBHOOK,
                captured_amount_minor=payment.amount,
            )
        )
        return WebhookAck(
            status="already_processed" if result.already_confirmed else "processed",
            order_id=result.order_id,
        )
