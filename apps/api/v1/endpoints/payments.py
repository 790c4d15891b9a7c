"""Payment confirmation endpoints for REST API."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse

from core.application.dtos.payment_dto import (
    ConfirmationResponse,
    VerifyPaymentRequest,
    WebhookAck,
)
from core.application.services.payment_confirmation_service import PaymentConfirmationService
from core.domain.errors import PaymentError, SignatureMismatch

from apps.api.deps import enforce_rate_limit, get_payment_confirmation_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/payments", tags=["payments"])


@router.post(
    "/verify",
    response_model=ConfirmationResponse,
    dependencies=[Depends(enforce_rate_limit)],
)
async def verify_payment(
    request: VerifyPaymentRequest,
    service: PaymentConfirmationService = Depends(get_payment_confirmation_service),
) -> ConfirmationResponse:
    """Buyer-redirect confirmation of a pending order.

    Args:
        request: Gateway order id, payment id and signature
        service: PaymentConfirmationService instance

    Returns:
        ConfirmationResponse (also for replays)
    """
    return await service.confirm_redirect(request)


@router.post("/webhook", response_model=WebhookAck)
async def payment_webhook(
    request: Request,
    x_razorpay_signature: Optional[str] = Header(default=None),
    service: PaymentConfirmationService = Depends(get_payment_confirmation_service),
):
    """Gateway webhook.

    2xx tells the gateway to stop redelivering: returned for processed,
    already processed and terminally rejected events. Signature failures
    get 400; transient failures get 503 so the gateway retries.
    """
    raw_body = await request.body()

    try:
        return await service.handle_webhook(raw_body, x_razorpay_signature)
    except SignatureMismatch as e:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=e.to_dict())
    except PaymentError as e:
        logger.error(f"Webhook failed, gateway will retry ({e.code}): {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=e.to_dict(),
        )
