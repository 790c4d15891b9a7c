"""Checkout endpoints for REST API."""

import logging

from fastapi import APIRouter, Depends

from core.application.dtos.checkout_dto import (
    CheckoutResponse,
    PlacePaidOrderRequest,
    StartCheckoutRequest,
)
from core.application.dtos.payment_dto import ConfirmationResponse
from core.application.services.checkout_service import CheckoutService

from apps.api.deps import enforce_rate_limit, get_checkout_service

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/checkout",
    tags=["checkout"],
    dependencies=[Depends(enforce_rate_limit)],
)


@router.post("", response_model=CheckoutResponse, status_code=201)
async def start_checkout(
    request: StartCheckoutRequest,
    service: CheckoutService = Depends(get_checkout_service),
) -> CheckoutResponse:
    """Create a pending order and the gateway order to pay against.

    Prices, stock and coupon are evaluated server-side.
    """
    return await service.start_checkout(request)


@router.post("/confirm", response_model=ConfirmationResponse)
async def place_paid_order(
    request: PlacePaidOrderRequest,
    service: CheckoutService = Depends(get_checkout_service),
) -> ConfirmationResponse:
    """Create and confirm an order in one step after a successful payment.

    Replays with the same gateway order id return the existing order.
    """
    return await service.place_paid_order(request)
