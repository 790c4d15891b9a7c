"""Exception handlers translating domain errors to HTTP responses."""

import logging
from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.domain.errors import (
    AmountMismatch,
    CouponConflict,
    GatewayUnavailable,
    InvalidStateTransition,
    NotFound,
    OrderExpired,
    PaymentError,
    PaymentValidationError,
    SignatureMismatch,
    StockConflict,
    TransientStoreFailure,
)

logger = logging.getLogger(__name__)

# Status codes for buyer-facing endpoints. The webhook maps its own.
BUYER_STATUS_CODES: Dict[Type[PaymentError], int] = {
    PaymentValidationError: status.HTTP_400_BAD_REQUEST,
    SignatureMismatch: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    InvalidStateTransition: status.HTTP_409_CONFLICT,
    OrderExpired: status.HTTP_410_GONE,
    AmountMismatch: status.HTTP_400_BAD_REQUEST,
    StockConflict: status.HTTP_409_CONFLICT,
    CouponConflict: status.HTTP_409_CONFLICT,
    GatewayUnavailable: status.HTTP_502_BAD_GATEWAY,
    TransientStoreFailure: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_code_for(exc: PaymentError) -> int:
    """Most specific mapped status for ``exc``, 500 if unmapped."""
    for klass in type(exc).__mro__:
        if klass in BUYER_STATUS_CODES:
            return BUYER_STATUS_CODES[klass]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def payment_error_handler(request: Request, exc: PaymentError) -> JSONResponse:
    """Handle PaymentError exceptions.

    Only the stable code and the buyer-safe message leave the process.
    """
    status_code = status_code_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(f"{request.method} {request.url.path} -> {status_code} {exc.code}: {exc}")

    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body validation errors without echoing field internals."""
    logger.warning(f"{request.method} {request.url.path} -> 400 invalid body ({len(exc.errors())} error(s))")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=PaymentValidationError().to_dict(),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle general exceptions.

    Args:
        request: FastAPI request
        exc: Exception

    Returns:
        JSONResponse with error details
    """
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PaymentError, payment_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, general_exception_handler)
