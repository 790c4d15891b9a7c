"""FastAPI dependencies for dependency injection.

Long-lived collaborators are built lazily once per process. Tests replace
them through ``app.dependency_overrides`` or ``reset_dependencies()``.
"""

from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.interfaces import INotificationService, IPaymentGateway
from core.application.services.checkout_service import CheckoutService
from core.application.services.order_service import OrderApplicationService
from core.application.services.payment_confirmation_service import PaymentConfirmationService
from core.application.use_cases.finalize_order import FinalizeOrderUseCase
from core.application.use_cases.place_paid_order import PlacePaidOrderUseCase
from core.application.use_cases.start_checkout import StartCheckoutUseCase
from core.infrastructure.adapters.gateway.razorpay_client import RazorpayClient
from core.infrastructure.adapters.notifications import build_notification_service
from core.infrastructure.database.config import get_session_factory as build_session_factory
from core.infrastructure.rate_limiter import FixedWindowRateLimiter, client_ip
from core.infrastructure.security.signature_verifier import SignatureVerifier
from core.settings import AppSettings, get_app_settings

# Load .env once, before any settings section is instantiated
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

# =============================================================================
# SINGLETONS
# =============================================================================

_session_factory: Optional[async_sessionmaker] = None
_payment_gateway: Optional[IPaymentGateway] = None
_notification_service: Optional[INotificationService] = None
_signature_verifier: Optional[SignatureVerifier] = None
_rate_limiter: Optional[FixedWindowRateLimiter] = None


def get_settings() -> AppSettings:
    """Get application settings."""
    return get_app_settings()


def get_session_factory() -> async_sessionmaker:
    """Get SQLAlchemy session factory.

    Returns:
        async_sessionmaker instance
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = build_session_factory(get_settings().database)
    return _session_factory


def get_payment_gateway() -> IPaymentGateway:
    """Get payment gateway client."""
    global _payment_gateway
    if _payment_gateway is None:
        _payment_gateway = RazorpayClient(get_settings().gateway)
    return _payment_gateway


def get_notification_service() -> INotificationService:
    """Get notification service selected by settings."""
    global _notification_service
    if _notification_service is None:
        _notification_service = build_notification_service(get_settings().notifications)
    return _notification_service


def get_signature_verifier() -> SignatureVerifier:
    """Get gateway signature verifier."""
    global _signature_verifier
    if _signature_verifier is None:
        gateway = get_settings().gateway
        _signature_verifier = SignatureVerifier(
            key_secret=gateway.key_secret,
            webhook_secret=gateway.webhook_secret,
        )
    return _signature_verifier


def get_rate_limiter() -> Optional[FixedWindowRateLimiter]:
    """Get the buyer endpoint rate limiter (None when disabled)."""
    global _rate_limiter
    settings = get_settings().rate_limit
    if not settings.enabled:
        return None
    if _rate_limiter is None:
        _rate_limiter = FixedWindowRateLimiter(
            limit=settings.requests,
            window_seconds=settings.window_seconds,
            trusted_proxies=settings.trusted_proxies,
        )
    return _rate_limiter


def reset_dependencies() -> None:
    """Drop cached singletons (for testing)."""
    global _session_factory, _payment_gateway, _notification_service
    global _signature_verifier, _rate_limiter
    _session_factory = None
    _payment_gateway = None
    _notification_service = None
    _signature_verifier = None
    _rate_limiter = None


# =============================================================================
# REQUEST-SCOPED DEPENDENCIES
# =============================================================================

async def enforce_rate_limit(
    request: Request,
    limiter: Optional[FixedWindowRateLimiter] = Depends(get_rate_limiter),
) -> None:
    """Reject the request with 429 when the caller is over its limit."""
    if limiter is None:
        return

    key = client_ip(
        request.headers,
        request.client.host if request.client else None,
        limiter.trusted_proxies,
    )
    if not limiter.hit(key):
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many requests. Please try again later.",
            headers={"Retry-After": str(limiter.retry_after(key))},
        )


def get_finalize_use_case(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
    notification_service: INotificationService = Depends(get_notification_service),
) -> FinalizeOrderUseCase:
    return FinalizeOrderUseCase(
        session_factory=session_factory,
        gateway=gateway,
        notification_service=notification_service,
    )


def get_payment_confirmation_service(
    finalizer: FinalizeOrderUseCase = Depends(get_finalize_use_case),
    verifier: SignatureVerifier = Depends(get_signature_verifier),
) -> PaymentConfirmationService:
    """Get PaymentConfirmationService instance."""
    return PaymentConfirmationService(finalizer=finalizer, verifier=verifier)


def get_checkout_service(
    settings: AppSettings = Depends(get_settings),
    session_factory: async_sessionmaker = Depends(get_session_factory),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
    notification_service: INotificationService = Depends(get_notification_service),
    verifier: SignatureVerifier = Depends(get_signature_verifier),
) -> CheckoutService:
    """Get CheckoutService instance."""
    currency = settings.gateway.currency
    custom_pack_prices = settings.checkout.custom_pack_prices

    return CheckoutService(
        start_checkout=StartCheckoutUseCase(
            session_factory=session_factory,
            gateway=gateway,
            currency=currency,
            payment_window=timedelta(minutes=settings.checkout.payment_window_minutes),
            custom_pack_prices=custom_pack_prices,
        ),
        place_paid_order=PlacePaidOrderUseCase(
            session_factory=session_factory,
            verifier=verifier,
            notification_service=notification_service,
            currency=currency,
            custom_pack_prices=custom_pack_prices,
        ),
        key_id=settings.gateway.key_id,
    )


def get_order_service(
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> OrderApplicationService:
    """Get OrderApplicationService instance.

    Returns:
        OrderApplicationService instance
    """
    return OrderApplicationService(session_factory)
