"""Application services."""
from .checkout_service import CheckoutService
from .order_service import OrderApplicationService
from .payment_confirmation_service import PaymentConfirmationService

__all__ = ["CheckoutService", "OrderApplicationService", "PaymentConfirmationService"]
