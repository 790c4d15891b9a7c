"""
Payment finalization error taxonomy.

Every failure the pipeline can report carries a stable ``code`` and a
buyer-safe ``public_message``. ``retryable`` is True only when replaying the
whole confirmation event is safe and may succeed.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from typing import Any, Optional


class PaymentError(Exception):
    """Base class for all finalize-or-reject outcomes other than success."""

    code: str = "PAYMENT_ERROR"
    public_message: str = "Failed to verify payment. Please contact support."
    retryable: bool = False

    def __init__(self, message: Optional[str] = None, **context: Any):
        super().__init__(message or self.public_message)
        self.context = context

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.public_message}


class PaymentValidationError(PaymentError):
    """Malformed input shape. Rejected before the store is touched."""

    code = "VALIDATION_ERROR"
    public_message = "Invalid data provided"


class SignatureMismatch(PaymentError):
    """Signature did not match - possible tampering."""

    code = "SIGNATURE_MISMATCH"
    public_message = "Payment verification failed"


class NotFound(PaymentError):
    code = "NOT_FOUND"
    public_message = "Order not found"


class OrderNotFound(NotFound):
    pass


class ProductNotFound(NotFound):
    public_message = "One or more products are no longer available"


class InvalidStateTransition(PaymentError):
    """Order is not in a state a confirmation can move it out of."""

    code = "INVALID_STATE"
    public_message = "Invalid order state for verification"


class OrderExpired(PaymentError):
    code = "ORDER_EXPIRED"
    public_message = "Order session has expired. Please create a new order."


class AmountMismatch(PaymentError):
    """Gateway-captured amount differs from the stored order amount."""

    code = "AMOUNT_MISMATCH"
    public_message = "Payment amount mismatch detected. Transaction blocked."

    def __init__(self, expected_minor: int, actual_minor: int, **context: Any):
        super().__init__(
            f"Amount mismatch: expected {expected_minor}, gateway reported {actual_minor}",
            expected_minor=expected_minor,
            actual_minor=actual_minor,
            **context,
        )
        self.expected_minor = expected_minor
        self.actual_minor = actual_minor


class StockConflict(PaymentError):
    """Lost the race for inventory. Needs a compensating refund, never a retry."""

    code = "STOCK_CONFLICT"
    public_message = (
        "One or more items went out of stock during payment. "
        "Refund will be initiated."
    )


class CouponConflict(PaymentError):
    """Coupon usage limit was reached before this order could redeem it."""

    code = "COUPON_CONFLICT"
    public_message = "Coupon usage limit reached during payment. Refund will be initiated."


class GatewayUnavailable(PaymentError):
    """Payment gateway could not be reached or refused the request."""

    code = "GATEWAY_UNAVAILABLE"
    public_message = "Payment gateway is unavailable. Please try again."
    retryable = True


class TransientStoreFailure(PaymentError):
    """I/O failure inside a transaction. It either fully committed or fully rolled back."""

    code = "STORE_UNAVAILABLE"
    public_message = "Failed to verify payment. Please try again."
    retryable = True
