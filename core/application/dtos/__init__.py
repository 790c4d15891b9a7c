"""Application DTOs."""

from .checkout_dto import (
    CartItemDTO,
    CheckoutResponse,
    CustomerDTO,
    PlacePaidOrderRequest,
    StartCheckoutRequest,
)
from .order_dto import OrderDTO, OrderItemDTO, OrderListDTO
from .payment_dto import (
    ConfirmationResponse,
    VerifyPaymentRequest,
    WebhookAck,
    WebhookEvent,
)

__all__ = [
    "CartItemDTO",
    "CheckoutResponse",
    "ConfirmationResponse",
    "CustomerDTO",
    "OrderDTO",
    "OrderItemDTO",
    "OrderListDTO",
    "PlacePaidOrderRequest",
    "StartCheckoutRequest",
    "VerifyPaymentRequest",
    "WebhookAck",
    "WebhookEvent",
]
