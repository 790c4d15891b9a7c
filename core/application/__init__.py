"""Application layer - services, use cases, interfaces, and DTOs."""

from .dtos import OrderDTO, OrderItemDTO, OrderListDTO
from .interfaces import GatewayOrder, INotificationService, IPaymentGateway
from .services import CheckoutService, OrderApplicationService, PaymentConfirmationService
from .use_cases import (
    FinalizeOrderUseCase,
    PlacePaidOrderUseCase,
    StartCheckoutUseCase,
)

__all__ = [
    # DTOs
    "OrderDTO",
    "OrderItemDTO",
    "OrderListDTO",
    # Services
    "CheckoutService",
    "OrderApplicationService",
    "PaymentConfirmationService",
    # Use Cases
    "FinalizeOrderUseCase",
    "PlacePaidOrderUseCase",
    "StartCheckoutUseCase",
    # Interfaces
    "GatewayOrder",
    "INotificationService",
    "IPaymentGateway",
]
