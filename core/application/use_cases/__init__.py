"""Application use cases."""
from .finalize_order import FinalizeOrderUseCase, FinalizeResult, PaymentConfirmation
from .place_paid_order import PlacePaidOrderCommand, PlacePaidOrderUseCase
from .start_checkout import StartCheckoutCommand, StartCheckoutUseCase

__all__ = [
    "FinalizeOrderUseCase",
    "FinalizeResult",
    "PaymentConfirmation",
    "PlacePaidOrderCommand",
    "PlacePaidOrderUseCase",
    "StartCheckoutCommand",
    "StartCheckoutUseCase",
]
