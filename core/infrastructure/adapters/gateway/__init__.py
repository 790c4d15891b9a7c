"""Payment gateway adapters."""

from .mock_gateway import MockPaymentGateway
from .razorpay_client import RazorpayClient

__all__ = ["MockPaymentGateway", "RazorpayClient"]
