"""Application layer interfaces."""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class GatewayOrder:
    """Gateway's view of an order. Amounts are in minor units (paise)."""

    gateway_order_id: str
    amount_minor: int
    currency: str
    status: str = "created"
    notes: Dict[str, Any] = field(default_factory=dict)


class IPaymentGateway(ABC):
    """
    Interface for payment gateway operations.

    The gateway is the authority on how much money was actually requested.
    Implementations raise GatewayUnavailable for any network, auth or HTTP
    failure; a failed lookup is never treated as a match.
    """

    @abstractmethod
    async def fetch_order(self, gateway_order_id: str) -> GatewayOrder:
        """
        Fetch a gateway order by id.

        Args:
            gateway_order_id: Gateway-assigned order id

        Returns:
            GatewayOrder with the authoritative amount

        Raises:
            GatewayUnavailable: gateway could not be reached or refused the call
        """
        pass

    @abstractmethod
    async def create_order(
        self,
        amount_minor: int,
        currency: str,
        receipt: str,
        notes: Optional[Dict[str, Any]] = None,
    ) -> GatewayOrder:
        """
        Create a gateway order the buyer will pay against.

        Args:
            amount_minor: Amount in minor units
            currency: ISO currency code
            receipt: Merchant reference (our order id)
            notes: Free-form key/values stored on the gateway order

        Returns:
            Created GatewayOrder

        Raises:
            GatewayUnavailable: gateway could not be reached or refused the call
        """
        pass


class INotificationService(ABC):
    """
    Interface for notification service operations.

    This interface defines the contract for sending notifications,
    allowing different implementations (email, Slack, webhook, etc.)
    """

    @abstractmethod
    async def send_order_confirmation(
        self,
        order_id: str,
        recipient: str,
        customer_name: str,
        amount: str,
        items: List[Dict[str, Any]],
    ) -> bool:
        """
        Send the buyer's order confirmation.

        Args:
            order_id: Order ID
            recipient: Buyer email
            customer_name: Buyer name
            amount: Paid amount, formatted
            items: Item snapshots (title, quantity, price)

        Returns:
            True if the notification was handed off
        """
        pass

    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Send a generic notification message.

        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        # Default implementation - can be overridden
        pass


__all__ = ["GatewayOrder", "INotificationService", "IPaymentGateway"]
