"""
Mock Notification Service Implementation.

This simulates notifications for testing and demos.
"""
from typing import Any, Dict, List
import logging

from core.application.interfaces import INotificationService


logger = logging.getLogger(__name__)


class MockNotificationService(INotificationService):
    """
    Mock implementation of notification service.

    Records notifications instead of actually sending them.
    Useful for testing and demos.
    """

    def __init__(self):
        """Initialize mock notification service."""
        self.notifications_sent = []
        logger.info("MockNotificationService initialized (console logging)")

    async def send_order_confirmation(
        self,
        order_id: str,
        recipient: str,
        customer_name: str,
        amount: str,
        items: List[Dict[str, Any]],
    ) -> bool:
        """
        Simulate the buyer's order confirmation.

        Returns:
            Always True
        """
        notification = {
            "type": "order_confirmation",
            "order_id": order_id,
            "recipient": recipient,
            "customer_name": customer_name,
            "amount": amount,
            "items": items,
        }

        self.notifications_sent.append(notification)

        logger.info(
            f"✅ 🔔 ORDER CONFIRMATION:\n"
            f"   Order: {order_id}\n"
            f"   To: {recipient}\n"
            f"   Amount: {amount}\n"
            f"   Items: {len(items)}"
        )
        return True

    def get_notifications(self) -> list:
        """Get all sent notifications (for testing)."""
        return self.notifications_sent

    def confirmations_for(self, order_id: str) -> list:
        return [
            n for n in self.notifications_sent
            if n["type"] == "order_confirmation" and n["order_id"] == order_id
        ]

    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Record a generic notification message.

        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        notification = {
            "type": "generic",
            "message": message,
            "severity": severity,
        }

        self.notifications_sent.append(notification)

        severity_emoji = "🔴" if severity >= 80 else "🟡" if severity >= 50 else "🟢"
        logger.info(
            f"{severity_emoji} 🔔 NOTIFICATION (severity={severity}):\n"
            f"   {message}"
        )
