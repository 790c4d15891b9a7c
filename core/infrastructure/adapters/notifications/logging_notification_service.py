"""
Logging Notification Service Implementation.

Writes order confirmations and operator alerts as log lines. Delivery
transports (email, chat) plug in behind the same interface.
"""
from typing import Any, Dict, List
import logging

from core.application.interfaces import INotificationService
from core.settings.sections.notifications import NotificationSettings


logger = logging.getLogger(__name__)


class LoggingNotificationService(INotificationService):
    """
    Log-backed implementation of notification service.
    """

    def __init__(self, settings: NotificationSettings):
        """
        Initialize logging notification service.

        Args:
            settings: Notification settings (enabled flag, alert threshold)
        """
        self.settings = settings
        self.enabled = settings.enabled
        self.min_severity = settings.alert_min_severity
        logger.info("LoggingNotificationService initialized")

    async def send_order_confirmation(
        self,
        order_id: str,
        recipient: str,
        customer_name: str,
        amount: str,
        items: List[Dict[str, Any]],
    ) -> bool:
        """Log the buyer's order confirmation."""
        if not self.enabled:
            logger.debug(f"Notifications disabled, skipping confirmation for {order_id}")
            return False

        lines = ", ".join(f"{item['title']} x{item['quantity']}" for item in items)
        logger.info(
            f"📧 Order confirmation: order={order_id} to={recipient} "
            f"name={customer_name!r} amount={amount} items=[{lines}]"
        )
        return True

    async def notify(self, message: str, severity: int = 50) -> None:
        """
        Log an operator alert.

        Args:
            message: Notification message
            severity: Severity level (0-100, higher = more critical)
        """
        # Check minimum severity threshold
        if severity < self.min_severity:
            logger.debug(f"Notification severity {severity} below threshold {self.min_severity}, skipping")
            return

        emoji = "🔴" if severity >= 80 else "🟡" if severity >= 50 else "🟢"
        logger.warning(f"{emoji} ALERT (severity={severity}): {message}")
