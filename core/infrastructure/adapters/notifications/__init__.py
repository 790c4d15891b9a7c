"""Notification adapters.

Concrete services are imported from their modules; ``build_notification_service``
picks one from settings.
"""
from core.application.interfaces import INotificationService
from core.settings.sections.notifications import NotificationSettings


def build_notification_service(settings: NotificationSettings) -> INotificationService:
    """Create the notifier selected by ``NOTIFICATIONS_BACKEND``."""
    backend = settings.backend.lower()

    if backend == "mock":
        from .mock_notification_service import MockNotificationService
        return MockNotificationService()

    if backend == "logging":
        from .logging_notification_service import LoggingNotificationService
        return LoggingNotificationService(settings)

    raise ValueError(f"Unknown notification backend: {settings.backend}")


__all__ = ["build_notification_service"]
