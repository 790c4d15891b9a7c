"""
Unit tests for notification adapters and backend selection.
"""
import logging

import pytest

from core.infrastructure.adapters.notifications import build_notification_service
from core.infrastructure.adapters.notifications.logging_notification_service import (
    LoggingNotificationService,
)
from core.infrastructure.adapters.notifications.mock_notification_service import (
    MockNotificationService,
)
from core.settings.sections.notifications import NotificationSettings


def _settings(**values) -> NotificationSettings:
    return NotificationSettings(**values)


ITEMS = [{"title": "Holographic Sticker Pack", "quantity": 2, "price": "499.00"}]


@pytest.mark.asyncio
async def test_mock_records_confirmation():
    service = MockNotificationService()

    sent = await service.send_order_confirmation(
        order_id="o-1",
        recipient="asha@example.com",
        customer_name="Asha Rao",
        amount="998.00 INR",
        items=ITEMS,
    )

    assert sent is True
    (notification,) = service.confirmations_for("o-1")
    assert notification["recipient"] == "asha@example.com"
    assert notification["items"] == ITEMS


@pytest.mark.asyncio
async def test_mock_records_alerts_separately():
    service = MockNotificationService()
    await service.notify("Amount mismatch on order o-1", severity=90)

    assert service.confirmations_for("o-1") == []
    (alert,) = service.get_notifications()
    assert alert == {"type": "generic", "message": "Amount mismatch on order o-1", "severity": 90}


@pytest.mark.asyncio
async def test_logging_service_logs_confirmation(caplog):
    service = LoggingNotificationService(_settings())

    with caplog.at_level(logging.INFO):
        sent = await service.send_order_confirmation("o-1", "asha@example.com", "Asha", "998.00 INR", ITEMS)

    assert sent is True
    assert "order=o-1" in caplog.text
    assert "Holographic Sticker Pack x2" in caplog.text


@pytest.mark.asyncio
async def test_logging_service_disabled():
    service = LoggingNotificationService(_settings(NOTIFICATIONS_ENABLED=False))

    assert await service.send_order_confirmation("o-1", "a@b.co", "A", "1.00 INR", ITEMS) is False


@pytest.mark.asyncio
async def test_logging_service_alert_threshold(caplog):
    service = LoggingNotificationService(_settings(NOTIFICATIONS_ALERT_MIN_SEVERITY=80))

    with caplog.at_level(logging.DEBUG):
        await service.notify("minor", severity=20)
        await service.notify("Amount mismatch", severity=90)

    alerts = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(alerts) == 1
    assert "Amount mismatch" in alerts[0].getMessage()


@pytest.mark.parametrize(
    "backend, expected",
    [("mock", MockNotificationService), ("LOGGING", LoggingNotificationService)],
)
def test_build_notification_service(backend, expected):
    service = build_notification_service(_settings(NOTIFICATIONS_BACKEND=backend))
    assert isinstance(service, expected)


def test_unknown_backend():
    with pytest.raises(ValueError):
        build_notification_service(_settings(NOTIFICATIONS_BACKEND="pigeon"))
