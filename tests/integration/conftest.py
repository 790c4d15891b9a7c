"""Fixtures for API tests: the FastAPI app wired to the test database and fakes."""

import httpx
import pytest
import pytest_asyncio

from apps.api.deps import (
    get_notification_service,
    get_payment_gateway,
    get_rate_limiter,
    get_session_factory,
    get_settings,
    get_signature_verifier,
)
from apps.api.main import app
from core.settings import AppSettings
from core.settings.sections.api import ApiSettings
from core.settings.sections.checkout import CheckoutSettings
from core.settings.sections.database import DatabaseSettings
from core.settings.sections.gateway import GatewaySettings
from core.settings.sections.notifications import NotificationSettings
from core.settings.sections.rate_limit import RateLimitSettings

from tests.support import KEY_SECRET, TEST_KEY_ID, WEBHOOK_SECRET


@pytest.fixture
def test_settings() -> AppSettings:
    return AppSettings(
        api=ApiSettings(),
        database=DatabaseSettings(create_tables=False),
        gateway=GatewaySettings(
            RAZORPAY_KEY_ID=TEST_KEY_ID,
            RAZORPAY_KEY_SECRET=KEY_SECRET,
            RAZORPAY_WEBHOOK_SECRET=WEBHOOK_SECRET,
            CHECKOUT_CURRENCY="INR",
        ),
        checkout=CheckoutSettings(
            CHECKOUT_PAYMENT_WINDOW_MINUTES=15,
            CHECKOUT_CUSTOM_PACK_PRICES="249,399,799",
        ),
        notifications=NotificationSettings(NOTIFICATIONS_BACKEND="mock"),
        rate_limit=RateLimitSettings(RATE_LIMIT_ENABLED=False),
    )


@pytest.fixture
def api_app(test_settings, session_factory, gateway, notifier, verifier):
    """The application with every external collaborator replaced."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_notification_service] = lambda: notifier
    app.dependency_overrides[get_signature_verifier] = lambda: verifier
    app.dependency_overrides[get_rate_limiter] = lambda: None

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(api_app):
    """HTTP client over ASGI (tables already exist via the test engine)."""
    transport = httpx.ASGITransport(app=api_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
