"""Shared fixtures: a file-backed SQLite database per test and seed helpers."""

import pytest
import pytest_asyncio

from core.infrastructure.adapters.gateway.mock_gateway import MockPaymentGateway
from core.infrastructure.adapters.notifications.mock_notification_service import MockNotificationService
from core.infrastructure.database.config import create_engine, create_session_factory, init_database
from core.infrastructure.security.signature_verifier import SignatureVerifier
from core.settings.sections.database import DatabaseSettings

from tests.support import KEY_SECRET, WEBHOOK_SECRET, Seeder


@pytest_asyncio.fixture
async def test_engine(tmp_path):
    """File-backed SQLite engine, so separate sessions see each other's commits."""
    settings = DatabaseSettings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'checkout.db'}")
    engine = create_engine(settings)
    await init_database(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    """Create test session factory."""
    yield create_session_factory(test_engine)


@pytest.fixture
def seed(session_factory) -> Seeder:
    return Seeder(session_factory)


@pytest.fixture
def gateway() -> MockPaymentGateway:
    return MockPaymentGateway()


@pytest.fixture
def notifier() -> MockNotificationService:
    return MockNotificationService()


@pytest.fixture
def verifier() -> SignatureVerifier:
    return SignatureVerifier(key_secret=KEY_SECRET, webhook_secret=WEBHOOK_SECRET)
