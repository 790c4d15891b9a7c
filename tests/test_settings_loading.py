"""
Test settings loading from the environment.

Verifies that every key documented in .env.example maps to exactly one
settings field, and that values are parsed into the right types.
"""
from __future__ import annotations

from decimal import Decimal
from pathlib import Path
import re

import pytest

from core.settings import get_app_settings

ENV_EXAMPLE = Path(__file__).resolve().parents[1] / ".env.example"


def _parse_env(env_path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        s = line.strip()
        if not s or s.startswith("#") or "=" not in s:
            continue
        k, v = s.split("=", 1)
        k = k.strip()
        if re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", k):
            values[k] = v.strip()
    return values


def _collect_env_map(model) -> dict[str, str]:
    """
    Return map: ENV_NAME -> field_name for a settings section.
    """
    prefix = type(model).model_config.get("env_prefix", "")
    env_map: dict[str, str] = {}
    for field_name, field in type(model).model_fields.items():
        env_name = field.alias or f"{prefix}{field_name}".upper()
        env_map[env_name] = field_name
    return env_map


@pytest.fixture
def settings_from_example(monkeypatch):
    for key, value in _parse_env(ENV_EXAMPLE).items():
        monkeypatch.setenv(key, value)
    get_app_settings.cache_clear()
    yield get_app_settings()
    get_app_settings.cache_clear()


def test_every_documented_key_is_mapped(settings_from_example):
    settings = settings_from_example
    sections = {
        "api": settings.api,
        "database": settings.database,
        "gateway": settings.gateway,
        "checkout": settings.checkout,
        "notifications": settings.notifications,
        "rate_limit": settings.rate_limit,
    }

    env_to_locator: dict[str, tuple[str, str]] = {}
    for section_name, model in sections.items():
        for env_name, field_name in _collect_env_map(model).items():
            if env_name in env_to_locator:
                pytest.fail(f"Env name mapped twice: {env_name}")
            env_to_locator[env_name] = (section_name, field_name)

    keys = list(_parse_env(ENV_EXAMPLE))
    missing = [k for k in keys if k not in env_to_locator]
    assert not missing, f"Unmapped env keys: {missing}"

    for env_key in keys:
        section_name, field_name = env_to_locator[env_key]
        assert getattr(sections[section_name], field_name) is not None


def test_values_are_typed(settings_from_example):
    settings = settings_from_example

    assert settings.gateway.timeout_seconds == 10.0
    assert settings.gateway.webhook_secret == "change-me-too"
    assert settings.checkout.payment_window_minutes == 15
    assert settings.checkout.custom_pack_prices == (Decimal("249"), Decimal("399"), Decimal("799"))
    assert settings.notifications.enabled is True
    assert settings.notifications.alert_min_severity == 80
    assert settings.rate_limit.requests == 30
    assert settings.rate_limit.trusted_proxies == frozenset({"127.0.0.1"})
    assert settings.database.create_tables is True


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DB_DATABASE_URL", "postgresql+asyncpg://u:p@db/checkout")
    monkeypatch.setenv("CHECKOUT_CUSTOM_PACK_PRICES", " 100 , ,250.50")
    monkeypatch.setenv("RATE_LIMIT_ENABLED", "false")
    get_app_settings.cache_clear()
    try:
        settings = get_app_settings()
    finally:
        get_app_settings.cache_clear()

    assert settings.database.database_url == "postgresql+asyncpg://u:p@db/checkout"
    assert settings.checkout.custom_pack_prices == (Decimal("100"), Decimal("250.50"))
    assert settings.rate_limit.enabled is False
