# core/settings/app.py
from functools import lru_cache

from pydantic import BaseModel, ConfigDict

# Sections
from core.settings.sections.api import ApiSettings
from core.settings.sections.checkout import CheckoutSettings
from core.settings.sections.database import DatabaseSettings
from core.settings.sections.gateway import GatewaySettings
from core.settings.sections.notifications import NotificationSettings
from core.settings.sections.rate_limit import RateLimitSettings


class AppSettings(BaseModel):
    """
    Application settings aggregator.

    Each section reads its own variables; nothing is loaded at import time.
    """

    model_config = ConfigDict(extra="ignore")

    api: ApiSettings
    database: DatabaseSettings
    gateway: GatewaySettings
    checkout: CheckoutSettings
    notifications: NotificationSettings
    rate_limit: RateLimitSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        api=ApiSettings(),
        database=DatabaseSettings(),
        gateway=GatewaySettings(),
        checkout=CheckoutSettings(),
        notifications=NotificationSettings(),
        rate_limit=RateLimitSettings(),
    )
