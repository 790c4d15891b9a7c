from pydantic_settings import BaseSettings
from pydantic import Field


class NotificationSettings(BaseSettings):
    """
    Order notification settings.
    Loaded from .env file with exact variable name matching.
    """

    enabled: bool = Field(default=True, alias="NOTIFICATIONS_ENABLED")
    backend: str = Field(default="logging", alias="NOTIFICATIONS_BACKEND")
    alert_min_severity: int = Field(default=80, alias="NOTIFICATIONS_ALERT_MIN_SEVERITY")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
