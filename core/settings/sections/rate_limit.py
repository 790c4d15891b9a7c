from typing import FrozenSet

from pydantic_settings import BaseSettings
from pydantic import Field


class RateLimitSettings(BaseSettings):
    """
    Buyer-facing endpoint throttling.
    Loaded from .env file with exact variable name matching.

    Forwarding headers (X-Forwarded-For, X-Real-IP) are honoured only when the
    direct peer is listed in RATE_LIMIT_TRUSTED_PROXIES. With the list empty the
    limiter keys on the socket peer, so clients cannot pick their own key.
    """

    enabled: bool = Field(default=True, alias="RATE_LIMIT_ENABLED")
    requests: int = Field(default=30, alias="RATE_LIMIT_REQUESTS")
    window_seconds: int = Field(default=60, alias="RATE_LIMIT_WINDOW_SECONDS")

    # Comma-separated peer addresses, e.g. "10.0.0.5,10.0.0.6"
    trusted_proxies_raw: str = Field(default="", alias="RATE_LIMIT_TRUSTED_PROXIES")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def trusted_proxies(self) -> FrozenSet[str]:
        return frozenset(
            part.strip()
            for part in self.trusted_proxies_raw.split(",")
            if part.strip()
        )
