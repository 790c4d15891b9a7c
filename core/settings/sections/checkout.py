from decimal import Decimal
from typing import Tuple

from pydantic_settings import BaseSettings
from pydantic import Field


class CheckoutSettings(BaseSettings):
    """
    Checkout settings.
    Loaded from .env file with exact variable name matching.
    """

    payment_window_minutes: int = Field(default=15, alias="CHECKOUT_PAYMENT_WINDOW_MINUTES")

    # Comma-separated list, e.g. "249,399,799"
    custom_pack_prices_raw: str = Field(default="249,399,799", alias="CHECKOUT_CUSTOM_PACK_PRICES")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def custom_pack_prices(self) -> Tuple[Decimal, ...]:
        return tuple(
            Decimal(part.strip())
            for part in self.custom_pack_prices_raw.split(",")
            if part.strip()
        )
