from pydantic_settings import BaseSettings
from pydantic import Field


class GatewaySettings(BaseSettings):
    """
    Razorpay gateway settings.
    Loaded from .env file with exact variable name matching.
    """

    # API Credentials
    key_id: str = Field(default="", alias="RAZORPAY_KEY_ID")
    key_secret: str = Field(default="", alias="RAZORPAY_KEY_SECRET")
    webhook_secret: str = Field(default="", alias="RAZORPAY_WEBHOOK_SECRET")

    # Transport
    base_url: str = Field(default="https://api.razorpay.com/v1", alias="RAZORPAY_BASE_URL")
    timeout_seconds: float = Field(default=10.0, alias="RAZORPAY_TIMEOUT_SECONDS")

    currency: str = Field(default="INR", alias="CHECKOUT_CURRENCY")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
