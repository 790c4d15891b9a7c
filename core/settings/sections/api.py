from pydantic_settings import BaseSettings
from pydantic import Field


class ApiSettings(BaseSettings):
    """
    HTTP API settings.
    Loaded from .env file with exact variable name matching.
    """

    title: str = Field(default="Checkout Finalizer API", alias="API_TITLE")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }
