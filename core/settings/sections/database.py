from pydantic_settings import BaseSettings


class DatabaseSettings(BaseSettings):
    """
    Database configuration settings.
    Loaded automatically from .env with prefix DB_*
    """

    database_url: str = "sqlite+aiosqlite:///./checkout.db"

    # Connection pool settings (ignored by SQLite)
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    pool_recycle: int = 3600  # 1 hour

    # Create tables on startup (development and tests)
    create_tables: bool = True

    # Echo SQL (for debugging)
    echo_sql: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "DB_",
        "extra": "ignore",
    }
