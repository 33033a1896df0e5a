"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Rezervasyon API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database (local SQLite file by default; any SQLAlchemy async URL works)
    DATABASE_URL: str = "sqlite+aiosqlite:///./rezervasyon.db"
    DATABASE_URL_SYNC: str = "sqlite:///./rezervasyon.db"
    DB_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_RECYCLE: int = 1800  # 30 minutes, ignored for SQLite

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_CACHE_TTL: int = 300  # 5 minutes default TTL
    REDIS_ENABLED: bool = False

    # Reservations
    RESERVATION_MAX_RETRIES: int = 3

    # Trip feed
    TRIP_STREAM_POLL_SECONDS: float = 5.0

    # Facet ordering
    COLLATION_LOCALE: str = "tr"

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
