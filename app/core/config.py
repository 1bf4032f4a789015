"""
@file: config.py
@description:
This module provides centralized configuration management for the PickResults backend API.
It loads environment variables and provides typed access to configuration settings
used throughout the application.

The configuration includes settings for:
- Application general settings (debug mode, environment)
- Database connection for the pick store
- Authentication (JWT) and the cron trigger shared secret
- The Sportradar game-data feed
- Result sync tuning (concurrency, cache TTL, schedule interval)
- Celery and Redis for the periodic sync trigger
- Logging parameters

@dependencies:
- pydantic: For settings validation
- pydantic_settings: For environment variable loading

@notes:
- All sensitive configuration is loaded from environment variables
- When CRON_SECRET is not set the sync trigger endpoint is open
- Celery broker/backend fall back to REDIS_URL when not given explicitly
"""

from typing import Optional, Any
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from datetime import timedelta


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Provides typed access to all configuration parameters used in the application.
    """
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application Settings
    APP_ENV: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # Database
    DATABASE_URL: str = Field(default="sqlite:///./picks.db")

    # Authentication
    JWT_SECRET: str = Field(default="your_jwt_secret_here")
    JWT_ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=30)
    CRON_SECRET: Optional[str] = Field(default=None)

    # Sportradar game feed
    SPORTRADAR_API_KEY: Optional[str] = Field(default=None)
    SPORTRADAR_ACCESS_LEVEL: str = Field(default="trial")
    SPORTRADAR_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    SPORTRADAR_RETRY_ATTEMPTS: int = Field(default=2, ge=1)

    # Result sync
    GAME_CACHE_TTL_SECONDS: int = Field(default=60, ge=0)
    SYNC_MAX_CONCURRENCY: int = Field(default=5, ge=1)
    SYNC_INTERVAL_MINUTES: int = Field(default=10, ge=1, le=59)

    # Redis and Celery
    REDIS_URL: str = Field(default="redis://localhost:6379/0")
    CELERY_BROKER_URL: Optional[str] = Field(default=None, validate_default=True)
    CELERY_RESULT_BACKEND: Optional[str] = Field(default=None, validate_default=True)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    @field_validator("CELERY_BROKER_URL", mode="before")
    def set_celery_broker_url(cls, v: Optional[str], values: Any) -> str:
        """
        Set the Celery broker URL to the Redis URL if not explicitly specified.
        """
        if v is not None:
            return v
        return values.data.get("REDIS_URL", "redis://localhost:6379/0")

    @field_validator("CELERY_RESULT_BACKEND", mode="before")
    def set_celery_result_backend(cls, v: Optional[str], values: Any) -> str:
        """
        Set the Celery result backend to the Redis URL if not explicitly specified.
        """
        if v is not None:
            return v
        return values.data.get("REDIS_URL", "redis://localhost:6379/0")

    @property
    def ACCESS_TOKEN_EXPIRE_DELTA(self) -> timedelta:
        """
        Convert the access token expiration minutes to a timedelta object.
        """
        return timedelta(minutes=self.ACCESS_TOKEN_EXPIRE_MINUTES)


# Create a global settings object
settings = Settings()

def get_settings() -> Settings:
    """
    Function to get the settings object for dependency injection in FastAPI.
    """
    return settings
