"""
Application settings and configuration
"""
from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # Basic app settings
    DEBUG: bool = Field(default=False)
    APP_NAME: str = Field(default="Barberbook")
    BUSINESS_NAME: str = Field(default="Onzy Barber")

    # Admin session settings
    JWT_SECRET_KEY: str = Field(
        default="change-this-jwt-secret-in-production-use-long-random-string"
    )
    JWT_ALGORITHM: str = Field(default="HS256")
    ADMIN_SESSION_EXPIRE_MINUTES: int = Field(default=480)  # 8 hours
    DEFAULT_ADMIN_PASSWORD: str = Field(default="onzy2025")

    # Server settings
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)
    ALLOWED_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    # Database settings
    DATABASE_URL: str = Field(default="sqlite:///./barberbook.db")
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=20)

    # Booking settings
    # "exact" blocks only identical (date, time) pairs, "overlap" blocks
    # any candidate whose window intersects an existing appointment.
    SLOT_CONFLICT_MODE: str = Field(default="exact", pattern="^(exact|overlap)$")
    BOOKING_WINDOW_DAYS: int = Field(default=60, ge=1)

    # Monitoring settings
    LOG_LEVEL: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


# Convenience accessor for settings
settings = get_settings()
