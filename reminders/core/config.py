"""
Application configuration using Pydantic Settings.

Configuration values can be set via environment variables or .env file.
"""

import json
from typing import List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    APP_NAME: str = "Reminders"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    DEV_MODE: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Database
    DATABASE_URL: str = "sqlite:///./data/reminders.db"

    # Sessions
    # When unset, a key is generated and persisted to data/.secret_key so
    # that signed session cookies stay valid across restarts.
    SECRET_KEY: Optional[str] = None
    SESSION_COOKIE: str = "reminders-session"
    SESSION_LIFETIME_MINUTES: int = 30

    # Password hashing cost (bcrypt log2 rounds, 4-31)
    BCRYPT_ROUNDS: int = 12

    # Demo user bootstrap, only honoured when DEV_MODE is on
    SEED_DEMO_USER: bool = True
    DEMO_USERNAME: str = "tim"
    DEMO_PASSWORD: str = "tim"

    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:8080"]
    SECURITY_HEADERS_ENABLED: bool = True

    # Rate limiting configuration
    rate_limit_enabled: bool = True
    rate_limit_login: str = "10/minute"

    # Optional Redis URL for distributed rate limiting
    # When set, rate limits will be shared across multiple instances
    redis_url: Optional[str] = None

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: Union[List[str], str]) -> List[str]:
        """Accept a JSON list or a comma-separated string of origins."""
        if isinstance(value, str):
            value = value.strip()
            if value.startswith("["):
                return [str(origin) for origin in json.loads(value)]
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, value: int) -> int:
        if not 4 <= value <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return value

    @property
    def session_max_age(self) -> int:
        """Session lifetime in seconds."""
        return self.SESSION_LIFETIME_MINUTES * 60

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


# Global settings instance
settings = Settings()
