"""
Application configuration using Pydantic settings.

Usage:
    from skillshare.config import get_settings
    settings = get_settings()

The token service never reads settings directly. Build a TokenConfig and pass it in:
    from skillshare.config import TokenConfig
    config = TokenConfig.from_settings(get_settings())
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Grace window applied to the expiry boundary of every token.
CLOCK_SKEW_SECONDS = 60

DEFAULT_TOKEN_LIFETIME_MS = 86_400_000


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.

    Required for production:
        - JWT_SECRET_KEY (non-empty; at least 32 chars recommended)
        - DATABASE_URL
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "SkillShare"
    api_prefix: str = "/api"
    debug: bool = Field(default=False)

    # Database
    database_url: str = Field(default="sqlite:///skillshare.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")

    # JWT / Authentication
    jwt_secret_key: str = Field(default="", validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256")
    jwt_expiration_ms: int = Field(default=DEFAULT_TOKEN_LIFETIME_MS, validation_alias="JWT_EXPIRATION_MS")

    # Social graph
    follow_max_attempts: int = Field(default=3, validation_alias="FOLLOW_MAX_ATTEMPTS")

    # CORS
    cors_allowed_origins: str = Field(default="http://localhost:5173", validation_alias="CORS_ALLOWED_ORIGINS")

    @field_validator("jwt_expiration_ms", "follow_max_attempts")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


@dataclass(frozen=True)
class TokenConfig:
    """Immutable signing configuration handed to TokenService at construction."""

    secret: str
    lifetime_ms: int = DEFAULT_TOKEN_LIFETIME_MS
    algorithm: str = "HS256"
    clock_skew_seconds: int = CLOCK_SKEW_SECONDS

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenConfig":
        return cls(
            secret=settings.jwt_secret_key,
            lifetime_ms=settings.jwt_expiration_ms,
            algorithm=settings.jwt_algorithm,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "TokenConfig", "get_settings", "CLOCK_SKEW_SECONDS"]
