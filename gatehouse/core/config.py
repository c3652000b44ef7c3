"""Application configuration loaded from environment variables."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
    "sqlite://",
)


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # No defaults: the app refuses to start without a database and a secret.
    DATABASE_URL: str
    SESSION_SECRET: SecretStr

    SESSION_COOKIE_NAME: str = "sid"
    # Sessions expire this many seconds after their last write.
    SESSION_TTL_SECONDS: int = 3600
    # When True, every authenticated request pushes the expiry forward.
    SESSION_ROLLING: bool = False

    BCRYPT_ROUNDS: int = 10

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.strip().startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL or SQLite URL "
                "(e.g. postgresql+psycopg2://... or sqlite:///gatehouse.db)"
            )
        return v.strip()

    @field_validator("SESSION_SECRET")
    @classmethod
    def validate_session_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("SESSION_SECRET must be set and non-empty")
        return v

    @field_validator("SESSION_COOKIE_NAME")
    @classmethod
    def validate_session_cookie_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SESSION_COOKIE_NAME must be set and non-empty")
        return v.strip()

    @field_validator("SESSION_TTL_SECONDS")
    @classmethod
    def validate_session_ttl(cls, v: int) -> int:
        if v < 60 or v > 604800:
            raise ValueError(
                "SESSION_TTL_SECONDS must be between 60 and 604800 (1 min to 7 days)"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v!r}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance; raises ValidationError if required values are missing."""
    return Settings()
