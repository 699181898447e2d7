"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "sqlite://",
    "sqlite+pysqlite://",
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
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
    API_PREFIX: str = "/api"

    # SQLite by default; a PostgreSQL URL works the same way
    DATABASE_URL: str = "sqlite:///./data/moltendocs.db"

    # Markdown documents live under CONTENT_DIR; the global order record under DATA_DIR
    CONTENT_DIR: str = "public/content"
    DATA_DIR: str = "data"

    # Cookie sessions
    SESSION_COOKIE_NAME: str = "session"
    SESSION_TTL_HOURS: int = 24
    # Delete expired session rows on startup and from `python -m moltendocs.sweep`
    SESSION_SWEEP_ENABLED: bool = True

    # Password hashing
    BCRYPT_ROUNDS: int = 12
    # Password given to the bootstrap "admin" account when it is first created
    DEFAULT_ADMIN_PASSWORD: SecretStr = SecretStr("admin123")

    @field_validator("API_PREFIX")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            raise ValueError("API_PREFIX must start with '/' (e.g. /api)")
        return v

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a SQLite or PostgreSQL URL (e.g. sqlite:///./data/moltendocs.db)"
            )
        return v.strip()

    @field_validator("CONTENT_DIR", "DATA_DIR")
    @classmethod
    def validate_directory(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("CONTENT_DIR and DATA_DIR must be set and non-empty")
        return v.strip()

    @field_validator("SESSION_COOKIE_NAME")
    @classmethod
    def validate_cookie_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SESSION_COOKIE_NAME must be set and non-empty")
        return v.strip()

    @field_validator("SESSION_TTL_HOURS")
    @classmethod
    def validate_session_ttl(cls, v: int) -> int:
        if v < 1 or v > 720:
            raise ValueError(
                "SESSION_TTL_HOURS must be between 1 and 720 (1 hour to 30 days)"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v

    @field_validator("DEFAULT_ADMIN_PASSWORD")
    @classmethod
    def validate_default_admin_password(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("DEFAULT_ADMIN_PASSWORD must be set and non-empty")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
