from __future__ import annotations

from functools import lru_cache

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """Raised at startup when required settings are missing or invalid."""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Data store endpoint and its administrative access key. Both required.
    database_url: str = Field(validation_alias="DATABASE_URL")
    database_service_key: str = Field(validation_alias="DATABASE_SERVICE_KEY")

    @field_validator("database_url", "database_service_key")
    @classmethod
    def require_non_blank(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("database_url")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Convert postgres:// and postgresql:// to the asyncpg driver."""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+asyncpg://", 1)
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    # Avito messaging API
    avito_default_api_url: str = Field(
        default="https://api.avito.ru", validation_alias="AVITO_DEFAULT_API_URL"
    )
    avito_timeout_seconds: float = Field(default=20.0, validation_alias="AVITO_TIMEOUT")

    # Connect/command timeout for the data store (asyncpg only)
    store_timeout_seconds: float = Field(default=10.0, validation_alias="STORE_TIMEOUT")

    # CORS headers attached to every relay response
    cors_allow_origin: str = Field(default="*", validation_alias="CORS_ALLOW_ORIGIN")
    cors_allow_headers: str = Field(
        default="authorization, x-client-info, apikey, content-type",
        validation_alias="CORS_ALLOW_HEADERS",
    )

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    def cors_headers(self) -> dict[str, str]:
        return {
            "Access-Control-Allow-Origin": self.cors_allow_origin,
            "Access-Control-Allow-Headers": self.cors_allow_headers,
        }


def load_settings(**overrides) -> Settings:
    """Build and validate settings once; missing required values are fatal."""
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        missing = ", ".join(
            str(err["loc"][0]) for err in exc.errors() if err.get("loc")
        )
        raise ConfigurationError(f"Invalid relay configuration: {missing}") from exc


@lru_cache
def get_settings() -> Settings:
    return load_settings()
