"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./choir_registry.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    upload_dir: str = Field(
        default="uploads",
        description="Directory where member photos are stored by the local backend",
        min_length=1,
    )
    max_upload_bytes: int = Field(
        default=DEFAULT_MAX_UPLOAD_BYTES,
        description="Largest accepted photo upload in bytes",
        gt=0,
    )
    asset_backend: Literal["local", "azure"] = Field(
        default="local",
        description="Where uploaded photos are kept: a local directory or an Azure container",
    )
    azure_storage_connection_string: str | None = Field(
        default=None,
        description="Connection string for the Azure Blob Storage account",
    )
    azure_storage_container_name: str | None = Field(
        default=None,
        description="Azure Blob Storage container that holds member photos",
    )
    orphan_sweep_enabled: bool = Field(
        default=True,
        description="Run the orphan photo sweep in the background",
    )
    orphan_sweep_delay_seconds: float = Field(
        default=10.0,
        description="Seconds to wait after startup before the first orphan sweep",
        ge=0,
    )
    orphan_sweep_interval_seconds: float = Field(
        default=3600.0,
        description="Seconds between orphan sweeps; 0 runs the sweep only once",
        ge=0,
    )
    orphan_grace_period_seconds: float = Field(
        default=300.0,
        description="Unreferenced photos younger than this are left for the next sweep",
        ge=0,
    )
    app_timezone: str = Field(
        default="Africa/Lagos",
        description="Timezone used for member timestamps and report headers",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @field_validator("app_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        name = value.strip()
        try:
            ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone '{value}'") from exc
        return name

    @model_validator(mode="after")
    def _validate_azure_settings(self) -> "Settings":
        if self.asset_backend == "azure" and not (
            self.azure_storage_connection_string and self.azure_storage_container_name
        ):
            raise ValueError(
                "AZURE_STORAGE_CONNECTION_STRING and AZURE_STORAGE_CONTAINER_NAME must both "
                "be provided when ASSET_BACKEND is 'azure'"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
