"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    plantnet_api_key: str | None = None
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 3000
    expose_diagnostics: bool = True
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def has_api_key(self) -> bool:
        """Whether a non-empty Pl@ntNet key is configured."""
        return bool(self.plantnet_api_key)
