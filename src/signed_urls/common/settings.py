"""Configuration management using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SIGNED_URLS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Signing
    secret: str | None = Field(
        default=None,
        repr=False,
        description="Shared secret used to sign and verify URLs",
    )
    exempt_paths: tuple[str, ...] = Field(
        default=("/health", "/metrics"),
        description="Paths served without a signature check",
    )

    # Server
    host: str = Field(
        default="0.0.0.0",
        description="Host for the HTTP server",
    )
    port: int = Field(
        default=3000,
        description="Port for the HTTP server",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Log renderer",
    )

    @property
    def secret_bytes(self) -> bytes | None:
        """Get the configured secret as raw bytes, or None when unset."""
        if not self.secret:
            return None
        return self.secret.encode("utf-8")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
