"""Configuration management with pydantic-settings."""

import codecs
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MAX_UPLOAD_BYTES = 10 << 20  # 10 MiB


class HarViewSettings(BaseSettings):
    """harview application settings loaded from environment variables.

    All settings use the HARVIEW_ prefix for environment variables.
    """

    # Web server configuration
    host: str = Field(
        default="127.0.0.1",
        description="Interface the web UI binds to",
    )
    port: int = Field(
        default=8081,
        ge=1,
        le=65535,
        description="Port the web UI listens on",
    )
    open_browser: bool = Field(
        default=True,
        description="Open the default browser when the server starts",
    )

    # Upload configuration
    max_upload_bytes: int = Field(
        default=DEFAULT_MAX_UPLOAD_BYTES,
        gt=0,
        description="Largest accepted HAR upload in bytes",
    )

    # CSV export configuration
    csv_encoding: str = Field(
        default="gbk",
        description="Encoding of the exported domain CSV (gbk, utf-8-sig, ...)",
    )
    csv_header: str = Field(
        default="域名",
        description="Header cell of the exported domain CSV",
    )

    # Logging configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(
        default="console",
        description="Log output format: console or json",
    )

    model_config = SettingsConfigDict(
        env_prefix="HARVIEW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("csv_encoding")
    @classmethod
    def validate_csv_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError:
            raise ValueError(f"unknown encoding: {value}") from None
        return value

    @property
    def base_url(self) -> str:
        """URL the web UI is reachable at."""
        return f"http://{self.host}:{self.port}"

    def as_display_dict(self) -> dict[str, Any]:
        """Settings as a flat dict for the ``config`` command."""
        return {
            "host": self.host,
            "port": self.port,
            "open_browser": self.open_browser,
            "max_upload_bytes": self.max_upload_bytes,
            "csv_encoding": self.csv_encoding,
            "csv_header": self.csv_header,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


# Global settings instance
_settings: HarViewSettings | None = None


def get_settings() -> HarViewSettings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = HarViewSettings()
    return _settings


def reset_settings() -> None:
    """Reset the global settings instance (useful for testing)."""
    global _settings
    _settings = None
