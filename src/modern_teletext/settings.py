"""Environment-based configuration using pydantic-settings.

Settings load from ``TELETEXT_*`` environment variables and an optional
.env file. CLI options take precedence over anything loaded here.
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .navigation.router import DEFAULT_MAX_HISTORY, is_valid_page_number


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="TELETEXT_", case_sensitive=False
    )

    # Logging
    log_level: str = Field(default="INFO", description="Application log level")
    log_format: str = Field(default="text", description="Log format: json or text")

    # Navigation
    max_history_size: int = Field(default=DEFAULT_MAX_HISTORY, ge=1)
    start_page: str = Field(default="100", description="Page shown when browsing starts")

    # Pages
    pages_file: Optional[str] = Field(
        default=None, description="YAML page set; the bundled demo pages when unset"
    )

    @field_validator("start_page")
    @classmethod
    def _check_start_page(cls, value: str) -> str:
        if not is_valid_page_number(value):
            raise ValueError(f"start_page {value!r} is not a valid page number")
        return value

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return value
