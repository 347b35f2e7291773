"""Application settings with environment variable support.

Uses pydantic-settings for typed configuration validation.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from brokersim.core.exceptions import ConfigurationError


class AppSettings(BaseSettings):
    """Application configuration loaded from environment variables."""

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Render logs as JSON lines")
    log_file: Path | None = Field(
        default=Path("logs/brokersim.log"), description="Rotating log file; unset for console only"
    )

    # Simulation horizon
    default_duration_months: int = Field(default=12, ge=1, description="Initial projection horizon")
    duration_step_months: int = Field(default=12, ge=1, description="Months added/removed per extend/go-back")
    max_duration_months: int = Field(default=600, ge=1, description="Upper bound for extend")

    model_config = {
        "env_prefix": "BROKERSIM_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def _check_horizon(self) -> AppSettings:
        if self.default_duration_months > self.max_duration_months:
            raise ConfigurationError(
                f"default_duration_months ({self.default_duration_months}) exceeds "
                f"max_duration_months ({self.max_duration_months})"
            )
        return self


@lru_cache
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
