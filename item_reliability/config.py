"""
Analysis configuration settings.

Settings are loaded from environment variables prefixed with
``ITEM_RELIABILITY_`` (or a ``.env`` file) and are immutable once created.
The estimators never read them: callers create a ReliabilitySettings and pass
it to get_scale_report_from_settings() or setup_logging() explicitly.
"""

from typing import Literal, Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ._constants import (
    DEFAULT_DIGITS,
    CorrelationMethod,
    OutputMode,
)


class ReliabilitySettings(BaseSettings):
    """Reliability analysis settings loaded from environment variables."""

    # Environment
    ENV: Literal["development", "production", "test"] = "development"
    LOG_LEVEL: str = "INFO"

    # Analysis defaults
    DIGITS: int = Field(
        default=DEFAULT_DIGITS,
        ge=0,
        description="Decimal places of reported item statistics",
    )
    CORRELATION_METHOD: CorrelationMethod = Field(
        default="pearson",
        description="Correlation method for the mean inter-item correlation",
    )
    OUTPUT_MODE: OutputMode = Field(
        default="structured",
        description="'structured' returns the report model, 'text' a plain summary",
    )
    STANDARDIZE: bool = Field(
        default=False,
        description="Rescale items to unit variance before the item analysis",
    )

    model_config = SettingsConfigDict(
        env_prefix="ITEM_RELIABILITY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="after")
    def validate_log_level(self) -> Self:
        """Reject log levels the logging module does not know."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.LOG_LEVEL.upper() not in valid_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of {sorted(valid_levels)}, got {self.LOG_LEVEL}"
            )
        return self


def get_settings() -> ReliabilitySettings:
    """Create a settings instance from the current environment."""
    return ReliabilitySettings()
