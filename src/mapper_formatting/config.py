"""
Centralized settings for mapper formatting.

Configuration sources (priority order):
1. Environment variables (MAPPER_FORMATTING_*)
2. Default values

Environment variables:
- MAPPER_FORMATTING_LOG_LEVEL: Log level (default: WARNING)
- MAPPER_FORMATTING_LOG_FORMAT: "console" or "json" (default: console)
- MAPPER_FORMATTING_NULL_TEXT: Text used for a null value that no formatter
  or substitute handles (default: unset, the null is passed through)
"""

import os
from dataclasses import dataclass

import structlog

__all__ = ["LOG_FORMATS", "FormattingSettings", "load_settings", "settings"]

ENV_PREFIX = "MAPPER_FORMATTING_"

LOG_FORMATS = ("console", "json")


def _get_env(key: str, default: str) -> str:
    """Get environment variable with MAPPER_FORMATTING_ prefix."""
    return os.environ.get(f"{ENV_PREFIX}{key}", default)


def _get_env_optional(key: str) -> str | None:
    """Get environment variable, None when unset."""
    return os.environ.get(f"{ENV_PREFIX}{key}")


@dataclass(frozen=True)
class FormattingSettings:
    """Immutable formatting settings."""

    log_level: str = "WARNING"
    log_format: str = "console"
    null_text: str | None = None

    def __post_init__(self) -> None:
        if self.log_format not in LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {LOG_FORMATS}, got {self.log_format!r}"
            )


def load_settings() -> FormattingSettings:
    """Build settings from the current environment.

    An unknown MAPPER_FORMATTING_LOG_FORMAT falls back to console.
    """
    log_format = _get_env("LOG_FORMAT", "console").lower()
    if log_format not in LOG_FORMATS:
        structlog.get_logger(__name__).warning(
            "invalid_log_format", value=log_format, fallback="console"
        )
        log_format = "console"

    return FormattingSettings(
        log_level=_get_env("LOG_LEVEL", "WARNING"),
        log_format=log_format,
        null_text=_get_env_optional("NULL_TEXT"),
    )


# Global singleton
settings = load_settings()
