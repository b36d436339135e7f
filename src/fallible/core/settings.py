"""Runtime settings for the fallible library.

Everything here is optional: the library works with the defaults. Settings
only tune logging and how much of an aggregate failure is quoted in its
message.

Fields
──────
log_level       : Structlog log level used by ``configure_logging``
json_logs       : True for JSON, False for console, None for auto-detect
service         : ``service.name`` stamped on every log event
trace_failures  : Emit a debug event every time ``failed()`` builds a failure
trace_aggregates: Emit a debug event with the counts of every aggregation
summary_limit   : Leaf messages quoted in a MULTIPLE_ERRORS message

All fields can be set via ``FALLIBLE_*`` environment variables (e.g.
``FALLIBLE_TRACE_FAILURES=1``) or a ``.env`` file.

Tags:
    settings, configuration, pydantic, environment, fallible

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FallibleSettings(BaseSettings):
    """Settings shared by every module of the library."""

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    json_logs: bool | None = None
    service: str = "fallible"
    trace_failures: bool = False
    trace_aggregates: bool = False

    # ── Aggregation ──────────────────────────────────────────────
    summary_limit: int = Field(default=3, ge=1)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level


_settings_cache: dict[str, FallibleSettings] = {}


def get_settings(*, _force_reload: bool = False) -> FallibleSettings:
    """Load, validate, and cache a :class:`FallibleSettings` instance."""
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]
    settings = FallibleSettings()
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Clear the settings cache (primarily for testing)."""
    _settings_cache.clear()


__all__ = [
    "FallibleSettings",
    "get_settings",
    "clear_settings_cache",
]
