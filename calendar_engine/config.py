"""Configuration helpers for the calendar engine service and CLI."""
from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import find_dotenv, load_dotenv

from .constants import DEFAULT_TOP_N


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(RuntimeError):
    """Raised when configuration values are malformed."""


@dataclass(slots=True)
class Settings:
    """Runtime configuration for the API and CLI."""

    environment: str = "local"
    log_level: str = "INFO"
    default_time_zone: str = "UTC"
    search_top_n: int = DEFAULT_TOP_N
    allowed_frontend: Optional[str] = None


def load_settings(*, use_dotenv: bool = True) -> Settings:
    """Load settings from environment variables.

    Args:
        use_dotenv: Read the nearest ``.env`` file above the working directory
            first (existing variables win).

    Returns:
        Settings with every value validated.

    Raises:
        ConfigError: if a variable is present but malformed.
    """
    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    environment = os.getenv("CALENDAR_ENGINE_ENV", "local").strip() or "local"

    log_level = os.getenv("CALENDAR_ENGINE_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise ConfigError(
            f"CALENDAR_ENGINE_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}; got {log_level!r}"
        )

    time_zone = os.getenv("CALENDAR_ENGINE_TIME_ZONE", "UTC").strip()
    try:
        ZoneInfo(time_zone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"CALENDAR_ENGINE_TIME_ZONE is not a known time zone: {time_zone!r}") from exc

    raw_top_n = os.getenv("CALENDAR_ENGINE_TOP_N", str(DEFAULT_TOP_N)).strip()
    try:
        top_n = int(raw_top_n)
    except ValueError as exc:
        raise ConfigError(f"CALENDAR_ENGINE_TOP_N must be an integer; got {raw_top_n!r}") from exc
    if top_n <= 0:
        raise ConfigError(f"CALENDAR_ENGINE_TOP_N must be positive; got {top_n}")

    frontend = os.getenv("CALENDAR_ENGINE_ALLOWED_FRONTEND", "").strip() or None

    return Settings(
        environment=environment,
        log_level=log_level,
        default_time_zone=time_zone,
        search_top_n=top_n,
        allowed_frontend=frontend,
    )
