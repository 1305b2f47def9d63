"""Core configuration.

- Centralizes environment variables (pydantic-settings) away from the CLI.
- Adapters (setlist.fm, Nominatim) read timeouts, URLs and pacing from here.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "last-gig-finder"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "last-gig-finder"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "last-gig-finder"
    return Path.home() / ".config" / "last-gig-finder"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Application-wide configuration.

    Values come from `LAST_GIG_*` environment variables, the project `.env`
    and the `.env` in the user config directory, in that order.
    """

    model_config = SettingsConfigDict(
        env_prefix="LAST_GIG_",
        extra="ignore",
        case_sensitive=False,
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default="LastGigFinder/1.0",
        min_length=1,
        description="Client identification sent to every remote service.",
    )

    setlist_base_url: str = Field(
        default="https://api.setlist.fm/rest/1.0",
        min_length=8,
        description="Base URL of the setlist.fm REST API.",
    )
    geocoder_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        min_length=8,
        description="Base URL of the Nominatim geocoding service.",
    )
    relay_url: str | None = Field(
        default=None,
        description="Optional pass-through relay; the quoted target URL is appended to it.",
    )

    setlist_page_interval_seconds: float = Field(
        default=0.2,
        ge=0,
        description="Minimum spacing between setlist.fm requests.",
    )
    geocode_interval_seconds: float = Field(
        default=0.1,
        ge=0,
        description="Minimum spacing between geocoding requests.",
    )
    setlist_max_pages: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Hard cap on setlist pages fetched per artist.",
    )

    default_max_distance_km: int = Field(
        default=100,
        gt=0,
        description="Search radius used when none was saved.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Root log level for the CLI (DEBUG, INFO, WARNING, ...).",
    )
