"""Persisted user settings.

A single JSON blob (API key, last location text, resolved coordinates,
radius) kept under a fixed file name in the user config directory.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from last_gig_finder.core.config import get_user_config_dir
from last_gig_finder.core.domain.models import Coordinates, SearchSettings

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "lastGigFinderSettings.json"


def get_settings_path() -> Path:
    return get_user_config_dir() / SETTINGS_FILENAME


class StoredSettings(BaseModel):
    api_key: str = ""
    location: str = ""
    coords: Coordinates | None = None
    max_distance: int = Field(default=100, gt=0)

    @property
    def is_ready(self) -> bool:
        """Enough to run a search."""

        return bool(self.api_key) and self.coords is not None

    def to_search_settings(self) -> SearchSettings:
        if not self.is_ready:
            raise ValueError("Settings are incomplete: run `setup` first.")
        assert self.coords is not None
        return SearchSettings(
            api_key=self.api_key,
            origin=self.coords,
            max_distance_km=self.max_distance,
        )


def load_stored_settings(path: Path | None = None, *, default_max_distance: int = 100) -> StoredSettings:
    """Read the settings blob; defaults when missing or unreadable."""

    path = path or get_settings_path()
    if not path.exists():
        return StoredSettings(max_distance=default_max_distance)
    try:
        return StoredSettings.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, ValidationError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return StoredSettings(max_distance=default_max_distance)


def save_stored_settings(settings: StoredSettings, path: Path | None = None) -> Path:
    path = path or get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = settings.model_dump(mode="json")
    path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return path
