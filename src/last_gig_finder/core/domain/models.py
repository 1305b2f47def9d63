"""Domain models (Pydantic v2).

These models describe *what* a concert lookup works with, not *how* the data is
fetched. Raw setlist.fm payloads are normalized into them by the adapters.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

SETLIST_DATE_FORMAT = "%d-%m-%Y"


def parse_setlist_date(value: str) -> date:
    """Parse a setlist.fm `dd-MM-yyyy` date into a calendar date."""

    return datetime.strptime(value.strip(), SETLIST_DATE_FORMAT).date()


class Coordinates(BaseModel):
    """Immutable latitude/longitude pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class SearchSettings(BaseModel):
    """Per-search parameters supplied by the caller."""

    model_config = ConfigDict(frozen=True)

    api_key: str = Field(
        ...,
        min_length=1,
        description="setlist.fm API key, passed through untouched.",
    )
    origin: Coordinates = Field(
        ...,
        description="Where the user is.",
    )
    max_distance_km: int = Field(
        ...,
        gt=0,
        description="Search radius in kilometres.",
    )


class ArtistRecord(BaseModel):
    """Top match of an artist search."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    external_id: str = Field(
        ...,
        alias="mbid",
        min_length=1,
        description="Stable artist identifier (MusicBrainz id).",
    )
    display_name: str = Field(
        ...,
        alias="name",
        description="Artist name as spelled by setlist.fm.",
    )


class VenueRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    city_name: str | None = None
    country_name: str = ""
    coordinates: Coordinates | None = None

    @property
    def location_label(self) -> str:
        """`"City, Country"` as shown on the result card."""

        return f"{self.city_name or ''}, {self.country_name}"


class SetlistRecord(BaseModel):
    """One historical performance of an artist."""

    model_config = ConfigDict(frozen=True)

    venue: VenueRecord | None = None
    event_date: date
    setlist_id: str | None = None
    url: str | None = None

    @field_validator("event_date", mode="before")
    @classmethod
    def _parse_event_date(cls, value: object) -> object:
        if isinstance(value, str):
            return parse_setlist_date(value)
        return value


class NearbyConcert(SetlistRecord):
    """A setlist that passed the radius filter."""

    distance_km: int = Field(..., ge=0)
    venue_coordinates: Coordinates


class TimeUnit(str, Enum):
    DAY = "day"
    MONTH = "month"
    YEAR = "year"


class YearsAgo(BaseModel):
    """Elapsed time since a concert, bucketed for display."""

    model_config = ConfigDict(frozen=True)

    magnitude: int = Field(..., ge=0)
    unit: TimeUnit

    @property
    def unit_label(self) -> str:
        return self.unit.value if self.magnitude == 1 else f"{self.unit.value}s"

    @property
    def label(self) -> str:
        return f"{self.unit_label} ago"


class ConcertSummary(BaseModel):
    """Display fields for the most recent nearby concert."""

    model_config = ConfigDict(frozen=True)

    artist_name: str
    years_ago: YearsAgo
    venue_name: str
    location: str
    formatted_date: str
    distance_km: int
    message: str
    url: str | None = None
