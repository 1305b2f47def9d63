"""Shared fixtures for the last-gig-finder test suite."""

from __future__ import annotations

from typing import Any

import pytest

from last_gig_finder.core.config import AppSettings
from last_gig_finder.core.domain.models import Coordinates
from last_gig_finder.core.pacing import VirtualClock


# ---------------------------------------------------------------------------
# Settings and time
# ---------------------------------------------------------------------------

@pytest.fixture
def app_settings() -> AppSettings:
    return AppSettings(
        setlist_base_url="https://api.setlist.fm/rest/1.0",
        geocoder_base_url="https://nominatim.openstreetmap.org",
        relay_url=None,
        setlist_page_interval_seconds=0.2,
        geocode_interval_seconds=0.1,
        setlist_max_pages=10,
    )


@pytest.fixture
def clock() -> VirtualClock:
    return VirtualClock()


# ---------------------------------------------------------------------------
# Raw setlist.fm payloads
# ---------------------------------------------------------------------------

def make_raw_setlist(
    event_date: str,
    *,
    city: str | None = "Lisbon",
    country: str = "Portugal",
    venue: str = "Coliseu dos Recreios",
    coords: tuple[float, float] | None = None,
    setlist_id: str = "63d5a2b7",
) -> dict[str, Any]:
    city_obj: dict[str, Any] = {"country": {"code": "PT", "name": country}}
    if city is not None:
        city_obj["name"] = city
    if coords is not None:
        city_obj["coords"] = {"lat": coords[0], "long": coords[1]}
    return {
        "id": setlist_id,
        "eventDate": event_date,
        "url": f"https://www.setlist.fm/setlist/{setlist_id}.html",
        "venue": {"id": "v1", "name": venue, "city": city_obj},
    }


def make_page(
    setlists: list[dict[str, Any]],
    *,
    page: int = 1,
    items_per_page: int = 20,
    total: int | None = None,
) -> dict[str, Any]:
    return {
        "type": "setlists",
        "itemsPerPage": items_per_page,
        "page": page,
        "total": len(setlists) if total is None else total,
        "setlist": setlists,
    }


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeGeocoder:
    """In-memory geocoder recording every lookup."""

    def __init__(
        self,
        places: dict[str, Coordinates] | None = None,
        cities: dict[Coordinates, str] | None = None,
    ) -> None:
        self.places = places or {}
        self.cities = cities or {}
        self.forward_queries: list[str] = []
        self.reverse_queries: list[Coordinates] = []

    async def forward(self, place_name: str) -> Coordinates | None:
        self.forward_queries.append(place_name)
        return self.places.get(place_name)

    async def reverse(self, coords: Coordinates) -> str | None:
        self.reverse_queries.append(coords)
        return self.cities.get(coords)


@pytest.fixture
def fake_geocoder() -> FakeGeocoder:
    return FakeGeocoder()
