"""Tests for persisted settings and the setup service."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from conftest import FakeGeocoder
from last_gig_finder.core.domain.errors import SetupError
from last_gig_finder.core.domain.models import Coordinates
from last_gig_finder.core.services.setup_service import configure, configure_from_position
from last_gig_finder.core.settings_store import StoredSettings, load_stored_settings, save_stored_settings

LISBON = Coordinates(latitude=38.7223, longitude=-9.1393)
PORTO = Coordinates(latitude=41.1579, longitude=-8.6291)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class TestStore:
    def test_save_then_load(self, tmp_path: Path):
        path = tmp_path / "nested" / "settings.json"
        stored = StoredSettings(api_key="k", location="Lisbon", coords=LISBON, max_distance=150)

        assert save_stored_settings(stored, path) == path
        assert load_stored_settings(path) == stored

        payload = json.loads(path.read_text(encoding="utf-8"))
        assert payload["coords"] == {"latitude": 38.7223, "longitude": -9.1393}

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        stored = load_stored_settings(tmp_path / "absent.json", default_max_distance=80)
        assert stored == StoredSettings(max_distance=80)
        assert not stored.is_ready

    def test_corrupt_file_gives_defaults(self, tmp_path: Path):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_stored_settings(path) == StoredSettings()

    def test_to_search_settings(self):
        stored = StoredSettings(api_key="k", location="Lisbon", coords=LISBON, max_distance=150)
        search = stored.to_search_settings()
        assert search.api_key == "k"
        assert search.origin == LISBON
        assert search.max_distance_km == 150

    def test_incomplete_settings_cannot_search(self):
        with pytest.raises(ValueError):
            StoredSettings(api_key="k").to_search_settings()


# ---------------------------------------------------------------------------
# Setup service
# ---------------------------------------------------------------------------

class TestConfigure:
    @pytest.mark.asyncio
    async def test_geocodes_new_location(self):
        geocoder = FakeGeocoder(places={"Lisbon": LISBON})

        updated = await configure(
            StoredSettings(),
            api_key="  key ",
            location=" Lisbon ",
            max_distance=120,
            geocoder=geocoder,
        )

        assert updated == StoredSettings(api_key="key", location="Lisbon", coords=LISBON, max_distance=120)
        assert geocoder.forward_queries == ["Lisbon"]

    @pytest.mark.asyncio
    async def test_unchanged_location_is_not_geocoded_again(self):
        geocoder = FakeGeocoder()
        stored = StoredSettings(api_key="old", location="Lisbon", coords=LISBON)

        updated = await configure(stored, api_key="new", location="Lisbon", max_distance=50, geocoder=geocoder)

        assert updated.coords == LISBON
        assert updated.api_key == "new"
        assert geocoder.forward_queries == []

    @pytest.mark.asyncio
    async def test_changed_location_is_geocoded(self):
        geocoder = FakeGeocoder(places={"Porto": PORTO})
        stored = StoredSettings(api_key="k", location="Lisbon", coords=LISBON)

        updated = await configure(stored, api_key="k", location="Porto", max_distance=50, geocoder=geocoder)

        assert updated.coords == PORTO
        assert updated.location == "Porto"

    @pytest.mark.asyncio
    async def test_position_without_text_is_kept(self):
        stored = StoredSettings(location="Your location", coords=LISBON)

        updated = await configure(stored, api_key="k", location="", max_distance=50, geocoder=FakeGeocoder())

        assert updated.coords == LISBON
        assert updated.location == "Your location"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"api_key": " ", "location": "Lisbon"}, "Please enter your Setlist.fm API key"),
            ({"api_key": "k", "location": ""}, "Please enter a location or use your current position"),
            ({"api_key": "k", "location": "Atlantis"}, "Could not find that location. Please try a different city name."),
        ],
    )
    async def test_rejects_incomplete_input(self, kwargs, message):
        with pytest.raises(SetupError) as exc_info:
            await configure(StoredSettings(), max_distance=100, geocoder=FakeGeocoder(), **kwargs)
        assert exc_info.value.message == message


class TestConfigureFromPosition:
    @pytest.mark.asyncio
    async def test_names_position_by_reverse_geocoding(self):
        geocoder = FakeGeocoder(cities={LISBON: "Lisboa"})

        updated = await configure_from_position(StoredSettings(api_key="k"), LISBON, geocoder=geocoder)

        assert updated.coords == LISBON
        assert updated.location == "Lisboa"
        assert updated.api_key == "k"

    @pytest.mark.asyncio
    async def test_falls_back_to_generic_label(self):
        updated = await configure_from_position(StoredSettings(), PORTO, geocoder=FakeGeocoder())
        assert updated.location == "Your location"
        assert updated.coords == PORTO
