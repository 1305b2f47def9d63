"""Geocoding contract.

The concert locator and the setup service depend on this Protocol, not on
Nominatim, so tests can pass a plain fake.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from last_gig_finder.core.domain.models import Coordinates


@runtime_checkable
class Geocoder(Protocol):
    """Minimal geocoding contract.

    Rules:
    - Both lookups are async because they do HTTP.
    - "Not found" and service failures both come back as `None`.
    """

    async def forward(self, place_name: str) -> Coordinates | None:
        """Best match for a free-text place name."""

        ...

    async def reverse(self, coords: Coordinates) -> str | None:
        """City/town/village/municipality name for a coordinate pair."""

        ...
