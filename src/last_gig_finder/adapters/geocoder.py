"""Geocoder: OpenStreetMap Nominatim.

- Forward: `GET /search?format=json&q=<text>&limit=1`
- Reverse: `GET /reverse?format=json&lat=<lat>&lon=<lon>`

Lookups never raise. No match, HTTP errors and transport failures all come
back as `None` (logged), so callers simply skip what cannot be located.
"""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from last_gig_finder.adapters.http_client import build_async_client, build_url, log_request, through_relay
from last_gig_finder.core.config import AppSettings
from last_gig_finder.core.domain.models import Coordinates
from last_gig_finder.core.interfaces.geocoder import Geocoder
from last_gig_finder.core.pacing import Pacer

logger = logging.getLogger(__name__)

# Most specific first.
_PLACE_KEYS = ("city", "town", "village", "municipality")


class NominatimGeocoder(Geocoder):
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        pacer: Pacer | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._pacer = pacer or Pacer(self._settings.geocode_interval_seconds)
        self._transport = transport

    async def _get_json(self, path: str, params: dict[str, object]) -> object | None:
        target = build_url(self._settings.geocoder_base_url, path, params)
        url = through_relay(target, self._settings.relay_url)
        await self._pacer.wait()
        log_request("get", url)
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                resp = await client.get(url)
            if resp.status_code != 200:
                logger.warning("Geocoding %s returned HTTP %d", path, resp.status_code)
                return None
            return resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Geocoding error on %s: %s", path, exc)
            return None

    async def forward(self, place_name: str) -> Coordinates | None:
        data = await self._get_json("search", {"format": "json", "q": place_name, "limit": 1})
        if not isinstance(data, list) or not data:
            return None
        first = data[0]
        if not isinstance(first, dict):
            return None
        try:
            return Coordinates(latitude=float(first["lat"]), longitude=float(first["lon"]))
        except (KeyError, TypeError, ValueError, ValidationError):
            logger.warning("Unusable geocoding match for %r: %r", place_name, first)
            return None

    async def reverse(self, coords: Coordinates) -> str | None:
        data = await self._get_json(
            "reverse",
            {"format": "json", "lat": coords.latitude, "lon": coords.longitude},
        )
        if not isinstance(data, dict):
            return None
        address = data.get("address")
        if not isinstance(address, dict):
            return None
        for key in _PLACE_KEYS:
            value = address.get(key)
            if isinstance(value, str) and value:
                return value
        return None
