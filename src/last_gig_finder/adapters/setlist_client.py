"""setlist.fm adapter.

Endpoints (REST 1.0):
- `GET /search/artists?artistName=<q>&sort=relevance`
- `GET /artist/<mbid>/setlists?p=<page>`

Every request carries `Accept: application/json` and the caller's
`x-api-key`. Requests are spaced by a `Pacer` to stay under the free-tier
rate limit.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from last_gig_finder.adapters.http_client import build_async_client, build_url, log_request, through_relay
from last_gig_finder.core.config import AppSettings
from last_gig_finder.core.domain.errors import InvalidCredential, NetworkError, ServiceError
from last_gig_finder.core.domain.models import ArtistRecord, Coordinates, SetlistRecord, VenueRecord
from last_gig_finder.core.interfaces.setlists import SetlistSource
from last_gig_finder.core.pacing import Pacer

logger = logging.getLogger(__name__)


def _auth_headers(api_key: str) -> dict[str, str]:
    return {"Accept": "application/json", "x-api-key": api_key}


def parse_venue(raw: object) -> VenueRecord | None:
    """Normalize a setlist.fm `venue` object."""

    if not isinstance(raw, dict):
        return None

    city = raw.get("city")
    city_name: str | None = None
    country_name = ""
    coordinates: Coordinates | None = None
    if isinstance(city, dict):
        if isinstance(city.get("name"), str) and city["name"].strip():
            city_name = city["name"]
        country = city.get("country")
        if isinstance(country, dict) and isinstance(country.get("name"), str):
            country_name = country["name"]
        coords = city.get("coords")
        if isinstance(coords, dict) and coords.get("lat") is not None and coords.get("long") is not None:
            try:
                coordinates = Coordinates(latitude=coords["lat"], longitude=coords["long"])
            except ValidationError:
                coordinates = None

    return VenueRecord(
        name=raw.get("name") or "",
        city_name=city_name,
        country_name=country_name,
        coordinates=coordinates,
    )


def parse_setlist(raw: dict[str, Any]) -> SetlistRecord | None:
    """Normalize one raw setlist; `None` when its date is unusable."""

    try:
        return SetlistRecord(
            venue=parse_venue(raw.get("venue")),
            event_date=raw.get("eventDate"),
            setlist_id=raw.get("id"),
            url=raw.get("url"),
        )
    except ValidationError:
        logger.warning("Skipping setlist %s with invalid eventDate %r", raw.get("id"), raw.get("eventDate"))
        return None


class SetlistClient(SetlistSource):
    """Artist search and paginated setlist retrieval."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        pacer: Pacer | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._pacer = pacer or Pacer(self._settings.setlist_page_interval_seconds)
        self._transport = transport
        self.max_pages = self._settings.setlist_max_pages

    def _url(self, path: str, params: dict[str, Any]) -> str:
        target = build_url(self._settings.setlist_base_url, path, params)
        return through_relay(target, self._settings.relay_url)

    def _client(self, api_key: str) -> httpx.AsyncClient:
        return build_async_client(
            self._settings,
            extra_headers=_auth_headers(api_key),
            transport=self._transport,
        )

    async def find_artist(self, name: str, api_key: str) -> ArtistRecord | None:
        url = self._url("search/artists", {"artistName": name, "sort": "relevance"})
        await self._pacer.wait()
        log_request("get", url)
        try:
            async with self._client(api_key) as client:
                resp = await client.get(url)
        except httpx.HTTPError as exc:
            raise NetworkError(str(exc) or exc.__class__.__name__) from exc

        if resp.status_code == 401:
            raise InvalidCredential()
        # setlist.fm answers 404 when a search has no results.
        if resp.status_code == 404:
            return None
        if not resp.is_success:
            raise ServiceError(resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            raise ServiceError(resp.status_code) from exc

        artists = data.get("artist") if isinstance(data, dict) else None
        if not isinstance(artists, list) or not artists:
            return None
        try:
            return ArtistRecord.model_validate(artists[0])
        except ValidationError:
            logger.warning("Top artist match for %r has no usable id", name)
            return None

    async def fetch_all_setlists(self, artist_id: str, api_key: str) -> list[SetlistRecord]:
        setlists: list[SetlistRecord] = []
        page = 1

        async with self._client(api_key) as client:
            while page <= self.max_pages:
                url = self._url(f"artist/{artist_id}/setlists", {"p": page})
                await self._pacer.wait()
                log_request("get", url)
                try:
                    resp = await client.get(url)
                except httpx.HTTPError as exc:
                    logger.warning("Setlist page %d failed for %s: %s", page, artist_id, exc)
                    break

                if not resp.is_success:
                    logger.info("Setlist page %d returned HTTP %d, stopping", page, resp.status_code)
                    break

                try:
                    data = resp.json()
                except ValueError:
                    logger.warning("Setlist page %d returned invalid JSON, stopping", page)
                    break
                if not isinstance(data, dict):
                    break

                raw_setlists = data.get("setlist")
                if not isinstance(raw_setlists, list) or not raw_setlists:
                    break

                for raw in raw_setlists:
                    if not isinstance(raw, dict):
                        continue
                    record = parse_setlist(raw)
                    if record is not None:
                        setlists.append(record)

                items_per_page = data.get("itemsPerPage")
                total = data.get("total")
                if isinstance(items_per_page, int) and isinstance(total, int):
                    if page * items_per_page >= total:
                        break
                page += 1

        logger.info("Fetched %d setlists for %s", len(setlists), artist_id)
        return setlists
