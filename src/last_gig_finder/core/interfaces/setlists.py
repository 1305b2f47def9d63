"""Setlist source contract."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from last_gig_finder.core.domain.models import ArtistRecord, SetlistRecord


@runtime_checkable
class SetlistSource(Protocol):
    async def find_artist(self, name: str, api_key: str) -> ArtistRecord | None:
        """Top relevance match for `name`, or `None` when nothing matches."""

        ...

    async def fetch_all_setlists(self, artist_id: str, api_key: str) -> list[SetlistRecord]:
        """Every setlist reachable within the page cap, in API order."""

        ...
