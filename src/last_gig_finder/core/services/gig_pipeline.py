"""Last-gig search orchestration.

artist lookup -> paginated setlists -> venue geocoding and radius filter ->
recency sort -> result card for the most recent concert.

The CLI delegates the whole flow to `search_last_gig` and only renders the
returned `SearchOutcome`. Every failure is caught here once, logged, and turned
into a single user-facing message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from last_gig_finder.core.domain.errors import LastGigError
from last_gig_finder.core.domain.models import ArtistRecord, ConcertSummary, NearbyConcert, SearchSettings
from last_gig_finder.core.interfaces.geocoder import Geocoder
from last_gig_finder.core.interfaces.setlists import SetlistSource
from last_gig_finder.core.services.concert_locator import locate_nearby
from last_gig_finder.core.services.message_composer import build_summary

logger = logging.getLogger(__name__)


class SearchStatus(str, Enum):
    FOUND = "found"
    ARTIST_NOT_FOUND = "artist_not_found"
    NO_SETLISTS = "no_setlists"
    NONE_NEARBY = "none_nearby"
    ERROR = "error"


@dataclass
class SearchOutcome:
    """Output of one search invocation."""

    status: SearchStatus
    message: str = ""
    artist: ArtistRecord | None = None
    concerts: list[NearbyConcert] = field(default_factory=list)
    summary: ConcertSummary | None = None

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND


async def search_last_gig(
    *,
    settings: SearchSettings,
    artist_name: str,
    setlist_client: SetlistSource,
    geocoder: Geocoder,
    now: datetime | None = None,
) -> SearchOutcome:
    query = artist_name.strip()
    if not query:
        return SearchOutcome(status=SearchStatus.ERROR, message="Please enter an artist name")

    try:
        artist = await setlist_client.find_artist(query, settings.api_key)
        if artist is None:
            return SearchOutcome(
                status=SearchStatus.ARTIST_NOT_FOUND,
                message="Artist not found. Try a different spelling.",
            )

        setlists = await setlist_client.fetch_all_setlists(artist.external_id, settings.api_key)
        if not setlists:
            return SearchOutcome(
                status=SearchStatus.NO_SETLISTS,
                message="No concerts found for this artist.",
                artist=artist,
            )

        concerts = await locate_nearby(
            setlists,
            settings.origin,
            settings.max_distance_km,
            geocoder=geocoder,
        )
        if not concerts:
            return SearchOutcome(
                status=SearchStatus.NONE_NEARBY,
                message=f"No concerts found within {settings.max_distance_km} km of your location.",
                artist=artist,
            )

        summary = build_summary(artist.display_name, concerts[0], now=now)
    except LastGigError as exc:
        logger.warning("Search for %r failed: %s", query, exc)
        return SearchOutcome(status=SearchStatus.ERROR, message=f"Error: {exc.message}")
    except Exception as exc:
        logger.exception("Unexpected failure while searching for %r", query)
        return SearchOutcome(status=SearchStatus.ERROR, message=f"Error: {exc}")

    return SearchOutcome(
        status=SearchStatus.FOUND,
        message=f"Last played near you {summary.years_ago.magnitude} {summary.years_ago.label}.",
        artist=artist,
        concerts=concerts,
        summary=summary,
    )
