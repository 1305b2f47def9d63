"""Nearby concert resolution.

Given an artist's setlists, resolve each venue to coordinates, keep the ones
inside the radius and order them most recent first.
"""

from __future__ import annotations

import logging
from typing import Sequence

from last_gig_finder.core.domain.geo import haversine_km
from last_gig_finder.core.domain.models import Coordinates, NearbyConcert, SetlistRecord, VenueRecord
from last_gig_finder.core.interfaces.geocoder import Geocoder

logger = logging.getLogger(__name__)


def venue_query(venue: VenueRecord) -> str:
    """Free-text geocoding query for a venue's city."""

    return f"{venue.city_name}, {venue.country_name}"


async def resolve_venue_coordinates(venue: VenueRecord, *, geocoder: Geocoder) -> Coordinates | None:
    if venue.coordinates is not None:
        return venue.coordinates
    return await geocoder.forward(venue_query(venue))


async def locate_nearby(
    setlists: Sequence[SetlistRecord],
    origin: Coordinates,
    max_distance_km: int,
    *,
    geocoder: Geocoder,
) -> list[NearbyConcert]:
    """Setlists within `max_distance_km` of `origin`, newest first.

    Lookups run one at a time; the geocoder's pacer spaces them out.
    """

    nearby: list[NearbyConcert] = []

    for setlist in setlists:
        venue = setlist.venue
        if venue is None or not venue.city_name:
            continue

        coords = await resolve_venue_coordinates(venue, geocoder=geocoder)
        if coords is None:
            logger.debug("No coordinates for %s, skipping", venue_query(venue))
            continue

        distance = haversine_km(origin, coords)
        if distance > max_distance_km:
            continue

        nearby.append(
            NearbyConcert(
                **dict(setlist),
                distance_km=round(distance),
                venue_coordinates=coords,
            )
        )

    # sorted() is stable: same-day concerts keep API order.
    nearby = sorted(nearby, key=lambda concert: concert.event_date, reverse=True)
    logger.info("%d of %d setlists within %d km", len(nearby), len(setlists), max_distance_km)
    return nearby
