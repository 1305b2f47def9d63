"""Turn user input into complete `StoredSettings`."""

from __future__ import annotations

import logging

from last_gig_finder.core.domain.errors import SetupError
from last_gig_finder.core.domain.models import Coordinates
from last_gig_finder.core.interfaces.geocoder import Geocoder
from last_gig_finder.core.settings_store import StoredSettings

logger = logging.getLogger(__name__)

FALLBACK_LOCATION_LABEL = "Your location"


async def configure(
    stored: StoredSettings,
    *,
    api_key: str,
    location: str,
    max_distance: int,
    geocoder: Geocoder,
) -> StoredSettings:
    """Validate the form values and geocode the location text when needed.

    The text is geocoded when no coordinates are known yet or when it differs
    from the text the current coordinates were resolved from.
    """

    api_key = api_key.strip()
    location = location.strip()

    if not api_key:
        raise SetupError("Please enter your Setlist.fm API key")
    if max_distance <= 0:
        raise SetupError("The search radius must be a positive number of km")
    if not location and stored.coords is None:
        raise SetupError("Please enter a location or use your current position")

    coords = stored.coords
    if location and (coords is None or location != stored.location):
        coords = await geocoder.forward(location)
        if coords is None:
            raise SetupError("Could not find that location. Please try a different city name.")
        logger.info("Resolved %r to %s, %s", location, coords.latitude, coords.longitude)

    return StoredSettings(
        api_key=api_key,
        location=location or stored.location,
        coords=coords,
        max_distance=max_distance,
    )


async def configure_from_position(
    stored: StoredSettings,
    coords: Coordinates,
    *,
    geocoder: Geocoder,
) -> StoredSettings:
    """Use a device position as the origin and name it by reverse geocoding."""

    city = await geocoder.reverse(coords)
    return stored.model_copy(update={"coords": coords, "location": city or FALLBACK_LOCATION_LABEL})
