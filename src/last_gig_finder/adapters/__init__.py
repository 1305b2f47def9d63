"""Remote service adapters (setlist.fm, Nominatim).

Each module implements a Protocol from `last_gig_finder.core.interfaces`.
"""

from last_gig_finder.adapters.geocoder import NominatimGeocoder
from last_gig_finder.adapters.setlist_client import SetlistClient

__all__ = [
    "NominatimGeocoder",
    "SetlistClient",
]
