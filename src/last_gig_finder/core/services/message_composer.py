"""Result card and outreach message.

The message is rendered from `templates/outreach_message.txt` with Jinja2.
The template only interpolates; singular/plural wording is already decided by
`YearsAgo`.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template, select_autoescape

from last_gig_finder.core.domain.models import ConcertSummary, NearbyConcert, TimeUnit, YearsAgo

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
_SECONDS_PER_DAY = 24 * 60 * 60


@lru_cache(maxsize=1)
def _get_template() -> Template:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )
    return env.get_template("outreach_message.txt")


def summarize(event_date: date, *, now: datetime | None = None) -> YearsAgo:
    """Bucket the time elapsed since `event_date`.

    Whole days are the ceiling of the absolute difference between `now` and
    midnight of the event day. Under 30 days counts days, under 365 counts
    30-day months, anything longer counts 365-day years.
    """

    now = now or datetime.now()
    event_start = datetime(event_date.year, event_date.month, event_date.day, tzinfo=now.tzinfo)
    days = math.ceil(abs((now - event_start).total_seconds()) / _SECONDS_PER_DAY)

    if days < 30:
        return YearsAgo(magnitude=days, unit=TimeUnit.DAY)
    if days < 365:
        return YearsAgo(magnitude=days // 30, unit=TimeUnit.MONTH)
    return YearsAgo(magnitude=days // 365, unit=TimeUnit.YEAR)


def format_event_date(event_date: date) -> str:
    """Long US form, e.g. `Saturday, June 1, 2024`."""

    return f"{event_date:%A}, {event_date:%B} {event_date.day}, {event_date.year}"


def compose(artist_name: str, years_ago: YearsAgo, concert: NearbyConcert) -> str:
    venue = concert.venue
    return _get_template().render(
        artist_name=artist_name,
        years_ago=years_ago,
        city_name=venue.city_name if venue else "",
        venue_name=venue.name if venue else "",
        formatted_date=format_event_date(concert.event_date),
    )


def build_summary(artist_name: str, concert: NearbyConcert, *, now: datetime | None = None) -> ConcertSummary:
    """All display fields for the result card of `concert`."""

    years_ago = summarize(concert.event_date, now=now)
    venue = concert.venue
    return ConcertSummary(
        artist_name=artist_name,
        years_ago=years_ago,
        venue_name=venue.name if venue else "",
        location=venue.location_label if venue else "",
        formatted_date=format_event_date(concert.event_date),
        distance_km=concert.distance_km,
        message=compose(artist_name, years_ago, concert),
        url=concert.url,
    )
