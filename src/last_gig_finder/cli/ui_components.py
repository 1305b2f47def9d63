"""CLI UI components (Rich).

Keeps command logic apart from visual details so panels and tables can be
reused across commands.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from last_gig_finder.core.domain.models import ConcertSummary, NearbyConcert
from last_gig_finder.core.services.message_composer import format_event_date
from last_gig_finder.core.settings_store import StoredSettings


def print_banner(console: Console) -> None:
    title = Text("Last Gig Finder", style="bold cyan")
    subtitle = Text("When did they last play near you?", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def settings_line(settings: StoredSettings) -> Text:
    """Location and radius summary shown above search results."""

    return Text.assemble(
        ("📍 ", ""),
        (settings.location or "Your location", "bold"),
        ("   📏 ", ""),
        (f"{settings.max_distance} km radius", "bold"),
    )


def build_result_panel(summary: ConcertSummary) -> Panel:
    """Result card for the most recent nearby concert."""

    body = Text()
    body.append(f"{summary.years_ago.magnitude}", style="bold magenta")
    body.append(f" {summary.years_ago.label}\n\n")
    body.append(f"{summary.venue_name}\n", style="bold")
    body.append(f"{summary.location}\n")
    body.append(f"{summary.formatted_date}\n")
    body.append(f"📍 {summary.distance_km} km from you", style="dim")
    if summary.url:
        body.append(f"\n{summary.url}", style="dim underline")

    return Panel(body, title=Text(summary.artist_name, style="bold cyan"), border_style="cyan")


def build_message_panel(message: str) -> Panel:
    return Panel(Text(message), title="Message", border_style="green")


def build_concerts_table(concerts: Sequence[NearbyConcert]) -> Table:
    table = Table(title="Nearby concerts")
    table.add_column("Date", style="cyan", no_wrap=True)
    table.add_column("Venue", style="white")
    table.add_column("Location", style="magenta")
    table.add_column("Distance", style="green", justify="right")
    for concert in concerts:
        venue = concert.venue
        table.add_row(
            format_event_date(concert.event_date),
            venue.name if venue else "",
            venue.location_label if venue else "",
            f"{concert.distance_km} km",
        )
    return table
