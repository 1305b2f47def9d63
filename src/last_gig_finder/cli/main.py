"""Command line entry point.

Commands:
- `setup`: save API key, location and radius.
- `search ARTIST`: find the most recent concert near you.
- `doctor`: diagnostics.
"""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import nullcontext
from typing import Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from last_gig_finder.adapters.geocoder import NominatimGeocoder
from last_gig_finder.adapters.setlist_client import SetlistClient
from last_gig_finder.cli import doctor
from last_gig_finder.cli.ui_components import (
    build_concerts_table,
    build_message_panel,
    build_result_panel,
    print_banner,
    settings_line,
)
from last_gig_finder.core.config import AppSettings
from last_gig_finder.core.domain.errors import SetupError
from last_gig_finder.core.domain.models import Coordinates
from last_gig_finder.core.services.gig_pipeline import SearchOutcome, SearchStatus, search_last_gig
from last_gig_finder.core.services.setup_service import configure, configure_from_position
from last_gig_finder.core.settings_store import StoredSettings, load_stored_settings, save_stored_settings

app = typer.Typer(no_args_is_help=True, help="Find the last time an artist played near you.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests and pipeline steps."),
) -> None:
    settings = AppSettings()
    _configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def setup(
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Your setlist.fm API key."),
    location: Optional[str] = typer.Option(None, "--location", "-l", help="City or address to search around."),
    lat: Optional[float] = typer.Option(None, "--lat", min=-90.0, max=90.0, help="Latitude of your position."),
    lon: Optional[float] = typer.Option(None, "--lon", min=-180.0, max=180.0, help="Longitude of your position."),
    max_distance: Optional[int] = typer.Option(None, "--max-distance", "-d", min=1, help="Search radius in km."),
) -> None:
    """Save the API key, your location and the search radius."""

    settings = AppSettings()
    stored = load_stored_settings(default_max_distance=settings.default_max_distance_km)

    if (lat is None) != (lon is None):
        raise typer.BadParameter("--lat and --lon must be given together")
    if lat is not None and location:
        raise typer.BadParameter("use either --location or --lat/--lon, not both")

    if api_key is None:
        api_key = typer.prompt("setlist.fm API key", default=stored.api_key or None, hide_input=True)
    if lat is None and location is None:
        location = typer.prompt("Your location", default=stored.location or "", show_default=True)

    geocoder = NominatimGeocoder(settings)

    async def _run() -> StoredSettings:
        current = stored
        if lat is not None and lon is not None:
            current = await configure_from_position(
                current,
                Coordinates(latitude=lat, longitude=lon),
                geocoder=geocoder,
            )
        return await configure(
            current,
            api_key=api_key or "",
            location=location or "",
            max_distance=max_distance or stored.max_distance,
            geocoder=geocoder,
        )

    try:
        updated = asyncio.run(_run())
    except SetupError as exc:
        _err_console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    path = save_stored_settings(updated)
    _console.print(f"[green]Saved settings to:[/green] {path}")
    _console.print(settings_line(updated))


def _outcome_payload(outcome: SearchOutcome) -> dict[str, Any]:
    return {
        "status": outcome.status.value,
        "message": outcome.message,
        "artist": outcome.artist.model_dump(mode="json") if outcome.artist else None,
        "concerts": [c.model_dump(mode="json") for c in outcome.concerts],
        "summary": outcome.summary.model_dump(mode="json") if outcome.summary else None,
    }


@app.command()
def search(
    artist: str = typer.Argument(..., help="Artist name."),
    show_all: bool = typer.Option(False, "--all", help="Also list every nearby concert."),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    """Find the most recent concert by ARTIST within your radius."""

    settings = AppSettings()
    stored = load_stored_settings(default_max_distance=settings.default_max_distance_km)
    if not stored.is_ready:
        _err_console.print("[yellow]No saved settings. Run `last-gig-finder setup` first.[/yellow]")
        raise typer.Exit(code=1)

    if not as_json:
        print_banner(_console)
        _console.print(settings_line(stored))

    with _console.status("Searching concerts...", spinner="dots") if not as_json else nullcontext():
        outcome = asyncio.run(
            search_last_gig(
                settings=stored.to_search_settings(),
                artist_name=artist,
                setlist_client=SetlistClient(settings),
                geocoder=NominatimGeocoder(settings),
            )
        )

    if as_json:
        typer.echo(json.dumps(_outcome_payload(outcome), ensure_ascii=False, indent=2))
    elif outcome.summary is not None:
        _console.print(build_result_panel(outcome.summary))
        _console.print(build_message_panel(outcome.summary.message))
        if show_all:
            _console.print(build_concerts_table(outcome.concerts))
    else:
        style = "red" if outcome.status is SearchStatus.ERROR else "yellow"
        _console.print(f"[{style}]{escape(outcome.message)}[/{style}]")

    if outcome.status is SearchStatus.ERROR:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
