"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from last_gig_finder.adapters.http_client import build_async_client, through_relay
from last_gig_finder.core.config import AppSettings, get_user_env_file
from last_gig_finder.core.settings_store import get_settings_path, load_stored_settings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(through_relay(url, settings.relay_url))
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or exc.__class__.__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    stored = load_stored_settings(default_max_distance=settings.default_max_distance_km)

    table = Table(title="Last Gig Finder Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Saved settings
    table.add_row("Settings file", "OK" if get_settings_path().exists() else "MISSING", str(get_settings_path()))
    table.add_row("API key", "OK" if stored.api_key else "MISSING", "Run `last-gig-finder setup`")
    if stored.coords is not None:
        table.add_row("Location", "OK", f"{stored.location} ({stored.coords.latitude:.2f}, {stored.coords.longitude:.2f})")
    else:
        table.add_row("Location", "MISSING", "Run `last-gig-finder setup`")
    table.add_row("Radius", "OK", f"{stored.max_distance} km")

    # Config
    table.add_row("User .env", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))
    table.add_row("Relay", "OK" if settings.relay_url else "OFF", settings.relay_url or "Direct requests")

    # Connectivity (best-effort)
    for label, url in (
        ("setlist.fm", settings.setlist_base_url),
        ("Nominatim", settings.geocoder_base_url),
    ):
        ok, detail = asyncio.run(_check_http(url, settings))
        table.add_row(label, "OK" if ok else "FAIL", detail)

    _console.print(table)
