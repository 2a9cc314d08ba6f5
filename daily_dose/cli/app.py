"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from daily_dose import __version__
from daily_dose.api.archive import ArchiveClient
from daily_dose.api.setlist import SetlistClient
from daily_dose.core.session import DailyDoseSession
from daily_dose.exceptions import (
    DailyDoseError,
    SetlistAuthError,
    SetlistRequestError,
)
from daily_dose.storage.settings_store import (
    SETTINGS_FILE_NAME,
    SettingsStore,
    get_config_dir,
)
from daily_dose.utils.playlist import generate_m3u

from .formatters import (
    format_error_with_suggestions,
    print_artists_table,
    print_config,
    print_setlist,
    print_show_panel,
    print_track_table,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("daily_dose")

app = typer.Typer(
    name="daily-dose",
    help=(
        "A show of the day from the Internet Archive live music collections."
        " Use 'daily-dose <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)

CONFIG_DIR = get_config_dir()
SETTINGS_FILE = CONFIG_DIR / SETTINGS_FILE_NAME


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-v for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current settings."
    ),
):
    """Daily Dose CLI"""
    if version:
        console.print(f"[bold]daily-dose[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    logging.getLogger("daily_dose").setLevel("DEBUG" if verbose >= 1 else "INFO")

    if show_config:
        try:
            settings = SettingsStore(SETTINGS_FILE).load()
        except DailyDoseError as e:
            console.print(format_error_with_suggestions(e))
            raise typer.Exit(code=1) from e
        print_config(SETTINGS_FILE, settings)
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def today(
    artist_name: str | None = typer.Option(
        None,
        "--artist",
        "-a",
        help="Artist to pick a show for (default: the last one used).",
    ),
    day: str | None = typer.Option(
        None, "--date", "-d", help="Day to look up as MM-DD (default: today)."
    ),
    random_artist: bool = typer.Option(
        False, "--random-artist", "-r", help="Pick the artist at random."
    ),
    no_setlist: bool = typer.Option(
        False, "--no-setlist", help="Skip the setlist.fm lookup."
    ),
    urls: bool = typer.Option(
        False, "--urls", help="Show the stream URL of every track."
    ),
    m3u: Path | None = typer.Option(  # noqa: B008
        None, "--m3u", help="Write an M3U playlist of the show to this path."
    ),
):
    """Pick the show of the day and list its tracks."""

    async def _today_async():
        store = SettingsStore(SETTINGS_FILE)
        settings = store.load()
        artist = settings.find_artist(artist_name) if artist_name else None

        async with ArchiveClient() as archive:
            session = DailyDoseSession(archive, store)
            with console.status("[cyan]Looking for a show...[/cyan]"):
                state = await session.load_show(
                    artist=artist,
                    day_marker=day,
                    randomize_artist=random_artist,
                    with_setlist=not no_setlist,
                )
            details_url = (
                archive.details_url(state.show.identifier) if state.show else ""
            )
        return state, details_url

    try:
        state, details_url = asyncio.run(_today_async())
    except DailyDoseError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    print_show_panel(state, details_url)
    if state.show is None:
        raise typer.Exit(code=1)

    print_track_table(state.tracks, show_urls=urls)
    print_setlist(state)

    if m3u and state.tracks:
        if generate_m3u(m3u, state.show, state.tracks):
            console.print(f"[green]✓ Playlist written to '{m3u}'[/green]")
        else:
            raise typer.Exit(code=1)


@app.command()
def artists():
    """List the configured artists."""
    try:
        settings = SettingsStore(SETTINGS_FILE).load()
    except DailyDoseError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e
    print_artists_table(settings.resolve_artists(), settings.last_artist_name)


@app.command(name="set-api-key")
def set_api_key(
    key: str | None = typer.Argument(None, help="Your setlist.fm API key."),
    clear: bool = typer.Option(False, "--clear", help="Remove the stored key."),
):
    """Store the setlist.fm API key used for setlists."""
    if not clear and not key:
        console.print(
            "[red]✗ No API key provided.[/red] "
            "Use: [cyan]daily-dose set-api-key <KEY>[/cyan] or [cyan]--clear[/cyan]"
        )
        raise typer.Exit(code=1)

    try:
        SettingsStore(SETTINGS_FILE).set_api_key("" if clear else key)
    except DailyDoseError as e:
        console.print(format_error_with_suggestions(e))
        raise typer.Exit(code=1) from e

    if clear:
        console.print("[green]✓ setlist.fm API key removed.[/green]")
    else:
        console.print(f"[green]✓ setlist.fm API key saved to '{SETTINGS_FILE}'[/green]")


@app.command()
def diagnose():
    """Diagnose common settings and connectivity issues."""
    console.print("\n[bold cyan]Running diagnostics...[/bold cyan]\n")
    issues_found = False
    store = SettingsStore(SETTINGS_FILE)
    settings = None

    if store.exists:
        console.print(f"[green]✓[/] Settings file exists at: [dim]{SETTINGS_FILE}[/dim]")
    else:
        console.print("[yellow]○[/] No settings file yet; defaults are used.")
    try:
        settings = store.load()
        console.print("[green]✓[/] Settings are valid and can be loaded.")
    except DailyDoseError as e:
        console.print(f"[red]✗ Settings validation failed: {e}[/red]")
        issues_found = True

    console.print("\n[dim]Testing connectivity to archive.org...[/dim]")

    async def test_archive() -> bool:
        try:
            async with ArchiveClient(timeout_s=10) as archive:
                await archive.search_shows("collection:GratefulDead", 1)
            console.print("[green]✓[/] Successfully searched the Internet Archive.")
            return True
        except DailyDoseError as e:
            console.print(f"[red]✗ Archive search failed: {e}[/red]")
            return False

    async def test_setlist_key(api_key: str, mbid: str) -> bool:
        try:
            async with SetlistClient(api_key, timeout_s=10) as client:
                await client.fetch_setlist(mbid, "08-05-1977")
            console.print("[green]✓[/] setlist.fm accepted the API key.")
            return True
        except SetlistAuthError:
            console.print("[red]✗ setlist.fm rejected the API key.[/red]")
            return False
        except SetlistRequestError as e:
            console.print(f"[red]✗ setlist.fm request failed: {e}[/red]")
            return False

    if not asyncio.run(test_archive()):
        issues_found = True

    if settings is not None:
        artist_with_id = next(
            (a for a in settings.resolve_artists() if a.has_setlist_id), None
        )
        if not settings.has_setlist_key:
            console.print("[dim]No setlist.fm API key set; setlists are disabled.[/dim]")
        elif artist_with_id is None:
            console.print("[dim]No artist has a MusicBrainz id; setlists are disabled.[/dim]")
        elif not asyncio.run(
            test_setlist_key(settings.setlist_api_key, artist_with_id.mbid)
        ):
            issues_found = True

    console.print()
    if not issues_found:
        console.print(
            "[bold green]✓ All checks passed! Your setup looks good.[/bold green]\n"
        )
    else:
        console.print(
            "[bold red]✗ Some issues were found. "
            "Please review the messages above.[/bold red]\n"
        )
        raise typer.Exit(code=1)
