"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from daily_dose.core.session import SessionState
from daily_dose.models import AppSettings, Artist, Track


def format_error_with_suggestions(
    error: Exception, context: Optional[dict] = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ArchiveRequestError": [
            "• A network connection issue occurred.",
            "• archive.org might be temporarily unavailable.",
            "• Run `daily-dose diagnose` to check connectivity.",
        ],
        "SetlistAuthError": [
            "• Your setlist.fm API key was rejected.",
            "• Run `daily-dose set-api-key <KEY>` with a valid key.",
        ],
        "SetlistRequestError": [
            "• setlist.fm might be temporarily unavailable.",
            "• Use `--no-setlist` to skip the setlist lookup.",
        ],
        "ConfigurationError": [
            "• Check the settings file shown by `daily-dose --show-config`.",
            "• Delete the file to start over with default settings.",
        ],
        "InvalidDateMarkerError": [
            "• Dates are given as MM-DD, e.g. `--date 05-08`.",
        ],
        "UnknownArtistError": [
            "• Run `daily-dose artists` to list the configured artists.",
            "• Quote names containing spaces: `--artist \"Grateful Dead\"`.",
        ],
        "TimeoutError": [
            "• A request timed out, which may indicate a slow connection.",
            "• Please try again in a few minutes.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -v for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(settings_path: Path, settings: AppSettings):
    """Displays the current settings, hiding the API key."""
    console = Console()
    api_key = escape("[hidden]") if settings.setlist_api_key else "(not set)"
    artists_source = "custom" if settings.artists else "default"
    content = (
        f"setlist_api_key = {api_key}\n"
        f"last_artist_name = {escape(settings.last_artist_name or '-')}\n"
        f"last_show_identifier = {escape(settings.last_show_identifier or '-')}\n"
        f"artists = {len(settings.resolve_artists())} ({artists_source})"
    )
    console.print(
        Panel(
            content,
            title=f"Settings ([dim]{settings_path}[/dim])",
            border_style="cyan",
        )
    )


def print_artists_table(artists: Sequence[Artist], selected: Optional[str] = None):
    """Displays the configured artists and how their shows are told apart."""
    console = Console()
    table = Table(title="Artists", box=box.ROUNDED)
    table.add_column("Name", style="cyan")
    table.add_column("Collection")
    table.add_column("Must contain", style="green")
    table.add_column("Must not contain", style="red")
    table.add_column("Setlists", justify="center")

    for artist in artists:
        name = escape(artist.name)
        if artist.name == selected:
            name = f"[bold]{name}[/bold] (last)"
        table.add_row(
            name,
            artist.collection,
            artist.collection_filter_keyword or "",
            artist.exclude_keyword or "",
            "✓" if artist.has_setlist_id else "✗",
        )
    console.print(table)


def print_show_panel(state: SessionState, details_url: str):
    """Displays the loaded show and the session status."""
    console = Console()
    show = state.show
    if show is None:
        console.print(f"[yellow]{escape(state.status)}[/yellow]")
        return

    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold cyan", justify="right")
    grid.add_column()
    grid.add_row("Date:", escape(show.date or "unknown"))
    grid.add_row("Title:", escape(show.title or show.identifier))
    grid.add_row("Identifier:", f"[link={details_url}]{escape(show.identifier)}[/link]")
    grid.add_row("Tracks:", str(len(state.tracks)))

    kind = "Random Show" if show.is_random else "Show of the Day"
    artist_name = state.artist.name if state.artist else "Show"
    border_color = "yellow" if show.is_random else "green"
    console.print()
    console.print(
        Panel(
            grid,
            title=f"🎵 [bold]{escape(artist_name)} {kind}[/bold]",
            subtitle=escape(state.status),
            border_style=border_color,
            expand=False,
            padding=(1, 2),
        )
    )


def print_track_table(tracks: Sequence[Track], show_urls: bool = False):
    """Displays the resolved track list in play order."""
    console = Console()
    if not tracks:
        console.print("[yellow]No playable tracks found.[/yellow]")
        return

    table = Table(box=box.SIMPLE, show_header=True)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Track", style="white")
    if show_urls:
        table.add_column("Stream URL", style="dim", overflow="fold")

    for i, track in enumerate(tracks, 1):
        row = [str(i), escape(track.display_text)]
        if show_urls:
            row.append(track.url)
        table.add_row(*row)
    console.print(table)


def print_setlist(state: SessionState):
    """Displays the setlist, or the reason there is none."""
    text = state.setlist_text
    if not text:
        return
    console = Console()
    console.print(
        Panel(
            Text(text),
            title="[bold]Setlist[/bold] [dim](setlist.fm)[/dim]",
            border_style="magenta",
            expand=False,
        )
    )
