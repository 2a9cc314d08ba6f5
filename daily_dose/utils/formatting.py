"""
Helper functions for formatting data into human-readable strings.
"""

from typing import Iterable, Optional

from daily_dose.models import Artist, SetlistSet, Show

NO_SETLIST_TEXT = "No setlist available for this show."


def format_show_label(show: Optional[Show], artist: Optional[Artist]) -> str:
    """
    Builds the headline for a loaded show, e.g.
    'Grateful Dead Show of the Day: 1977-05-08 - Barton Hall'.
    """
    artist_name = artist.name if artist else "Show"
    if show is None:
        return f"{artist_name}: —"
    kind = "Random Show" if show.is_random else "Show of the Day"
    return f"{artist_name} {kind}: {show.date} - {show.title or show.identifier}"


def format_setlist_text(sets: Iterable[SetlistSet]) -> str:
    """Renders setlist sets as plain text, one bullet per song."""
    blocks = []
    for setlist_set in sets:
        lines = [f"{setlist_set.name}:"]
        lines.extend(f"• {song}" for song in setlist_set.songs)
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) if blocks else NO_SETLIST_TEXT


def format_clock(seconds: float) -> str:
    """Formats a playback position as mm:ss."""
    s = max(0, int(seconds))
    minutes, secs = divmod(s, 60)
    return f"{minutes:02d}:{secs:02d}"
