"""
Core application engine.

`ShowSelector` resolves an artist and a day to a show through a cascade of
archive searches, `TrackResolver` turns the chosen show into a playable track
list, and `DailyDoseSession` ties both together for a front end.
"""

from .playback import PlaybackQueue, RepeatMode
from .session import DailyDoseSession, SessionState
from .show_selector import ShowSelector, filter_shows_by_artist
from .track_resolver import TrackResolver

__all__ = [
    "DailyDoseSession",
    "PlaybackQueue",
    "RepeatMode",
    "SessionState",
    "ShowSelector",
    "TrackResolver",
    "filter_shows_by_artist",
]
