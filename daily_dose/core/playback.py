"""
Track navigation for a loaded show, independent of any audio backend.
"""

from enum import Enum
from typing import Optional, Sequence

from daily_dose.models import Track


class RepeatMode(Enum):
    """Playlist repeat behavior."""

    NONE = "none"  # Stop at the end
    ALL = "all"  # Wrap around to the first track
    ONE = "one"  # Replay the current track

    @property
    def label(self) -> str:
        return {
            RepeatMode.NONE: "None",
            RepeatMode.ALL: "Repeat All",
            RepeatMode.ONE: "Repeat One",
        }[self]


class PlaybackQueue:
    """
    Keeps the current position in a track list and decides what plays next.

    The queue never talks to a player: the caller asks it which track to play
    and reports back when a track ended.
    """

    def __init__(
        self, tracks: Sequence[Track] = (), repeat_mode: RepeatMode = RepeatMode.NONE
    ):
        self.tracks = tuple(tracks)
        self.repeat_mode = repeat_mode
        self.index = 0 if self.tracks else -1

    @property
    def current(self) -> Optional[Track]:
        if 0 <= self.index < len(self.tracks):
            return self.tracks[self.index]
        return None

    def select(self, index: int) -> Optional[Track]:
        """Moves to a track by position. Out-of-range positions are ignored."""
        if 0 <= index < len(self.tracks):
            self.index = index
            return self.tracks[index]
        return None

    def next(self) -> Optional[Track]:
        """Moves to the next track, if there is one."""
        return self.select(self.index + 1)

    def previous(self) -> Optional[Track]:
        """Moves to the previous track, if there is one."""
        if self.index <= 0:
            return None
        return self.select(self.index - 1)

    def cycle_repeat_mode(self) -> RepeatMode:
        """None -> All -> One -> None."""
        order = list(RepeatMode)
        self.repeat_mode = order[(order.index(self.repeat_mode) + 1) % len(order)]
        return self.repeat_mode

    def on_track_ended(self) -> Optional[Track]:
        """
        Returns the track to play after the current one finished, or None
        when playback should stop.
        """
        if not self.tracks:
            return None
        if self.repeat_mode is RepeatMode.ONE and self.current is not None:
            return self.current
        if self.index < len(self.tracks) - 1:
            return self.next()
        if self.repeat_mode is RepeatMode.ALL:
            return self.select(0)
        return None
