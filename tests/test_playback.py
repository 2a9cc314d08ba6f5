"""Tests for track navigation and repeat modes"""

import pytest

from daily_dose.core.playback import PlaybackQueue, RepeatMode
from daily_dose.models import Track

TRACKS = [Track(f"t{i}.mp3", f"Song {i}", f"https://example.org/t{i}.mp3") for i in range(3)]


@pytest.fixture
def queue():
    return PlaybackQueue(TRACKS)


class TestPlaybackQueue:
    """Test queue position handling"""

    def test_starts_at_first_track(self, queue):
        assert queue.index == 0
        assert queue.current == TRACKS[0]

    def test_empty_queue(self):
        """An empty queue has no current track and never advances"""
        queue = PlaybackQueue()
        assert queue.index == -1
        assert queue.current is None
        assert queue.next() is None
        assert queue.previous() is None
        assert queue.on_track_ended() is None

    def test_next_and_previous(self, queue):
        assert queue.next() == TRACKS[1]
        assert queue.next() == TRACKS[2]
        assert queue.next() is None
        assert queue.index == 2
        assert queue.previous() == TRACKS[1]
        assert queue.previous() == TRACKS[0]
        assert queue.previous() is None
        assert queue.index == 0

    def test_select_out_of_range_is_ignored(self, queue):
        assert queue.select(2) == TRACKS[2]
        assert queue.select(5) is None
        assert queue.select(-1) is None
        assert queue.index == 2

    def test_cycle_repeat_mode(self, queue):
        """Repeat mode cycles None, All, One and back"""
        assert queue.cycle_repeat_mode() is RepeatMode.ALL
        assert queue.cycle_repeat_mode() is RepeatMode.ONE
        assert queue.cycle_repeat_mode() is RepeatMode.NONE
        assert [m.label for m in RepeatMode] == ["None", "Repeat All", "Repeat One"]


class TestTrackEnded:
    """Test what plays after a track finishes"""

    def test_no_repeat_stops_at_end(self, queue):
        assert queue.on_track_ended() == TRACKS[1]
        assert queue.on_track_ended() == TRACKS[2]
        assert queue.on_track_ended() is None

    def test_repeat_all_wraps(self, queue):
        queue.repeat_mode = RepeatMode.ALL
        queue.select(2)
        assert queue.on_track_ended() == TRACKS[0]
        assert queue.index == 0

    def test_repeat_one_replays(self, queue):
        queue.repeat_mode = RepeatMode.ONE
        queue.select(1)
        assert queue.on_track_ended() == TRACKS[1]
        assert queue.on_track_ended() == TRACKS[1]
        assert queue.index == 1
