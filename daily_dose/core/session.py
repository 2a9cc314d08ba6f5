"""
The "load a show" workflow and the observable state a front end renders.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol, Sequence

from daily_dose.api.setlist import SetlistClient
from daily_dose.exceptions import (
    ArchiveRequestError,
    ConfigurationError,
    SetlistAuthError,
    SetlistRequestError,
    UnknownArtistError,
)
from daily_dose.models import (
    DEFAULT_ARTIST_NAME,
    AppSettings,
    Artist,
    SetlistSet,
    Show,
    Track,
)
from daily_dose.storage.settings_store import SettingsStore
from daily_dose.utils.dates import normalize_day_marker, to_setlist_date, today_marker
from daily_dose.utils.formatting import (
    NO_SETLIST_TEXT,
    format_clock,
    format_setlist_text,
    format_show_label,
)

from .playback import PlaybackQueue
from .show_selector import ShowSearcher, ShowSelector
from .track_resolver import ManifestSource, TrackResolver

log = logging.getLogger(__name__)

INVALID_KEY_TEXT = (
    "setlist.fm API key invalid. Run 'daily-dose set-api-key <KEY>' to replace it."
)


class ArchiveSource(ShowSearcher, ManifestSource, Protocol):
    """An archive client usable for both selection and track resolution."""


class SetlistLookup(Protocol):
    async def fetch_setlist(self, mbid: str, setlist_date: str) -> List[SetlistSet]: ...


@dataclass
class SessionState:
    """Everything a front end needs to render the current load."""

    status: str = "Ready."
    is_loading: bool = False
    day_marker: str = ""
    artist: Optional[Artist] = None
    show: Optional[Show] = None
    tracks: List[Track] = field(default_factory=list)
    setlist: List[SetlistSet] = field(default_factory=list)
    # Shown instead of the setlist when the lookup could not be done
    setlist_message: str = ""
    queue: PlaybackQueue = field(default_factory=PlaybackQueue)

    @property
    def show_label(self) -> str:
        return format_show_label(self.show, self.artist)

    @property
    def setlist_text(self) -> str:
        if self.setlist:
            return format_setlist_text(self.setlist)
        return self.setlist_message


Subscriber = Callable[[SessionState], None]


class DailyDoseSession:
    """
    Runs show loads and publishes state changes to subscribers.

    Only one load is meaningful at a time. Starting a new load supersedes the
    previous one: its results are dropped when it finishes and never reach
    the state.
    """

    def __init__(
        self,
        archive: ArchiveSource,
        settings_store: SettingsStore,
        setlist: Optional[SetlistLookup] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            archive: Archive client used for searches and manifests.
            settings_store: Where the API key and last selection live.
            setlist: setlist.fm client. When omitted, one is created per lookup
                from the stored API key.
            rng: Random source shared by the show picks and artist fallback.
        """
        self.rng = rng or random.Random()
        self.selector = ShowSelector(archive, self.rng)
        self.resolver = TrackResolver(archive)
        self.settings_store = settings_store
        self.setlist = setlist
        self.state = SessionState()
        self._subscribers: List[Subscriber] = []
        self._generation = 0

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Registers a state listener and returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _update(self, **changes) -> None:
        for key, value in changes.items():
            setattr(self.state, key, value)
        for callback in list(self._subscribers):
            callback(self.state)

    def initial_artist(self, settings: Optional[AppSettings] = None) -> Artist:
        """The last used artist, else Grateful Dead, else the first configured one."""
        settings = settings or self.settings_store.load()
        for name in (settings.last_artist_name, DEFAULT_ARTIST_NAME):
            if not name:
                continue
            try:
                return settings.find_artist(name)
            except UnknownArtistError:
                continue
        return settings.resolve_artists()[0]

    async def load_show(
        self,
        artist: Optional[Artist] = None,
        day_marker: Optional[str] = None,
        randomize_artist: bool = False,
        with_setlist: bool = True,
    ) -> SessionState:
        """
        Selects the show of the day, resolves its tracks and, if a setlist.fm
        key is configured, its setlist.

        If the artist has no show at all, the other configured artists are
        tried in random order and the first one with a show wins.

        Raises:
            InvalidDateMarkerError: If day_marker is not MM-DD.
            ArchiveRequestError: If an archive request fails. A load that was
                superseded meanwhile returns the current state instead.
        """
        settings = self.settings_store.load()
        artists = settings.resolve_artists()
        if randomize_artist:
            artist = self.rng.choice(artists)
        artist = artist or self.state.artist or self.initial_artist(settings)
        mmdd = normalize_day_marker(day_marker) if day_marker else today_marker()

        self._generation += 1
        generation = self._generation
        self._update(is_loading=True, status="Loading…", day_marker=mmdd)

        try:
            show, show_artist = await self._select_with_fallback(artist, artists, mmdd)
            tracks: List[Track] = []
            setlist: List[SetlistSet] = []
            setlist_message = ""
            if show is not None:
                tracks = await self.resolver.resolve_tracks(show)
                if with_setlist:
                    setlist, setlist_message = await self._load_setlist(
                        show, show_artist, settings
                    )
        except ArchiveRequestError:
            if generation != self._generation:
                log.debug(f"Ignoring failure of superseded load for {artist.name}.")
                return self.state
            self._update(is_loading=False, status="Network error.")
            raise

        if generation != self._generation:
            log.debug(f"Discarding superseded load for {artist.name} {mmdd}.")
            return self.state

        if show is None:
            self._update(
                is_loading=False,
                status=f"No shows found for {artist.name}.",
                artist=None,
                show=None,
                tracks=[],
                setlist=[],
                setlist_message="",
                queue=PlaybackQueue(),
            )
            return self.state

        self._update(
            is_loading=False,
            status=self._status_for(artist, show_artist, show, tracks),
            artist=show_artist,
            show=show,
            tracks=tracks,
            setlist=setlist,
            setlist_message=setlist_message,
            queue=PlaybackQueue(tracks, self.state.queue.repeat_mode),
        )
        self._remember(show_artist, show)
        return self.state

    async def _select_with_fallback(
        self, artist: Artist, artists: Sequence[Artist], mmdd: str
    ) -> tuple[Optional[Show], Artist]:
        show = await self.selector.select_show(artist, mmdd)
        if show is not None:
            return show, artist

        others = [a for a in artists if a.name != artist.name]
        self.rng.shuffle(others)
        for other in others:
            show = await self.selector.select_show(other, mmdd)
            if show is not None:
                log.info(
                    f"[yellow]No {artist.name} show found; "
                    f"using {other.name} instead.[/yellow]"
                )
                return show, other
        return None, artist

    @staticmethod
    def _status_for(
        requested: Artist, loaded: Artist, show: Show, tracks: List[Track]
    ) -> str:
        if not tracks:
            return "No playable tracks found."
        if loaded.name != requested.name:
            kind = "random " if show.is_random else ""
            return (
                f"No {requested.name} show on this date; "
                f"loaded {kind}{loaded.name} show. Press Play."
            )
        if show.is_random:
            return f"No {loaded.name} show on this date; loaded random. Press Play."
        return "Ready. Press Play."

    def _remember(self, artist: Artist, show: Show) -> None:
        try:
            self.settings_store.remember_selection(artist.name, show.identifier)
        except ConfigurationError as e:
            log.warning(f"Could not save last selection: {e}")

    async def _load_setlist(
        self, show: Show, artist: Artist, settings: AppSettings
    ) -> tuple[List[SetlistSet], str]:
        """Returns the setlist sets, or a message explaining why there are none."""
        if not settings.has_setlist_key or not artist.has_setlist_id:
            return [], ""

        setlist_date = to_setlist_date(show.date)
        if setlist_date is None:
            return [], NO_SETLIST_TEXT

        try:
            if self.setlist is not None:
                sets = await self.setlist.fetch_setlist(artist.mbid, setlist_date)
            else:
                async with SetlistClient(settings.setlist_api_key) as client:
                    sets = await client.fetch_setlist(artist.mbid, setlist_date)
        except SetlistAuthError:
            return [], INVALID_KEY_TEXT
        except SetlistRequestError as e:
            log.warning(f"Setlist lookup failed: {e}")
            return [], f"Setlist unavailable: {e}"

        return sets, "" if sets else NO_SETLIST_TEXT

    async def refresh_setlist(self) -> SessionState:
        """Fetches the setlist again for the loaded show, e.g. after a new API key."""
        show, artist = self.state.show, self.state.artist
        if show is None or artist is None:
            return self.state
        settings = self.settings_store.load()
        generation = self._generation
        self._update(is_loading=True)

        setlist, message = await self._load_setlist(show, artist, settings)

        # A load that started meanwhile owns the state now
        current = self.state.show
        if generation != self._generation or current is None or (
            current.identifier != show.identifier
        ):
            log.debug(f"Discarding setlist refresh for {show.identifier}.")
            return self.state
        self._update(is_loading=False, setlist=setlist, setlist_message=message)
        return self.state

    def update_playback_position(self, position_s: float, duration_s: float) -> None:
        """Called by the player while a track plays."""
        track = self.state.queue.current
        if track is None:
            return
        self._update(
            status=(
                f"Playing: {track.display_text} - "
                f"{format_clock(position_s)} / {format_clock(duration_s)}"
            )
        )

    def on_playback_stopped(self) -> None:
        self._update(status="Stopped.")
