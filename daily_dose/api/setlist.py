"""
Async client for the setlist.fm REST API.
"""

import asyncio
import logging
import time
from typing import Any, List, Optional

import aiohttp

from daily_dose.exceptions import SetlistAuthError, SetlistRequestError
from daily_dose.models import SetlistSet

log = logging.getLogger(__name__)


def parse_setlist_sets(payload: Any) -> List[SetlistSet]:
    """
    Extracts the sets of the first setlist in a search response.

    setlist.fm returns 'setlist[0].sets.set[]', each with an optional name and
    a list of songs. Anything missing yields an empty result.
    """
    if not isinstance(payload, dict):
        return []
    setlists = payload.get("setlist")
    if not isinstance(setlists, list) or not setlists:
        return []
    first = setlists[0] if isinstance(setlists[0], dict) else {}
    sets = first.get("sets")
    set_items = sets.get("set") if isinstance(sets, dict) else None
    if not isinstance(set_items, list):
        return []

    result = []
    for set_item in set_items:
        if not isinstance(set_item, dict):
            continue
        name = set_item.get("name") or "Set"
        if set_item.get("encore") and not set_item.get("name"):
            name = "Encore"
        songs = set_item.get("song")
        song_names = tuple(
            song["name"]
            for song in (songs if isinstance(songs, list) else [])
            if isinstance(song, dict) and isinstance(song.get("name"), str) and song["name"]
        )
        result.append(SetlistSet(name=name, songs=song_names))
    return result


class SetlistClient:
    """Read-only async client for setlist.fm setlist searches."""

    BASE_URL = "https://api.setlist.fm/rest/1.0"

    def __init__(
        self, api_key: str, base_url: Optional[str] = None, timeout_s: float = 15.0
    ):
        """
        Args:
            api_key: The user's setlist.fm API key, sent as 'x-api-key'.
            base_url: API root, overridable for tests.
            timeout_s: Total time allowed for a single request.
        """
        self.api_key = api_key
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout_s = timeout_s
        self._session: Optional[aiohttp.ClientSession] = None

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            headers = {"Accept": "application/json"}
            if self.api_key:
                headers["x-api-key"] = self.api_key
            self._session = aiohttp.ClientSession(
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout_s),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "SetlistClient":
        await self._initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetch_setlist(self, mbid: str, setlist_date: str) -> List[SetlistSet]:
        """
        Looks up the setlist an artist played on a given date.

        Args:
            mbid: The artist's MusicBrainz id.
            setlist_date: The date in DD-MM-YYYY form.

        Returns:
            The sets of the first matching setlist, or an empty list.

        Raises:
            SetlistAuthError: If the API key is rejected.
            SetlistRequestError: On any other transport or decoding failure.
        """
        await self._initialize_session()
        params = {"artistMbid": mbid, "date": setlist_date}
        start_time = time.monotonic()

        try:
            async with self._session.get(
                f"{self.base_url}/search/setlists", params=params
            ) as r:
                duration_ms = (time.monotonic() - start_time) * 1000
                log.debug(
                    f"setlist.fm search {params} -> {r.status} in {duration_ms:.0f} ms"
                )
                if r.status in (401, 403):
                    raise SetlistAuthError(
                        "setlist.fm rejected the API key.", status=r.status
                    )
                # setlist.fm answers 404 when nothing matches the search
                if r.status == 404:
                    return []
                if r.status >= 400:
                    raise SetlistRequestError(
                        f"setlist.fm request failed with HTTP {r.status}.",
                        status=r.status,
                    )
                payload = await r.json(content_type=None)
        except SetlistRequestError:
            raise
        except asyncio.TimeoutError as e:
            raise SetlistRequestError(
                f"setlist.fm request timed out after {self.timeout_s:.0f}s."
            ) from e
        except aiohttp.ClientError as e:
            raise SetlistRequestError(f"setlist.fm request failed: {e}") from e
        except ValueError as e:
            raise SetlistRequestError("setlist.fm returned an invalid JSON body.") from e

        return parse_setlist_sets(payload)
