"""
Async client for the Internet Archive advanced search and metadata endpoints.
"""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import aiohttp

from daily_dose import __version__
from daily_dose.exceptions import ArchiveRequestError
from daily_dose.models import ShowCandidate

log = logging.getLogger(__name__)

SEARCH_FIELDS = ("identifier", "title", "date")


class ArchiveClient:
    """
    Read-only async client for archive.org.

    Every call is bounded by a timeout and any transport problem (network
    error, timeout, non-success status, undecodable body) is raised as an
    ArchiveRequestError. Responses with an unexpected shape are returned as
    empty results instead.
    """

    BASE_URL = "https://archive.org"

    def __init__(self, base_url: Optional[str] = None, timeout_s: float = 30.0):
        """
        Args:
            base_url: Archive root, overridable for tests.
            timeout_s: Total time allowed for a single request.
        """
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout_s = timeout_s
        self._session: Optional[aiohttp.ClientSession] = None

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    "User-Agent": f"daily-dose/{__version__}",
                    "Accept": "application/json",
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout_s),
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "ArchiveClient":
        await self._initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def get_json(self, path: str, params: Any = None) -> Any:
        """
        Performs a GET request against the archive and decodes the JSON body.

        Raises:
            ArchiveRequestError: On any transport or decoding failure.
        """
        await self._initialize_session()
        url = f"{self.base_url}/{path.lstrip('/')}"
        start_time = time.monotonic()

        try:
            async with self._session.get(url, params=params) as r:
                duration_ms = (time.monotonic() - start_time) * 1000
                log.debug(f"GET {path} -> {r.status} in {duration_ms:.0f} ms")
                if r.status >= 400:
                    raise ArchiveRequestError(
                        f"Archive request to {path} failed with HTTP {r.status}.",
                        status=r.status,
                    )
                return await r.json(content_type=None)
        except ArchiveRequestError:
            raise
        except asyncio.TimeoutError as e:
            raise ArchiveRequestError(
                f"Archive request to {path} timed out after {self.timeout_s:.0f}s."
            ) from e
        except aiohttp.ClientError as e:
            raise ArchiveRequestError(f"Archive request to {path} failed: {e}") from e
        except ValueError as e:
            raise ArchiveRequestError(
                f"Archive returned an invalid JSON body for {path}."
            ) from e

    # Public API Methods
    async def search_shows(self, query: str, rows: int) -> List[ShowCandidate]:
        """
        Runs an advanced search query, newest first, and returns the raw hits.

        A response without 'response.docs' is treated as zero hits.
        """
        params = [("q", query)]
        params.extend(("fl[]", field) for field in SEARCH_FIELDS)
        params.extend([("sort[]", "date desc"), ("rows", str(rows)), ("output", "json")])

        log.debug(f"Archive search: q={query!r} rows={rows}")
        payload = await self.get_json("advancedsearch.php", params=params)

        response = payload.get("response") if isinstance(payload, dict) else None
        docs = response.get("docs") if isinstance(response, dict) else None
        if not isinstance(docs, list):
            log.debug(f"Archive search for {query!r} returned no docs list.")
            return []
        return [ShowCandidate.from_doc(doc) for doc in docs if isinstance(doc, dict)]

    async def fetch_files(self, identifier: str) -> List[Dict[str, Any]]:
        """
        Fetches the file manifest of an item. A response without 'files' is
        treated as an empty manifest.
        """
        payload = await self.get_json(f"metadata/{quote(identifier, safe='')}")
        files = payload.get("files") if isinstance(payload, dict) else None
        if not isinstance(files, list):
            return []
        return [f for f in files if isinstance(f, dict)]

    def download_url(self, identifier: str, file_name: str) -> str:
        """Builds the streaming address of a file within an item."""
        return f"{self.base_url}/download/{identifier}/{quote(file_name, safe='')}"

    def details_url(self, identifier: str) -> str:
        """Builds the public details page address of an item."""
        return f"{self.base_url}/details/{identifier}"
