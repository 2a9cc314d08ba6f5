"""
Picks the show of the day for an artist.

The search runs as a cascade of progressively looser archive queries and
stops at the first one that yields a candidate:

1. items whose date ends in the day marker
2. items whose identifier contains the day marker
3. (filter-keyword artists) identifiers with the day marker and the keyword,
   across the whole archive
4. a random item from widening pages of the collection
5. (filter-keyword artists) a random item whose identifier has the keyword
"""

import logging
import random
from typing import List, Optional, Protocol, Sequence

from daily_dose.models import Artist, Show, ShowCandidate
from daily_dose.utils.dates import normalize_day_marker

log = logging.getLogger(__name__)

DATE_QUERY_ROWS = 50
IDENTIFIER_QUERY_ROWS = 100
KEYWORD_QUERY_ROWS = 100
RANDOM_PAGE_SIZES = (1000, 3000, 5000)
RANDOM_KEYWORD_ROWS = 500


class ShowSearcher(Protocol):
    """The part of the archive client the selector needs."""

    async def search_shows(self, query: str, rows: int) -> List[ShowCandidate]: ...


def filter_shows_by_artist(
    candidates: Sequence[ShowCandidate], artist: Artist
) -> List[ShowCandidate]:
    """
    Keeps the candidates that belong to an artist sharing a collection.

    A candidate is rejected if its identifier or title contains the artist's
    exclude keyword, or lacks its filter keyword (case-insensitive). If that
    would reject every candidate, the unfiltered list is returned instead.
    """
    candidates = list(candidates)
    include = (artist.collection_filter_keyword or "").lower()
    exclude = (artist.exclude_keyword or "").lower()
    if not candidates or (not include and not exclude):
        return candidates

    result = []
    for candidate in candidates:
        combined = f"{candidate.identifier} {candidate.title}".lower()
        if exclude and exclude in combined:
            continue
        if include and include not in combined:
            continue
        result.append(candidate)
    return result or candidates


def sort_by_date_desc(candidates: Sequence[ShowCandidate]) -> List[ShowCandidate]:
    """
    Sorts candidates newest first by plain string comparison of their dates.
    The sort is stable, so equal dates keep the order the archive returned.
    """
    return sorted(candidates, key=lambda c: c.date, reverse=True)


class ShowSelector:
    """Resolves an artist and a day marker (MM-DD) to a concrete show."""

    def __init__(self, archive: ShowSearcher, rng: Optional[random.Random] = None):
        """
        Args:
            archive: Anything providing 'search_shows(query, rows)'.
            rng: Random source for the fallback picks. Seed it for repeatable runs.
        """
        self.archive = archive
        self.rng = rng or random.Random()

    async def _search(
        self, artist: Artist, query: str, rows: int
    ) -> List[ShowCandidate]:
        candidates = await self.archive.search_shows(query, rows)
        return filter_shows_by_artist(candidates, artist)

    async def select_show(self, artist: Artist, day_marker: str) -> Optional[Show]:
        """
        Finds the best show for the day, falling back to a random one.

        Returns:
            The selected Show, or None if the artist has no shows at all.

        Raises:
            InvalidDateMarkerError: If the day marker is not MM-DD.
            ArchiveRequestError: If any archive request fails.
        """
        mmdd = normalize_day_marker(day_marker)
        show = await self._select_by_date(artist, mmdd)
        if show is None:
            show = await self._select_random(artist)
        if show is None:
            log.info(f"No shows found for {artist.name}.")
        return show

    async def _select_by_date(self, artist: Artist, mmdd: str) -> Optional[Show]:
        collection = artist.collection
        keyword = artist.collection_filter_keyword

        stages = [
            ("date", f"collection:{collection} AND date:*-{mmdd}", DATE_QUERY_ROWS),
            (
                "identifier",
                f"collection:{collection} AND identifier:*{mmdd}*",
                IDENTIFIER_QUERY_ROWS,
            ),
        ]
        if keyword:
            stages.append(
                (
                    "keyword",
                    f"identifier:*{mmdd}* AND identifier:*{keyword}*",
                    KEYWORD_QUERY_ROWS,
                )
            )

        for stage, query, rows in stages:
            candidates = await self._search(artist, query, rows)
            if candidates:
                chosen = sort_by_date_desc(candidates)[0]
                log.debug(
                    f"{artist.name} {mmdd}: {len(candidates)} candidates from "
                    f"{stage} search, picked {chosen.identifier}"
                )
                return Show.from_candidate(chosen, is_random=False)
        return None

    async def _select_random(self, artist: Artist) -> Optional[Show]:
        for rows in RANDOM_PAGE_SIZES:
            candidates = await self._search(
                artist, f"collection:{artist.collection}", rows
            )
            if candidates:
                return self._pick_random(artist, candidates)

        keyword = artist.collection_filter_keyword
        if keyword:
            candidates = await self._search(
                artist, f"identifier:*{keyword}*", RANDOM_KEYWORD_ROWS
            )
            if candidates:
                return self._pick_random(artist, candidates)
        return None

    def _pick_random(self, artist: Artist, candidates: List[ShowCandidate]) -> Show:
        chosen = candidates[self.rng.randrange(len(candidates))]
        log.debug(
            f"{artist.name}: no date match, picked {chosen.identifier} at random "
            f"from {len(candidates)} candidates"
        )
        return Show.from_candidate(chosen, is_random=True)
