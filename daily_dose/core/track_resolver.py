"""
Turns a show's file manifest into an ordered list of playable tracks.
"""

import logging
from typing import Any, Dict, List, Protocol

from daily_dose.models import Show, Track

log = logging.getLogger(__name__)

PREFERRED_FORMATS = ("VBR MP3", "64Kb MP3", "Ogg Vorbis")
OGG_FORMAT = "Ogg Vorbis"


class ManifestSource(Protocol):
    """The part of the archive client the resolver needs."""

    async def fetch_files(self, identifier: str) -> List[Dict[str, Any]]: ...

    def download_url(self, identifier: str, file_name: str) -> str: ...


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def select_playable_files(files: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Keeps the streamable audio files and puts them in play order: MP3s first,
    then Ogg Vorbis, each group sorted by file name.
    """
    playable = []
    for f in files:
        file_format = _text(f.get("format"))
        name = _text(f.get("name"))
        if file_format not in PREFERRED_FORMATS or not name:
            continue
        playable.append(
            {"name": name, "format": file_format, "title": _text(f.get("title"))}
        )

    return sorted(playable, key=lambda f: (f["format"] == OGG_FORMAT, f["name"]))


class TrackResolver:
    """Resolves a chosen show to its playable tracks."""

    def __init__(self, archive: ManifestSource):
        self.archive = archive

    async def resolve_tracks(self, show: Show) -> List[Track]:
        """
        Fetches the show's manifest and builds its track list.

        Returns:
            The tracks in play order. An empty list means the show has no
            playable files, which is not an error.

        Raises:
            ArchiveRequestError: If the manifest cannot be fetched.
        """
        files = await self.archive.fetch_files(show.identifier)
        playable = select_playable_files(files)
        log.debug(
            f"{show.identifier}: {len(playable)} playable of {len(files)} files"
        )
        return [
            Track(
                name=f["name"],
                title=f["title"],
                url=self.archive.download_url(show.identifier, f["name"]),
            )
            for f in playable
        ]
