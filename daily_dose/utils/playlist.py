"""
Utility for generating M3U playlist files from a resolved track list.
"""

import logging
from pathlib import Path
from typing import Sequence

from daily_dose.models import Show, Track

log = logging.getLogger(__name__)


def generate_m3u(playlist_path: Path, show: Show, tracks: Sequence[Track]) -> bool:
    """
    Writes an extended M3U playlist pointing at the tracks' stream URLs.
    """
    if not tracks:
        log.debug(f"No tracks for '{show.identifier}' to create playlist.")
        return False

    content = ["#EXTM3U", f"#PLAYLIST:{show.date} - {show.title or show.identifier}"]
    for track in tracks:
        content.append(f"#EXTINF:-1,{track.display_text}")
        content.append(track.url)

    try:
        playlist_path.parent.mkdir(parents=True, exist_ok=True)
        with open(playlist_path, "w", encoding="utf-8") as f:
            f.write("\n".join(content) + "\n")
        log.info(f"Generated playlist: '{playlist_path}'")
        return True
    except OSError as e:
        log.error(f"Failed to write playlist file: {e}")
        return False
