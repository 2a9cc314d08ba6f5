"""
Remote API Layer.

This package handles all communication with the Internet Archive and
setlist.fm.
"""

from .archive import ArchiveClient
from .setlist import SetlistClient

__all__ = ["ArchiveClient", "SetlistClient"]
