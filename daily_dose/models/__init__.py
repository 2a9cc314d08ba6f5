"""
Data Models Layer.

This package contains the Pydantic models and data classes that define the
core data structures used throughout the application: artists, search hits,
shows, tracks, setlists and the persisted settings.
"""

from .artist import DEFAULT_ARTIST_NAME, DEFAULT_ARTISTS, Artist
from .settings import AppSettings
from .show import SetlistSet, Show, ShowCandidate, Track

__all__ = [
    "DEFAULT_ARTISTS",
    "DEFAULT_ARTIST_NAME",
    "AppSettings",
    "Artist",
    "SetlistSet",
    "Show",
    "ShowCandidate",
    "Track",
]
