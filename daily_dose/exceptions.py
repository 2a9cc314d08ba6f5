"""
Defines custom exceptions for the application to allow for more specific error handling.
"""

from typing import Optional


class DailyDoseError(Exception):
    """Base exception for all application-specific errors."""


class ArchiveRequestError(DailyDoseError):
    """
    Raised when a request to the Internet Archive fails: the network is
    unreachable, the call timed out, the server answered with a non-success
    status, or the body could not be decoded as JSON.
    """

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class SetlistRequestError(DailyDoseError):
    """Raised when a request to the setlist.fm API fails."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class SetlistAuthError(SetlistRequestError):
    """Raised when setlist.fm rejects the configured API key."""


class ConfigurationError(DailyDoseError):
    """Raised for issues related to settings loading or validation."""


class InvalidDateMarkerError(DailyDoseError):
    """Raised when a day marker is not a valid MM-DD string."""


class UnknownArtistError(DailyDoseError):
    """Raised when an artist name is not in the configured artist list."""
