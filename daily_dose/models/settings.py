"""
Pydantic model for the persisted user settings.
"""

from pydantic import BaseModel, Field, field_validator

from daily_dose.exceptions import UnknownArtistError

from .artist import DEFAULT_ARTISTS, Artist


class AppSettings(BaseModel):
    """A validated settings model for the application."""

    setlist_api_key: str = ""
    last_artist_name: str = ""
    last_show_identifier: str = ""

    # Optional replacement for the shipped artist list
    artists: list[Artist] = Field(default_factory=list)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("artists")
    @classmethod
    def validate_unique_names(cls, v: list[Artist]) -> list[Artist]:
        """Ensures artist names are unique, since they are used as keys."""
        seen: set[str] = set()
        for artist in v:
            if artist.name in seen:
                raise ValueError(f"Duplicate artist name: {artist.name}")
            seen.add(artist.name)
        return v

    @property
    def has_setlist_key(self) -> bool:
        return bool(self.setlist_api_key)

    def resolve_artists(self) -> list[Artist]:
        """Returns the configured artist list, or the default one."""
        return list(self.artists) if self.artists else list(DEFAULT_ARTISTS)

    def find_artist(self, name: str) -> Artist:
        """Looks up an artist by name, case-insensitively."""
        wanted = name.strip().lower()
        for artist in self.resolve_artists():
            if artist.name.lower() == wanted:
                return artist
        raise UnknownArtistError(
            f"Unknown artist '{name}'. Run 'daily-dose artists' to list them."
        )
