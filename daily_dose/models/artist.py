"""
Pydantic model for the artists whose shows can be picked.
"""

from typing import Optional

from pydantic import BaseModel, field_validator


class Artist(BaseModel):
    """
    An artist or band with a live music collection on the Internet Archive.

    Two artists may share one collection (e.g. Jerry Garcia solo shows and the
    Jerry Garcia Band both live in "JerryGarcia"). They are told apart by
    keywords matched against each show's identifier and title.
    """

    name: str
    collection: str
    # MusicBrainz id used for setlist.fm queries. Empty disables setlists.
    mbid: str = ""
    collection_filter_keyword: Optional[str] = None
    exclude_keyword: Optional[str] = None

    class Config:
        """Pydantic model configuration."""

        frozen = True
        str_strip_whitespace = True

    @field_validator("name", "collection")
    @classmethod
    def validate_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Artist name and collection cannot be empty.")
        return v

    @field_validator("collection_filter_keyword", "exclude_keyword")
    @classmethod
    def blank_keyword_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treats an empty keyword the same as no keyword."""
        return v or None

    @property
    def has_setlist_id(self) -> bool:
        return bool(self.mbid)

    def __str__(self) -> str:
        return self.name


DEFAULT_ARTISTS: tuple[Artist, ...] = (
    Artist(
        name="Grateful Dead",
        collection="GratefulDead",
        mbid="6faa7ca7-0d99-4a5e-bfa6-1fd5037520c6",
    ),
    Artist(
        name="Jerry Garcia (Solo)",
        collection="JerryGarcia",
        mbid="1ecff755-607d-4130-9a8a-8873f27e5de5",
        exclude_keyword="jgb",
    ),
    Artist(
        name="Jerry Garcia Band",
        collection="JerryGarcia",
        mbid="6b5c16a5-9a3b-40e0-9fdb-789ab5a30f5a",
        collection_filter_keyword="jgb",
    ),
    Artist(
        name="Dead & Company",
        collection="DeadAndCompany",
        mbid="94f8947c-2d9c-4519-bcf9-6d11a24ad006",
    ),
)

DEFAULT_ARTIST_NAME = "Grateful Dead"
