"""
Data classes for search hits, selected shows, tracks and setlists.
"""

from dataclasses import dataclass
from typing import Any


def _text_field(doc: dict[str, Any], key: str) -> str:
    """
    Reads a text field from an archive search row. The archive does not
    guarantee presence or type: multi-valued fields come back as lists.
    """
    value = doc.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        for item in value:
            if isinstance(item, str):
                return item
    return ""


@dataclass(frozen=True)
class ShowCandidate:
    """A single search result row, before artist filtering."""

    identifier: str
    title: str = ""
    date: str = ""

    @classmethod
    def from_doc(cls, doc: dict[str, Any]) -> "ShowCandidate":
        return cls(
            identifier=_text_field(doc, "identifier"),
            title=_text_field(doc, "title"),
            date=_text_field(doc, "date"),
        )


@dataclass(frozen=True)
class Show:
    """The show picked for a day."""

    identifier: str
    title: str
    date: str
    # True when no show matched the date and one was picked at random.
    is_random: bool = False

    @classmethod
    def from_candidate(cls, candidate: ShowCandidate, is_random: bool) -> "Show":
        return cls(
            identifier=candidate.identifier,
            title=candidate.title,
            date=candidate.date,
            is_random=is_random,
        )


@dataclass(frozen=True)
class Track:
    """A playable audio file of a show."""

    name: str
    title: str
    url: str

    @property
    def display_text(self) -> str:
        return self.title if self.title.strip() else self.name


@dataclass(frozen=True)
class SetlistSet:
    """One set of a setlist (e.g. "Set 1", "Encore")."""

    name: str
    songs: tuple[str, ...] = ()
