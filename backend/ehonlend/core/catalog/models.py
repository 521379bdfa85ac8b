"""Record types handed to the ranking and sectioning code."""

from __future__ import annotations

from dataclasses import dataclass

from ehonlend.core.kana import KanaGroup


@dataclass(frozen=True)
class CandidateRecord:
    """A book candidate returned by an external catalog lookup."""

    title: str
    author: str | None = None
    isbn13: str | None = None
    isbn10: str | None = None
    publisher: str | None = None
    published_date: str | None = None
    thumbnail: str | None = None
    small_thumbnail: str | None = None


@dataclass(frozen=True)
class BookRecord:
    """A book in the local collection, as needed for sectioned browsing.

    Attributes:
        title: Book title
        author: Author name, if known
        management_number: Organization-assigned tag (e.g., "あ001"), if any
        kana_group: Pre-assigned kana group; None derives it from the title
    """

    title: str
    author: str | None = None
    management_number: str | None = None
    kana_group: KanaGroup | None = None
