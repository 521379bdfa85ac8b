"""Kana-sectioned book lists for the catalog display.

Books are grouped by kana row, optionally filtered by search text and a
single kana group, and sorted within each section by title or by
management number.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from ehonlend.core.kana import KanaGroup, classify
from ehonlend.core.management_number import sort_by_management_number
from ehonlend.core.text import SymbolPolicy, normalize_generic, normalize_title

from .models import BookRecord


class BookSortType(str, Enum):
    """Order of books inside a section."""

    TITLE = "title"
    MANAGEMENT_NUMBER = "management_number"


@dataclass(frozen=True)
class BookSection:
    """Books sharing one kana group."""

    kana_group: KanaGroup
    books: tuple[BookRecord, ...]

    @property
    def display_title(self) -> str:
        return self.kana_group.display_name

    @property
    def is_empty(self) -> bool:
        return not self.books


def book_kana_group(
    book: BookRecord,
    symbols: SymbolPolicy = SymbolPolicy.CONSERVATIVE,
) -> KanaGroup:
    """Pre-assigned kana group of a book, or the one derived from its title."""
    if book.kana_group is not None:
        return book.kana_group
    return classify(book.title, symbols)


def build_sections(
    books: Iterable[BookRecord],
    symbols: SymbolPolicy = SymbolPolicy.CONSERVATIVE,
) -> list[BookSection]:
    """Group books into kana sections.

    Args:
        books: Books to group
        symbols: Symbol policy used when a title has to be classified

    Returns:
        Non-empty sections in kana order (あ ... わ, then 他); books keep
        their input order inside each section
    """
    grouped: dict[KanaGroup, list[BookRecord]] = {}
    for book in books:
        grouped.setdefault(book_kana_group(book, symbols), []).append(book)

    return [
        BookSection(group, tuple(grouped[group]))
        for group in sorted(grouped, key=lambda group: group.sort_order)
    ]


def _matches_search(book: BookRecord, needle: str) -> bool:
    if needle in normalize_generic(book.title).lower():
        return True
    return bool(book.author) and needle in normalize_generic(book.author or "").lower()


def filter_sections(
    sections: Sequence[BookSection],
    search_text: str = "",
    kana_filter: KanaGroup | None = None,
) -> list[BookSection]:
    """Filter sections by search text and kana group.

    The search text matches titles and authors case-insensitively, both
    sides in generic normalized form (so "ＡＢＣ" finds "ABC"). Sections
    left without books are dropped.

    Args:
        sections: Sections to filter
        search_text: Text to look for; empty keeps every book
        kana_filter: Only keep this group, if given

    Returns:
        Filtered sections
    """
    filtered = list(sections)

    needle = normalize_generic(search_text).lower()
    if needle:
        filtered = [
            BookSection(
                section.kana_group,
                tuple(book for book in section.books if _matches_search(book, needle)),
            )
            for section in filtered
        ]
        filtered = [section for section in filtered if not section.is_empty]

    if kana_filter is not None:
        filtered = [section for section in filtered if section.kana_group is kana_filter]

    return filtered


def _by_title(books: Iterable[BookRecord]) -> list[BookRecord]:
    return sorted(books, key=lambda book: normalize_title(book.title))


def _by_management_number(books: Sequence[BookRecord]) -> list[BookRecord]:
    numbered = [book for book in books if book.management_number]
    unnumbered = [book for book in books if not book.management_number]
    return sort_by_management_number(
        numbered, key=lambda book: book.management_number
    ) + _by_title(unnumbered)


def sort_sections(
    sections: Sequence[BookSection],
    sort_type: BookSortType = BookSortType.TITLE,
) -> list[BookSection]:
    """Sort the books inside each section (stable).

    ``TITLE`` compares normalized titles; ``MANAGEMENT_NUMBER`` compares
    management sort keys, with books lacking a number placed last in title
    order.
    """
    sort_books = _by_management_number if sort_type is BookSortType.MANAGEMENT_NUMBER else _by_title
    return [
        BookSection(section.kana_group, tuple(sort_books(section.books)))
        for section in sections
    ]


def section_books(
    books: Iterable[BookRecord],
    search_text: str = "",
    kana_filter: KanaGroup | None = None,
    sort_type: BookSortType = BookSortType.TITLE,
    symbols: SymbolPolicy = SymbolPolicy.CONSERVATIVE,
) -> list[BookSection]:
    """Group, filter and sort books for display in one call."""
    sections = build_sections(books, symbols)
    sections = filter_sections(sections, search_text, kana_filter)
    return sort_sections(sections, sort_type)
