"""Conversion of raw catalog records into candidate records.

The catalog gateway performs the network calls; this module only reads the
volume dictionaries it returns (Google Books ``volumes`` format) and picks
exact identifier matches.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from ehonlend.core.isbn import normalize_isbn
from ehonlend.core.text import normalize_author, normalize_title

from .models import CandidateRecord

logger = structlog.get_logger("ehonlend.catalog.candidates")

MISSING_TITLE = "（タイトル未取得）"
MISSING_AUTHOR = "（著者未取得）"


def _secure_url(url: Any) -> str | None:
    if not url:
        return None
    return str(url).replace("http://", "https://", 1)


def _identifiers(volume_info: dict[str, Any]) -> dict[str, str]:
    """Map identifier type ("ISBN_13", "ISBN_10") to its first value."""
    identifiers: dict[str, str] = {}
    for identifier in volume_info.get("industryIdentifiers") or []:
        if not isinstance(identifier, dict):
            continue
        id_type = identifier.get("type")
        value = identifier.get("identifier")
        if id_type and value and id_type not in identifiers:
            identifiers[id_type] = str(value)
    return identifiers


def candidate_from_volume(volume: dict[str, Any]) -> CandidateRecord:
    """Build a candidate record from a raw catalog volume.

    Args:
        volume: Raw volume dict (with a "volumeInfo" object)

    Returns:
        CandidateRecord with placeholder title/author when those are missing
    """
    volume_info = volume.get("volumeInfo") or {}
    identifiers = _identifiers(volume_info)

    authors = volume_info.get("authors")
    if isinstance(authors, list) and authors:
        author = ", ".join(str(name) for name in authors)
    elif isinstance(authors, str) and authors:
        author = authors
    else:
        author = MISSING_AUTHOR

    image_links = volume_info.get("imageLinks") or {}

    return CandidateRecord(
        title=volume_info.get("title") or MISSING_TITLE,
        author=author,
        isbn13=identifiers.get("ISBN_13"),
        isbn10=identifiers.get("ISBN_10"),
        publisher=volume_info.get("publisher"),
        published_date=volume_info.get("publishedDate"),
        thumbnail=_secure_url(image_links.get("thumbnail")),
        small_thumbnail=_secure_url(image_links.get("smallThumbnail")),
    )


def candidates_from_response(payload: dict[str, Any]) -> list[CandidateRecord]:
    """Build candidate records from a raw catalog search response.

    Args:
        payload: Raw response body (with an optional "items" list)

    Returns:
        Candidate records in response order (empty when there are no items)
    """
    items = payload.get("items") or []
    candidates = [candidate_from_volume(item) for item in items if isinstance(item, dict)]
    logger.debug("Parsed catalog response", item_count=len(items), candidate_count=len(candidates))
    return candidates


def select_best_isbn_match(
    candidates: Sequence[CandidateRecord],
    target_isbn: str,
) -> CandidateRecord | None:
    """Pick the candidate that best matches an ISBN lookup.

    Exact ISBN-13 matches win over exact ISBN-10 matches; with neither,
    the catalog's first result is used.

    Args:
        candidates: Candidates returned for the ISBN query
        target_isbn: ISBN that was looked up

    Returns:
        Best candidate, or None for an empty list
    """
    if not candidates:
        return None

    target = normalize_isbn(target_isbn)

    for candidate in candidates:
        if candidate.isbn13 and normalize_isbn(candidate.isbn13) == target:
            return candidate

    for candidate in candidates:
        if candidate.isbn10 and normalize_isbn(candidate.isbn10) == target:
            return candidate

    return candidates[0]


def build_catalog_query(title: str, author: str | None = None) -> str:
    """Build the catalog search expression for a title/author lookup.

    The title is normalized in title mode (no spaces) and the author in
    author mode (role word removed), which is what the catalog matches best.

    Args:
        title: Title as entered
        author: Author as entered, if any

    Returns:
        Query string such as 'intitle:"ぐりとぐら"+inauthor:"なかがわりえこ"'
    """
    query = f'intitle:"{normalize_title(title)}"'
    if author:
        normalized_author = normalize_author(author)
        if normalized_author:
            query += f'+inauthor:"{normalized_author}"'
    return query
