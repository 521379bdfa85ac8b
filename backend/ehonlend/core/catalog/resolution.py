"""Identifier-first resolution of catalog candidates."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from ehonlend.core.isbn import IsbnVariant, isbn10_to_isbn13, normalize_isbn, parse_isbn
from ehonlend.core.matching import ScoredCandidate, ScoringConfig, SearchQuery, rank

from .models import CandidateRecord

logger = structlog.get_logger("ehonlend.catalog.resolution")


def _isbn13_forms(candidate: CandidateRecord) -> set[str]:
    forms: set[str] = set()
    if candidate.isbn13:
        forms.add(normalize_isbn(candidate.isbn13))
    if candidate.isbn10:
        converted = isbn10_to_isbn13(candidate.isbn10)
        if converted:
            forms.add(converted)
    return forms


def resolve_candidates(
    query: SearchQuery,
    candidates: Iterable[CandidateRecord],
    isbn: str | None = None,
    config: ScoringConfig | None = None,
) -> list[ScoredCandidate[CandidateRecord]]:
    """Order candidates with exact identifier matches first.

    When ``isbn`` is a valid ISBN-10 or ISBN-13, candidates carrying the
    same identifier (compared in ISBN-13 form) come first with score 1.0,
    in input order. Everything else is ranked against the query. An invalid
    or missing ISBN means plain ranking.

    Args:
        query: Title (and optional author) being searched for
        candidates: Candidates returned by the catalog
        isbn: ISBN the user supplied, if any
        config: Scoring configuration (defaults to DEFAULT_CONFIG)

    Returns:
        Scored candidates, identifier matches first, then by descending score
    """
    candidate_list = list(candidates)
    target = parse_isbn(isbn)

    if target is None:
        if isbn:
            logger.debug("Ignoring invalid ISBN for resolution", isbn=isbn)
        return rank(query, candidate_list, config)

    target13 = (
        target.value if target.variant is IsbnVariant.ISBN_13 else isbn10_to_isbn13(target.value)
    )

    exact: list[ScoredCandidate[CandidateRecord]] = []
    remaining: list[CandidateRecord] = []
    for candidate in candidate_list:
        if target13 in _isbn13_forms(candidate):
            exact.append(ScoredCandidate(candidate, 1.0))
        else:
            remaining.append(candidate)

    logger.debug(
        "Resolved candidates by identifier",
        isbn=target.value,
        exact_matches=len(exact),
        remaining=len(remaining),
    )
    return exact + rank(query, remaining, config)
