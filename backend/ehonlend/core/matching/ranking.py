"""Ranking pipeline - orders candidate records by relevance to a query."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

import structlog

from .config import ScoringConfig
from .scorer import SearchQuery, score

logger = structlog.get_logger("ehonlend.matching.ranking")


class TitledRecord(Protocol):
    """Anything with a title and an optional author."""

    @property
    def title(self) -> str: ...

    @property
    def author(self) -> str | None: ...


CandidateT = TypeVar("CandidateT", bound=TitledRecord)


@dataclass(frozen=True)
class ScoredCandidate(Generic[CandidateT]):
    """A candidate paired with its relevance score."""

    candidate: CandidateT
    score: float


def rank(
    query: SearchQuery,
    candidates: Iterable[CandidateT],
    config: ScoringConfig | None = None,
) -> list[ScoredCandidate[CandidateT]]:
    """Score every candidate and sort by descending score.

    The sort is stable: candidates with equal scores keep their input order.

    Args:
        query: Title (and optional author) being searched for
        candidates: Candidate records exposing ``title`` and ``author``
        config: Scoring configuration (defaults to DEFAULT_CONFIG)

    Returns:
        Scored candidates, best first (empty for no candidates)
    """
    scored = [
        ScoredCandidate(candidate, score(query, candidate.title, candidate.author, config))
        for candidate in candidates
    ]
    scored.sort(key=lambda item: item.score, reverse=True)

    logger.debug(
        "Ranked candidates",
        query_title=query.title,
        query_author=query.author,
        candidate_count=len(scored),
        top_score=scored[0].score if scored else None,
    )
    return scored


def best_match(
    query: SearchQuery,
    candidates: Iterable[CandidateT],
    config: ScoringConfig | None = None,
    minimum_score: float = 0.0,
) -> ScoredCandidate[CandidateT] | None:
    """Return the highest-scoring candidate, or None.

    Args:
        query: Title (and optional author) being searched for
        candidates: Candidate records
        config: Scoring configuration (defaults to DEFAULT_CONFIG)
        minimum_score: Scores below this are not accepted

    Returns:
        Best ScoredCandidate, or None if there is none above minimum_score
    """
    ranked = rank(query, candidates, config)
    if not ranked or ranked[0].score < minimum_score:
        return None
    return ranked[0]
