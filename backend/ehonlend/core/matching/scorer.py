"""Match scorer - blends title and author criteria into one relevance score.

The score of a candidate is a pure function of the query and the
candidate's title and author: no hidden state, no randomness.
"""

from __future__ import annotations

from dataclasses import dataclass

from .config import DEFAULT_CONFIG, ScoringConfig
from .criteria import author_key, match_author, match_title, title_key


@dataclass(frozen=True)
class SearchQuery:
    """A title/author search.

    Attributes:
        title: Title being searched for (may be empty)
        author: Author being searched for, or None when not given
    """

    title: str
    author: str | None = None


class MatchResult:
    """Result of a candidate evaluation.

    Attributes:
        score: Weighted score in [0.0, 1.0]
        details: List of strings explaining each criterion
    """

    def __init__(self, score: float, details: list[str]):
        self.score = score
        self.details = details

    def __repr__(self) -> str:
        return f"MatchResult(score={self.score:.3f}, details={len(self.details)})"


def evaluate_candidate(
    query: SearchQuery,
    candidate_title: str | None,
    candidate_author: str | None = None,
    config: ScoringConfig | None = None,
) -> MatchResult:
    """Evaluate a candidate record against a search query.

    The title term takes part only when the normalized query title is
    non-empty; the author term only when the query has a non-empty author.
    A term that takes part always counts its weight, even when it scores
    0.0, so a wrong author lowers the score below a title-only query.

    Args:
        query: Title (and optional author) being searched for
        candidate_title: Title of the candidate
        candidate_author: Author of the candidate, if known
        config: Scoring configuration (defaults to DEFAULT_CONFIG)

    Returns:
        MatchResult with the blended score and details
    """
    config = config or DEFAULT_CONFIG

    weighted_total = 0.0
    total_weight = 0.0
    details: list[str] = []

    if title_key(query.title):
        title_score, title_reason = match_title(candidate_title, query.title, config)
        weighted_total += title_score * config.title_weight
        total_weight += config.title_weight
        details.append(title_reason)

    if query.author is not None and author_key(query.author):
        author_score, author_reason = match_author(candidate_author, query.author, config)
        weighted_total += author_score * config.author_weight
        total_weight += config.author_weight
        details.append(author_reason)

    if total_weight <= 0:
        return MatchResult(0.0, ["Empty query"])

    # Custom tier values must not push the score outside [0, 1]
    blended = min(max(weighted_total / total_weight, 0.0), 1.0)
    return MatchResult(blended, details)


def score(
    query: SearchQuery,
    candidate_title: str | None,
    candidate_author: str | None = None,
    config: ScoringConfig | None = None,
) -> float:
    """Score a candidate against a query. See evaluate_candidate()."""
    return evaluate_candidate(query, candidate_title, candidate_author, config).score
