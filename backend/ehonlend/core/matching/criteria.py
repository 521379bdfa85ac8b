"""Individual match criteria evaluators.

Each function evaluates one field of a candidate (title or author) against
the search query and returns a score and a reason. Both sides are compared
in their normalized, lowercased form.
"""

from __future__ import annotations

from ehonlend.core.text import normalize_author, normalize_title

from .config import DEFAULT_CONFIG, ScoringConfig
from .similarity import string_similarity


def title_key(title: str | None) -> str:
    """Comparison form of a title (title mode, spaces removed, lowercased)."""
    return normalize_title(title or "").lower()


def author_key(author: str | None) -> str:
    """Comparison form of an author (author mode, role word removed, lowercased)."""
    return normalize_author(author or "").lower()


def match_title(
    candidate_title: str | None,
    search_title: str,
    config: ScoringConfig | None = None,
) -> tuple[float, str]:
    """Evaluate title match.

    Tiers, best first: exact, prefix, substring, reverse substring, then
    edit-distance similarity scaled down when above the threshold.

    Args:
        candidate_title: Title of the candidate record
        search_title: Title being searched for
        config: Scoring configuration (defaults to DEFAULT_CONFIG)

    Returns:
        Tuple of (score, reason)
    """
    config = config or DEFAULT_CONFIG

    search = title_key(search_title)
    candidate = title_key(candidate_title)

    if not (search and candidate):
        return 0.0, f"Empty key: search='{search}', candidate='{candidate}'"

    if candidate == search:
        return config.title_exact_match, f"Exact title match: '{candidate}'"

    if candidate.startswith(search):
        return (
            config.title_prefix_match,
            f"Prefix title match: '{candidate}' starts with '{search}'",
        )

    if search in candidate:
        return (
            config.title_substring_match,
            f"Substring title match: '{search}' found in '{candidate}'",
        )

    if candidate in search:
        return (
            config.title_reverse_substring_match,
            f"Reverse substring title match: '{candidate}' found in '{search}'",
        )

    similarity = string_similarity(search, candidate)
    if similarity >= config.title_similarity_threshold:
        return (
            similarity * config.title_similarity_factor,
            f"Similar title: '{search}' vs '{candidate}' (similarity {similarity:.2f})",
        )

    return 0.0, f"No title match: '{search}' vs '{candidate}' (similarity {similarity:.2f})"


def match_author(
    candidate_author: str | None,
    search_author: str,
    config: ScoringConfig | None = None,
) -> tuple[float, str]:
    """Evaluate author match.

    Args:
        candidate_author: Author of the candidate record (may be None)
        search_author: Author being searched for
        config: Scoring configuration (defaults to DEFAULT_CONFIG)

    Returns:
        Tuple of (score, reason)
    """
    config = config or DEFAULT_CONFIG

    search = author_key(search_author)
    candidate = author_key(candidate_author)

    if not (search and candidate):
        return 0.0, f"Empty key: search='{search}', candidate='{candidate}'"

    if candidate == search:
        return config.author_exact_match, f"Exact author match: '{candidate}'"

    if search in candidate or candidate in search:
        return (
            config.author_partial_match,
            f"Partial author match: '{search}' vs '{candidate}'",
        )

    similarity = string_similarity(search, candidate)
    if similarity >= config.author_similarity_threshold:
        return (
            similarity * config.author_similarity_factor,
            f"Similar author: '{search}' vs '{candidate}' (similarity {similarity:.2f})",
        )

    return 0.0, f"No author match: '{search}' vs '{candidate}' (similarity {similarity:.2f})"
