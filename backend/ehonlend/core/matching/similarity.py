"""Edit-distance based string similarity."""

from __future__ import annotations

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(first: str, second: str) -> int:
    """Compute the Levenshtein distance between two strings.

    Insertion, deletion and substitution each cost 1, counted over code
    points.

    Args:
        first: First string
        second: Second string

    Returns:
        Minimum number of single-character edits
    """
    return Levenshtein.distance(first, second)


def string_similarity(first: str, second: str) -> float:
    """Normalized similarity in [0, 1]: ``1 - distance / max(len)``.

    Two empty strings are identical (1.0).
    """
    max_length = max(len(first), len(second))
    if max_length == 0:
        return 1.0
    return 1.0 - levenshtein_distance(first, second) / max_length
