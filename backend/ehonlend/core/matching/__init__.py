"""Search result scoring and ranking.

This module scores candidate books against a title/author query with
configurable tier values and weights, and ranks candidate lists.
"""

from .config import DEFAULT_CONFIG, ScoringConfig, get_scoring_config, reload_scoring_config
from .criteria import author_key, match_author, match_title, title_key
from .ranking import ScoredCandidate, TitledRecord, best_match, rank
from .scorer import MatchResult, SearchQuery, evaluate_candidate, score
from .similarity import levenshtein_distance, string_similarity

__all__ = [
    "ScoringConfig",
    "DEFAULT_CONFIG",
    "get_scoring_config",
    "reload_scoring_config",
    "author_key",
    "match_author",
    "match_title",
    "title_key",
    "ScoredCandidate",
    "TitledRecord",
    "best_match",
    "rank",
    "MatchResult",
    "SearchQuery",
    "evaluate_candidate",
    "score",
    "levenshtein_distance",
    "string_similarity",
]
