"""Scoring configuration - tier scores, thresholds and weights."""

from __future__ import annotations

import json

import structlog
from pydantic import ConfigDict, ValidationError
from pydantic.dataclasses import dataclass

logger = structlog.get_logger("ehonlend.matching.config")


@dataclass(frozen=True, config=ConfigDict(extra="forbid"))
class ScoringConfig:
    """Configuration for search result scoring.

    This class centralizes every scoring constant so that the matching
    behavior can be tuned from the settings file. Values are validated on
    construction, so a mistyped or unknown key in the settings file raises
    ValidationError.
    """

    # Title tiers
    title_exact_match: float = 1.0
    title_prefix_match: float = 0.9
    title_substring_match: float = 0.8
    title_reverse_substring_match: float = 0.7
    title_similarity_threshold: float = 0.5
    title_similarity_factor: float = 0.6

    # Author tiers
    author_exact_match: float = 1.0
    author_partial_match: float = 0.8
    author_similarity_threshold: float = 0.6
    author_similarity_factor: float = 0.7

    # Blend weights
    title_weight: float = 0.7
    author_weight: float = 0.3


# Default config instance
DEFAULT_CONFIG = ScoringConfig()

# Cached config instance (loaded from settings file)
_cached_config: ScoringConfig | None = None


def get_scoring_config() -> ScoringConfig:
    """Get the configured scoring settings.

    Loads the "scoring" section of settings.json if present, otherwise
    returns defaults. The result is cached until reload_scoring_config().

    Returns:
        ScoringConfig instance with current settings
    """
    global _cached_config

    if _cached_config is not None:
        return _cached_config

    from ehonlend.core.config import get_settings

    settings_file = get_settings().settings_file
    _cached_config = DEFAULT_CONFIG

    if settings_file.exists():
        try:
            with settings_file.open("r", encoding="utf-8") as f:
                scoring_settings = json.load(f).get("scoring")
            if scoring_settings:
                _cached_config = ScoringConfig(**scoring_settings)
        except (OSError, ValueError, ValidationError, TypeError, AttributeError) as e:
            logger.warning(
                "Failed to load scoring config, using defaults",
                settings_file=str(settings_file),
                error=str(e),
                error_type=type(e).__name__,
            )

    return _cached_config


def reload_scoring_config() -> ScoringConfig:
    """Reload scoring configuration from the settings file.

    Call this after updating settings to ensure new values are used.
    """
    global _cached_config
    _cached_config = None
    return get_scoring_config()
