"""Text normalization for Japanese bibliographic strings."""

from .normalizer import (
    NormalizationMode,
    SymbolPolicy,
    collapse_spaces,
    fold_full_width,
    normalize,
    normalize_author,
    normalize_generic,
    normalize_title,
    strip_role_suffix,
)

__all__ = [
    "NormalizationMode",
    "SymbolPolicy",
    "collapse_spaces",
    "fold_full_width",
    "normalize",
    "normalize_author",
    "normalize_generic",
    "normalize_title",
    "strip_role_suffix",
]
