"""Normalization of Japanese bibliographic strings (titles and author names).

A single pipeline serves every caller. The mode decides the finishing step
and the default symbol policy:

- ``GENERIC``: conservative symbols, single spaces kept (display and sorting)
- ``TITLE``: search symbols, every space removed
- ``AUTHOR``: search symbols, single spaces kept, one trailing role word
  ("作", "（絵）", "さく・え", ...) removed
"""

from __future__ import annotations

from enum import Enum

from .tables import (
    BRACKETED_ROLE_SUFFIXES,
    COMPOUND_ROLE_SUFFIXES,
    CONSERVATIVE_SYMBOLS,
    FULL_WIDTH_TO_HALF_WIDTH,
    ROLE_WORDS_KANA,
    ROLE_WORDS_KANJI,
    SEARCH_SYMBOLS,
    VARIANT_CHARACTERS,
)


class NormalizationMode(str, Enum):
    """Finishing step applied after the shared pipeline."""

    GENERIC = "generic"
    TITLE = "title"
    AUTHOR = "author"


class SymbolPolicy(str, Enum):
    """How punctuation and symbol variants are treated."""

    CONSERVATIVE = "conservative"
    SEARCH = "search"


DEFAULT_SYMBOL_POLICY: dict[NormalizationMode, SymbolPolicy] = {
    NormalizationMode.GENERIC: SymbolPolicy.CONSERVATIVE,
    NormalizationMode.TITLE: SymbolPolicy.SEARCH,
    NormalizationMode.AUTHOR: SymbolPolicy.SEARCH,
}


def fold_full_width(text: str) -> str:
    """Convert full-width Latin letters, digits and spaces to ASCII."""
    return text.translate(FULL_WIDTH_TO_HALF_WIDTH)


def normalize_symbols(text: str, policy: SymbolPolicy) -> str:
    """Apply the symbol table for the given policy."""
    table = SEARCH_SYMBOLS if policy is SymbolPolicy.SEARCH else CONSERVATIVE_SYMBOLS
    return text.translate(table)


def normalize_variant_characters(text: str) -> str:
    """Replace old-form and variant kanji with their modern equivalents."""
    for variant, standard in VARIANT_CHARACTERS:
        text = text.replace(variant, standard)
    return text


def collapse_spaces(text: str) -> str:
    """Collapse every whitespace run to one space and trim."""
    return " ".join(text.split())


_ROLE_SUFFIX_CANDIDATES = (
    *COMPOUND_ROLE_SUFFIXES,
    *BRACKETED_ROLE_SUFFIXES,
    *ROLE_WORDS_KANJI,
    *(f" {word}" for word in ROLE_WORDS_KANA),
)


def _without_role_suffix(author: str) -> str | None:
    for suffix in _ROLE_SUFFIX_CANDIDATES:
        if author.endswith(suffix):
            stripped = author[: -len(suffix)].strip()
            if stripped:
                return stripped
    return None


def strip_role_suffix(author: str) -> str:
    """Remove at most one trailing role word from an author name.

    Compound roles ("作 絵", "作絵") are checked first, then bracketed roles
    ("(作)"), then bare kanji roles ("作"), then bare kana roles ("さく"),
    which must be separated from the name by a space so that names ending
    in "え" are left alone. A role word that is the whole string is kept.

    When the remainder would still end in a role word ("山田 作 作"), the
    name is returned unchanged, so stripping never peels a second role on a
    later call.

    Args:
        author: Author name with spaces already collapsed

    Returns:
        Author name without its role suffix
    """
    stripped = _without_role_suffix(author)
    if stripped is None or _without_role_suffix(stripped) is not None:
        return author
    return stripped


def normalize(
    text: str,
    mode: NormalizationMode = NormalizationMode.GENERIC,
    symbols: SymbolPolicy | None = None,
) -> str:
    """Normalize a title, author or free-text string.

    Args:
        text: Raw string (any script, may be empty)
        mode: Finishing step to apply
        symbols: Symbol policy; None uses the mode's default

    Returns:
        Normalized string (possibly empty)
    """
    policy = symbols if symbols is not None else DEFAULT_SYMBOL_POLICY[mode]

    result = text.strip()
    result = fold_full_width(result)
    result = normalize_symbols(result, policy)
    result = normalize_variant_characters(result)
    result = collapse_spaces(result)

    if mode is NormalizationMode.TITLE:
        return result.replace(" ", "")
    if mode is NormalizationMode.AUTHOR:
        return strip_role_suffix(result)
    return result


def normalize_title(title: str) -> str:
    return normalize(title, NormalizationMode.TITLE)


def normalize_author(author: str) -> str:
    return normalize(author, NormalizationMode.AUTHOR)


def normalize_generic(text: str) -> str:
    return normalize(text, NormalizationMode.GENERIC)
