"""ISBN normalization and validation.

Every function here is total: invalid input yields ``False`` or ``None``,
never an exception. Callers treat an invalid ISBN as "no identifier
available".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ISBN13_PREFIXES = ("978", "979")
ISBN10_CHECK_CHARACTER = "X"


class IsbnVariant(str, Enum):
    """Which ISBN form a validated identifier uses."""

    ISBN_10 = "ISBN_10"
    ISBN_13 = "ISBN_13"


@dataclass(frozen=True)
class Isbn:
    """A validated ISBN.

    Attributes:
        value: Normalized identifier (digits, plus a trailing "X" for some ISBN-10s)
        variant: ISBN-10 or ISBN-13
    """

    value: str
    variant: IsbnVariant

    def __str__(self) -> str:
        return self.value


def _is_ascii_digit(char: str) -> bool:
    return "0" <= char <= "9"


def normalize_isbn(raw: str) -> str:
    """Normalize an ISBN candidate string.

    Uppercases, removes hyphens and trims surrounding whitespace.

    Args:
        raw: ISBN as typed or scanned (e.g., "978-4-8340-0082-5")

    Returns:
        Normalized candidate (e.g., "9784834000825")
    """
    return raw.upper().replace("-", "").strip()


def is_valid_isbn13(candidate: str) -> bool:
    """Validate the format and checksum of an ISBN-13.

    Weights alternate 1, 3 starting at index 0; the weighted sum of all
    13 digits must be divisible by 10.

    Args:
        candidate: ISBN-13 candidate (normalized first)

    Returns:
        True if the candidate is a valid ISBN-13
    """
    normalized = normalize_isbn(candidate)

    if len(normalized) != 13:
        return False
    if not all(_is_ascii_digit(char) for char in normalized):
        return False
    # 978 is the Bookland EAN prefix, 979 the additional book prefix
    if not normalized.startswith(ISBN13_PREFIXES):
        return False

    checksum = sum(
        int(char) * (1 if index % 2 == 0 else 3) for index, char in enumerate(normalized)
    )
    return checksum % 10 == 0


def is_valid_isbn10(candidate: str) -> bool:
    """Validate the format and checksum of an ISBN-10.

    The first nine characters must be digits; the last may be a digit or
    "X" (value 10). Position ``i`` is weighted ``10 - i`` and the sum must
    be divisible by 11.

    Args:
        candidate: ISBN-10 candidate (normalized first)

    Returns:
        True if the candidate is a valid ISBN-10
    """
    normalized = normalize_isbn(candidate)

    if len(normalized) != 10:
        return False

    total = 0
    for index, char in enumerate(normalized):
        if index == 9 and char == ISBN10_CHECK_CHARACTER:
            value = 10
        elif _is_ascii_digit(char):
            value = int(char)
        else:
            return False
        total += value * (10 - index)

    return total % 11 == 0


def is_valid_isbn(candidate: str) -> bool:
    """Return True if the candidate is a valid ISBN-13 or ISBN-10."""
    return is_valid_isbn13(candidate) or is_valid_isbn10(candidate)


def parse_isbn(raw: str | None) -> Isbn | None:
    """Parse a raw string into a validated Isbn.

    Args:
        raw: ISBN as typed or scanned, or None

    Returns:
        Isbn with its variant, or None if the input is not a valid ISBN
    """
    if not raw:
        return None
    normalized = normalize_isbn(raw)
    if is_valid_isbn13(normalized):
        return Isbn(normalized, IsbnVariant.ISBN_13)
    if is_valid_isbn10(normalized):
        return Isbn(normalized, IsbnVariant.ISBN_10)
    return None


def isbn10_to_isbn13(isbn10: str) -> str | None:
    """Convert a valid ISBN-10 to its 978-prefixed ISBN-13 form.

    Args:
        isbn10: ISBN-10 candidate

    Returns:
        Equivalent ISBN-13, or None if the input is not a valid ISBN-10
    """
    normalized = normalize_isbn(isbn10)
    if not is_valid_isbn10(normalized):
        return None

    core = "978" + normalized[:9]
    total = sum(int(char) * (1 if index % 2 == 0 else 3) for index, char in enumerate(core))
    check_digit = (10 - total % 10) % 10
    return f"{core}{check_digit}"
