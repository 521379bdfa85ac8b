"""Sort keys for organization-assigned management numbers (e.g., "あ001").

A management number is compared by its first character (raw code point,
not its kana group) and then by the numeric value of the digits that
follow, with full-width and half-width digits treated alike. Records
without a management number sort after every record that has one.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")

FULL_WIDTH_DIGITS = str.maketrans("０１２３４５６７８９", "0123456789")
_LEADING_DIGITS_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True, order=True)
class ManagementSortKey:
    """Composite sort key for a management number.

    ``missing`` is compared first, so the no-key marker (missing=True)
    orders after every concrete key.
    """

    missing: bool
    leading_character: str
    numeric_magnitude: int


NO_MANAGEMENT_KEY = ManagementSortKey(missing=True, leading_character="", numeric_magnitude=0)


def management_sort_key(management_number: str | None) -> ManagementSortKey:
    """Build the sort key for a management number.

    Args:
        management_number: Raw management number, or None

    Returns:
        Concrete key, or NO_MANAGEMENT_KEY when the number is absent or empty
    """
    if not management_number:
        return NO_MANAGEMENT_KEY

    leading = management_number[0]
    remainder = management_number[1:].translate(FULL_WIDTH_DIGITS)
    match = _LEADING_DIGITS_RE.match(remainder)
    magnitude = int(match.group(0)) if match else 0

    return ManagementSortKey(
        missing=False,
        leading_character=leading,
        numeric_magnitude=magnitude,
    )


def sort_by_management_number(
    records: Iterable[T],
    key: Callable[[T], str | None],
) -> list[T]:
    """Sort records by their management number (stable).

    Args:
        records: Records to sort
        key: Function returning a record's management number

    Returns:
        New list in management-number order
    """
    return sorted(records, key=lambda record: management_sort_key(key(record)))
