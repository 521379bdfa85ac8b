"""Gojūon (kana row) classification for sectioned browsing.

Titles are converted to hiragana (romaji via a Hepburn table, katakana and
kanji via pykakasi) and bucketed by their first character into one of the
ten kana rows, or ``KanaGroup.OTHER``.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

import pykakasi
import structlog

from ehonlend.core.text import NormalizationMode, SymbolPolicy, normalize

logger = structlog.get_logger("ehonlend.kana")


class KanaGroup(str, Enum):
    """Kana row used to group titles, in display order."""

    A = "あ"
    KA = "か"
    SA = "さ"
    TA = "た"
    NA = "な"
    HA = "は"
    MA = "ま"
    YA = "や"
    RA = "ら"
    WA = "わ"
    OTHER = "他"

    @property
    def display_name(self) -> str:
        """Section header label."""
        return self.value

    @property
    def sort_order(self) -> int:
        """Position of the group in display order (あ=0 ... わ=9, 他=10)."""
        return _SORT_ORDER[self]


_SORT_ORDER = {group: index for index, group in enumerate(KanaGroup)}

# Disjoint membership sets, voiced and semi-voiced kana included
_GROUP_MEMBERS: dict[KanaGroup, frozenset[str]] = {
    KanaGroup.A: frozenset("あいうえお"),
    KanaGroup.KA: frozenset("かきくけこがぎぐげご"),
    KanaGroup.SA: frozenset("さしすせそざじずぜぞ"),
    KanaGroup.TA: frozenset("たちつてとだぢづでど"),
    KanaGroup.NA: frozenset("なにぬねの"),
    KanaGroup.HA: frozenset("はひふへほばびぶべぼぱぴぷぺぽ"),
    KanaGroup.MA: frozenset("まみむめも"),
    KanaGroup.YA: frozenset("やゆよ"),
    KanaGroup.RA: frozenset("らりるれろ"),
    KanaGroup.WA: frozenset("わゐゑをん"),
}

_VOWELS = "aiueo"

# Hepburn rows; "" marks syllables that do not exist in the row
_ROMAJI_ROWS: dict[str, tuple[str, ...]] = {
    "": ("あ", "い", "う", "え", "お"),
    "k": ("か", "き", "く", "け", "こ"),
    "g": ("が", "ぎ", "ぐ", "げ", "ご"),
    "s": ("さ", "し", "す", "せ", "そ"),
    "z": ("ざ", "じ", "ず", "ぜ", "ぞ"),
    "t": ("た", "ち", "つ", "て", "と"),
    "d": ("だ", "ぢ", "づ", "で", "ど"),
    "n": ("な", "に", "ぬ", "ね", "の"),
    "h": ("は", "ひ", "ふ", "へ", "ほ"),
    "b": ("ば", "び", "ぶ", "べ", "ぼ"),
    "p": ("ぱ", "ぴ", "ぷ", "ぺ", "ぽ"),
    "m": ("ま", "み", "む", "め", "も"),
    "y": ("や", "", "ゆ", "", "よ"),
    "r": ("ら", "り", "る", "れ", "ろ"),
    "w": ("わ", "", "", "", "を"),
}


def _build_romaji_table() -> dict[str, str]:
    table: dict[str, str] = {}
    for consonant, kana_row in _ROMAJI_ROWS.items():
        for vowel, kana in zip(_VOWELS, kana_row, strict=True):
            if kana:
                table[consonant + vowel] = kana

    small_y = {"a": "ゃ", "u": "ゅ", "o": "ょ"}
    for consonant in "kgnhbpmr":
        i_kana = _ROMAJI_ROWS[consonant][1]
        for vowel, small in small_y.items():
            table[f"{consonant}y{vowel}"] = i_kana + small

    for prefix, i_kana in (("sh", "し"), ("ch", "ち"), ("j", "じ")):
        table[f"{prefix}i"] = i_kana
        for vowel, small in small_y.items():
            table[f"{prefix}{vowel}"] = i_kana + small
        table[f"{prefix}e"] = i_kana + "ぇ"

    table.update({"tsu": "つ", "fu": "ふ", "fa": "ふぁ", "fi": "ふぃ", "fe": "ふぇ", "fo": "ふぉ"})
    table.update({"la": "ら", "li": "り", "lu": "る", "le": "れ", "lo": "ろ"})
    table.update({"va": "ゔぁ", "vi": "ゔぃ", "vu": "ゔ", "ve": "ゔぇ", "vo": "ゔぉ"})
    return table


ROMAJI_TO_HIRAGANA = _build_romaji_table()
_ROMAJI_MAX_LENGTH = max(len(key) for key in ROMAJI_TO_HIRAGANA)


def romaji_to_hiragana(text: str) -> str:
    """Convert the romaji (ASCII letter) runs of a string to hiragana.

    Greedy longest match against the Hepburn table. A doubled consonant
    becomes a small "っ" and a syllable-final "n" becomes "ん". Anything
    the table does not cover is passed through unchanged.

    Args:
        text: Text that may contain romaji

    Returns:
        Text with romaji syllables replaced by hiragana
    """
    # Lowercase ASCII only so indexes stay aligned with the input
    lowered = "".join(char.lower() if char.isascii() else char for char in text)
    result: list[str] = []
    index = 0
    while index < len(lowered):
        char = lowered[index]
        following = lowered[index + 1] if index + 1 < len(lowered) else ""

        if char.isascii() and char.isalpha() and char not in _VOWELS + "n" and following == char:
            result.append("っ")
            index += 1
            continue

        for size in range(_ROMAJI_MAX_LENGTH, 0, -1):
            chunk = lowered[index : index + size]
            if chunk in ROMAJI_TO_HIRAGANA:
                result.append(ROMAJI_TO_HIRAGANA[chunk])
                index += size
                break
        else:
            result.append("ん" if char == "n" else text[index])
            index += 1

    return "".join(result)


@lru_cache(maxsize=1)
def _get_kakasi() -> pykakasi.kakasi:
    """Create the pykakasi converter once per process."""
    logger.debug("Initializing pykakasi converter")
    return pykakasi.kakasi()


def to_hiragana(text: str) -> str:
    """Convert romaji, katakana and kanji in a string to hiragana.

    Kanji readings are best effort (pykakasi's dictionary reading).
    Characters neither converter understands are kept as-is.

    Args:
        text: Text in any script

    Returns:
        Hiragana-normalized text
    """
    if not text:
        return ""
    converted = romaji_to_hiragana(text)
    return "".join(item["hira"] for item in _get_kakasi().convert(converted))


def group_for_character(char: str) -> KanaGroup:
    """Return the kana row a single hiragana character belongs to."""
    for group, members in _GROUP_MEMBERS.items():
        if char in members:
            return group
    return KanaGroup.OTHER


def classify(text: str, symbols: SymbolPolicy = SymbolPolicy.CONSERVATIVE) -> KanaGroup:
    """Classify a title into its kana group.

    The text is normalized in generic mode with the given symbol policy
    before conversion. ``SymbolPolicy.SEARCH`` turns leading brackets and
    quotes into spaces (which are then trimmed), so "「ぐりとぐら」" groups
    under か instead of 他.

    Args:
        text: Title (or any string)
        symbols: Symbol policy used for the normalization step

    Returns:
        The kana group; ``KanaGroup.OTHER`` if nothing matches
    """
    if not text:
        return KanaGroup.OTHER

    normalized = normalize(text, NormalizationMode.GENERIC, symbols)
    hiragana = to_hiragana(normalized)
    if not hiragana:
        return KanaGroup.OTHER

    return group_for_character(hiragana[0])
