"""Lookup tables shared by every normalization mode.

All tables are built once at import time and never mutated.
"""

from __future__ import annotations

IDEOGRAPHIC_SPACE = "　"

_HALF_WIDTH_ALNUM = (
    "0123456789"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
)
_FULL_WIDTH_ALNUM = "".join(chr(ord(char) + 0xFEE0) for char in _HALF_WIDTH_ALNUM)

# Ａ-Ｚ, ａ-ｚ, ０-９ and the ideographic space to their ASCII forms
FULL_WIDTH_TO_HALF_WIDTH = str.maketrans(
    _FULL_WIDTH_ALNUM + IDEOGRAPHIC_SPACE,
    _HALF_WIDTH_ALNUM + " ",
)

MIDDLE_DOTS = ("・", "･", "·")
DASH_VARIANTS = ("－", "―", "—", "–", "‐", "‑", "‒", "─", "−")
WAVE_DASHES = ("～", "〜")

# Readable, display-oriented mapping used by the generic mode
CONSERVATIVE_SYMBOLS = str.maketrans(
    {
        **{dot: " " for dot in MIDDLE_DOTS},
        **{dash: "-" for dash in DASH_VARIANTS},
        **{wave: "~" for wave in WAVE_DASHES},
        "（": "(",
        "）": ")",
        "［": "[",
        "］": "]",
        "｛": "{",
        "｝": "}",
        "：": ":",
        "；": ";",
        "！": "!",
        "？": "?",
    }
)

SEARCH_SEPARATOR_SYMBOLS = (
    *MIDDLE_DOTS,
    *DASH_VARIANTS,
    *WAVE_DASHES,
    "~",
    "：",
    ":",
    "；",
    ";",
    "／",
    "/",
    "（",
    "）",
    "(",
    ")",
    "［",
    "］",
    "[",
    "]",
    "「",
    "」",
    "『",
    "』",
    "【",
    "】",
    "〔",
    "〕",
    "！",
    "!",
    "？",
    "?",
)

# Recall-oriented mapping: every separator symbol becomes a space
SEARCH_SYMBOLS = str.maketrans({symbol: " " for symbol in SEARCH_SEPARATOR_SYMBOLS})

# Old-form and variant characters. Multi-character entries come first so
# that 渡邊 is replaced as a unit.
VARIANT_CHARACTERS: tuple[tuple[str, str], ...] = (
    ("渡邊", "渡辺"),
    ("渡邉", "渡辺"),
    ("齋藤", "斎藤"),
    ("齊藤", "斎藤"),
    ("髙", "高"),
    ("﨑", "崎"),
    ("德", "徳"),
    ("濵", "浜"),
    ("凜", "凛"),
)

ROLE_WORDS_KANJI = ("作", "著", "文", "絵", "画", "訳", "編")
ROLE_WORDS_KANA = ("さく", "ちょ", "ぶん", "え", "やく", "へん")

_ROLE_BRACKETS = (("(", ")"), ("[", "]"), ("〔", "〕"), ("（", "）"))

# "作・絵" and friends, in their post-normalization form (middle dot -> space),
# plus the attached kanji spellings
COMPOUND_ROLE_WORDS = ("作 絵", "さく え", "文 絵", "ぶん え", "作絵", "文絵")

COMPOUND_ROLE_SUFFIXES: tuple[str, ...] = tuple(
    f"{open_}{word}{close}" for word in COMPOUND_ROLE_WORDS for open_, close in _ROLE_BRACKETS
) + COMPOUND_ROLE_WORDS

BRACKETED_ROLE_SUFFIXES: tuple[str, ...] = tuple(
    f"{open_}{word}{close}"
    for word in ROLE_WORDS_KANA + ROLE_WORDS_KANJI
    for open_, close in _ROLE_BRACKETS
)
