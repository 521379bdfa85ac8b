"""Tests for kana-sectioned book lists."""

from __future__ import annotations

from ehonlend.core.catalog import (
    BookRecord,
    BookSection,
    BookSortType,
    build_sections,
    filter_sections,
    section_books,
    sort_sections,
)
from ehonlend.core.kana import KanaGroup
from ehonlend.core.text import SymbolPolicy

GURI_GURA = BookRecord("ぐりとぐら", "なかがわりえこ", "か010")
KAIJU = BookRecord("かいじゅうたちのいるところ", "モーリス・センダック", "か002")
HARAPEKO = BookRecord("はらぺこあおむし", "Eric Carle", "は001")
NONTAN = BookRecord("ノンタン ぶらんこのせて", "キヨノサチコ")
AOKUN = BookRecord("あおくんときいろちゃん", "レオ・レオーニ", "あ001")
NUMBERED = BookRecord("100かいだてのいえ", "いわいとしお", "ひ003")

BOOKS = [GURI_GURA, KAIJU, HARAPEKO, NONTAN, AOKUN, NUMBERED]


def _titles(sections: list[BookSection]) -> dict[KanaGroup, list[str]]:
    return {section.kana_group: [book.title for book in section.books] for section in sections}


class TestBookSection:
    """Test BookSection properties."""

    def test_display_title(self):
        assert BookSection(KanaGroup.SA, ()).display_title == "さ"

    def test_is_empty(self):
        assert BookSection(KanaGroup.SA, ()).is_empty is True
        assert BookSection(KanaGroup.KA, (GURI_GURA,)).is_empty is False


class TestBuildSections:
    """Test grouping books into sections."""

    def test_groups_in_kana_order(self):
        sections = build_sections(BOOKS)

        assert [section.kana_group for section in sections] == [
            KanaGroup.A,
            KanaGroup.KA,
            KanaGroup.NA,
            KanaGroup.HA,
            KanaGroup.OTHER,
        ]

    def test_input_order_kept_within_group(self):
        sections = build_sections(BOOKS)

        assert _titles(sections)[KanaGroup.KA] == ["ぐりとぐら", "かいじゅうたちのいるところ"]

    def test_pre_assigned_group_wins(self):
        book = BookRecord("100かいだてのいえ", kana_group=KanaGroup.HA)

        sections = build_sections([book])

        assert sections == [BookSection(KanaGroup.HA, (book,))]

    def test_empty(self):
        assert build_sections([]) == []

    def test_symbol_policy(self):
        book = BookRecord("「ぐりとぐら」")

        assert build_sections([book])[0].kana_group is KanaGroup.OTHER
        assert build_sections([book], SymbolPolicy.SEARCH)[0].kana_group is KanaGroup.KA


class TestFilterSections:
    """Test search and kana filtering."""

    def test_no_filter(self):
        sections = build_sections(BOOKS)
        assert filter_sections(sections) == sections

    def test_search_title(self):
        result = filter_sections(build_sections(BOOKS), search_text="ぐら")

        assert _titles(result) == {KanaGroup.KA: ["ぐりとぐら"]}

    def test_search_author_case_insensitive(self):
        result = filter_sections(build_sections(BOOKS), search_text="eric")

        assert _titles(result) == {KanaGroup.HA: ["はらぺこあおむし"]}

    def test_search_full_width(self):
        result = filter_sections(build_sections(BOOKS), search_text="ＥＲＩＣ")

        assert _titles(result) == {KanaGroup.HA: ["はらぺこあおむし"]}

    def test_search_no_match(self):
        assert filter_sections(build_sections(BOOKS), search_text="ももたろう") == []

    def test_kana_filter(self):
        result = filter_sections(build_sections(BOOKS), kana_filter=KanaGroup.NA)

        assert [section.kana_group for section in result] == [KanaGroup.NA]

    def test_kana_filter_without_books(self):
        assert filter_sections(build_sections(BOOKS), kana_filter=KanaGroup.WA) == []

    def test_search_and_kana_filter(self):
        result = filter_sections(build_sections(BOOKS), search_text="の", kana_filter=KanaGroup.KA)

        assert _titles(result) == {KanaGroup.KA: ["かいじゅうたちのいるところ"]}


class TestSortSections:
    """Test sorting inside sections."""

    def test_sort_by_title(self):
        result = sort_sections(build_sections(BOOKS), BookSortType.TITLE)

        assert _titles(result)[KanaGroup.KA] == ["かいじゅうたちのいるところ", "ぐりとぐら"]

    def test_sort_by_management_number(self):
        books = [
            BookRecord("ぐりとぐら", management_number="か010"),
            BookRecord("ぐりとぐらのえんそく"),
            BookRecord("かいじゅうたちのいるところ", management_number="か２"),
            BookRecord("ぐりとぐらのおきゃくさま", management_number="か001"),
        ]

        result = sort_sections(build_sections(books), BookSortType.MANAGEMENT_NUMBER)

        assert _titles(result)[KanaGroup.KA] == [
            "ぐりとぐらのおきゃくさま",
            "かいじゅうたちのいるところ",
            "ぐりとぐら",
            "ぐりとぐらのえんそく",
        ]

    def test_books_without_number_sorted_by_title(self):
        books = [
            BookRecord("くまのがっこう"),
            BookRecord("ぐりとぐら", management_number="か010"),
            BookRecord("かばくん", management_number=""),
            BookRecord("きんぎょがにげた"),
        ]

        result = sort_sections(build_sections(books), BookSortType.MANAGEMENT_NUMBER)

        assert _titles(result)[KanaGroup.KA] == [
            "ぐりとぐら",
            "かばくん",
            "きんぎょがにげた",
            "くまのがっこう",
        ]

    def test_equal_numbers_keep_input_order(self):
        books = [
            BookRecord("ぐりとぐら", management_number="か001"),
            BookRecord("かいじゅうたちのいるところ", management_number="か１"),
        ]

        result = sort_sections(build_sections(books), BookSortType.MANAGEMENT_NUMBER)

        assert _titles(result)[KanaGroup.KA] == ["ぐりとぐら", "かいじゅうたちのいるところ"]

    def test_sections_keep_order(self):
        sections = build_sections(BOOKS)

        result = sort_sections(sections, BookSortType.MANAGEMENT_NUMBER)

        assert [section.kana_group for section in result] == [
            section.kana_group for section in sections
        ]


class TestSectionBooks:
    """Test the combined group/filter/sort call."""

    def test_combined(self):
        result = section_books(BOOKS, search_text="の", sort_type=BookSortType.TITLE)

        assert _titles(result) == {
            KanaGroup.KA: ["かいじゅうたちのいるところ"],
            KanaGroup.NA: ["ノンタン ぶらんこのせて"],
            KanaGroup.OTHER: ["100かいだてのいえ"],
        }

    def test_defaults(self):
        result = section_books(BOOKS)

        assert sum(len(section.books) for section in result) == len(BOOKS)
