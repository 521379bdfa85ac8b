"""Integration tests for the HTTP API."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ehonlend.app import create_app
from ehonlend.core.config import reload_settings
from ehonlend.core.matching import reload_scoring_config


@pytest.fixture
def client() -> TestClient:
    """Create test client."""
    return TestClient(create_app())


def _write_settings(data_dir: Path, payload: dict) -> None:
    config_dir = data_dir / "config"
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "settings.json").write_text(json.dumps(payload), encoding="utf-8")


class TestHealthRoute:
    """Test GET /api/health."""

    def test_health(self, client: TestClient):
        response = client.get("/api/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert len(data["trace_id"]) == 32


class TestIsbnRoute:
    """Test GET /api/isbn/{raw}."""

    def test_valid_isbn13(self, client: TestClient):
        data = client.get("/api/isbn/978-4-8340-0082-5").json()

        assert data["input"] == "978-4-8340-0082-5"
        assert data["normalized"] == "9784834000825"
        assert data["valid"] is True
        assert data["variant"] == "ISBN_13"
        assert data["isbn13"] == "9784834000825"

    def test_valid_isbn10(self, client: TestClient):
        data = client.get("/api/isbn/080442957x").json()

        assert data["normalized"] == "080442957X"
        assert data["valid"] is True
        assert data["variant"] == "ISBN_10"
        assert data["isbn13"] == "9780804429573"

    def test_invalid(self, client: TestClient):
        response = client.get("/api/isbn/9784834000826")

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["variant"] is None
        assert data["isbn13"] is None


class TestNormalizeRoute:
    """Test POST /api/text/normalize."""

    def test_default_mode_is_generic(self, client: TestClient):
        data = client.post("/api/text/normalize", json={"text": "ＡＢＣ　ぐり・ぐら"}).json()

        assert data["mode"] == "generic"
        assert data["normalized"] == "ABC ぐり ぐら"

    def test_title_mode(self, client: TestClient):
        data = client.post(
            "/api/text/normalize", json={"text": "「ぐり と ぐら」", "mode": "title"}
        ).json()

        assert data["normalized"] == "ぐりとぐら"

    def test_author_mode(self, client: TestClient):
        data = client.post(
            "/api/text/normalize", json={"text": "宮沢賢治（作）", "mode": "author"}
        ).json()

        assert data["normalized"] == "宮沢賢治"

    def test_symbol_policy(self, client: TestClient):
        data = client.post(
            "/api/text/normalize",
            json={"text": "「ぐりとぐら」", "mode": "generic", "symbols": "search"},
        ).json()

        assert data["normalized"] == "ぐりとぐら"

    def test_invalid_mode(self, client: TestClient):
        response = client.post("/api/text/normalize", json={"text": "x", "mode": "shouting"})

        assert response.status_code == 422

    def test_missing_text(self, client: TestClient):
        assert client.post("/api/text/normalize", json={}).status_code == 422


class TestClassifyRoute:
    """Test POST /api/kana/classify."""

    def test_classify(self, client: TestClient):
        data = client.post("/api/kana/classify", json={"text": "ノンタン"}).json()

        assert data["group"] == "na"
        assert data["label"] == "な"
        assert data["sort_order"] == 4
        assert data["reading"] == "のんたん"

    def test_empty_is_other(self, client: TestClient):
        data = client.post("/api/kana/classify", json={"text": ""}).json()

        assert data["group"] == "other"
        assert data["label"] == "他"
        assert data["sort_order"] == 10

    def test_explicit_symbol_policy(self, client: TestClient):
        conservative = client.post(
            "/api/kana/classify", json={"text": "「ぐりとぐら」", "symbols": "conservative"}
        ).json()
        search = client.post(
            "/api/kana/classify", json={"text": "「ぐりとぐら」", "symbols": "search"}
        ).json()

        assert conservative["group"] == "other"
        assert search["group"] == "ka"

    def test_settings_symbol_policy(self, isolated_data_dir: Path):
        _write_settings(isolated_data_dir, {"kana_symbol_policy": "search"})
        reload_settings()
        client = TestClient(create_app())

        data = client.post("/api/kana/classify", json={"text": "「ぐりとぐら」"}).json()

        assert data["group"] == "ka"


class TestScoreRoute:
    """Test POST /api/search/score."""

    def test_exact(self, client: TestClient):
        data = client.post(
            "/api/search/score",
            json={
                "query": {"title": "ぐりとぐら", "author": "なかがわりえこ"},
                "candidate": {"title": "ぐりとぐら", "author": "なかがわりえこ さく"},
            },
        ).json()

        assert data["score"] == 1.0
        assert len(data["details"]) == 2

    def test_empty_query(self, client: TestClient):
        data = client.post(
            "/api/search/score",
            json={"query": {"title": ""}, "candidate": {"title": "ぐりとぐら"}},
        ).json()

        assert data["score"] == 0.0
        assert data["details"] == ["Empty query"]

    def test_uses_scoring_settings(self, isolated_data_dir: Path):
        _write_settings(isolated_data_dir, {"scoring": {"title_prefix_match": 0.5}})
        reload_scoring_config()
        client = TestClient(create_app())

        data = client.post(
            "/api/search/score",
            json={"query": {"title": "ぐりとぐら"}, "candidate": {"title": "ぐりとぐらのえんそく"}},
        ).json()

        assert data["score"] == pytest.approx(0.5)

    def test_malformed_scoring_settings_use_defaults(self, isolated_data_dir: Path):
        _write_settings(isolated_data_dir, {"scoring": {"title_weight": "heavy"}})
        reload_scoring_config()
        client = TestClient(create_app())

        response = client.post(
            "/api/search/score",
            json={"query": {"title": "ぐりとぐら"}, "candidate": {"title": "ぐりとぐらのえんそく"}},
        )

        assert response.status_code == 200
        assert response.json()["score"] == pytest.approx(0.9)

    def test_missing_candidate(self, client: TestClient):
        response = client.post("/api/search/score", json={"query": {"title": "ぐりとぐら"}})

        assert response.status_code == 422


class TestRankRoute:
    """Test POST /api/search/rank."""

    CANDIDATES = [
        {"title": "はらぺこあおむし", "author": "エリック・カール"},
        {"title": "ぐりとぐらのおきゃくさま", "author": "なかがわりえこ"},
        {"title": "ぐりとぐら", "author": "なかがわりえこ", "isbn13": "9784834000825"},
    ]

    def test_rank(self, client: TestClient):
        data = client.post(
            "/api/search/rank",
            json={"query": {"title": "ぐりとぐら"}, "candidates": self.CANDIDATES},
        ).json()

        titles = [result["candidate"]["title"] for result in data["results"]]
        assert titles == ["ぐりとぐら", "ぐりとぐらのおきゃくさま", "はらぺこあおむし"]
        assert data["results"][0]["score"] == 1.0
        assert data["catalog_query"] == 'intitle:"ぐりとぐら"'

    def test_isbn_match_first(self, client: TestClient):
        candidates = [
            {"title": "ぐりとぐら", "author": "なかがわりえこ"},
            {"title": "（タイトル未取得）", "isbn10": "4834000826"},
        ]

        data = client.post(
            "/api/search/rank",
            json={
                "query": {"title": "ぐりとぐら", "author": "なかがわりえこ"},
                "candidates": candidates,
                "isbn": "9784834000825",
            },
        ).json()

        assert data["results"][0]["candidate"]["isbn10"] == "4834000826"
        assert data["results"][0]["score"] == 1.0
        assert data["catalog_query"] == 'intitle:"ぐりとぐら"+inauthor:"なかがわりえこ"'

    def test_catalog_response(self, client: TestClient):
        catalog_response = {
            "totalItems": 2,
            "items": [
                {"volumeInfo": {"title": "ぐりとぐらのえんそく", "authors": ["なかがわりえこ"]}},
                {
                    "volumeInfo": {
                        "title": "ぐりとぐら",
                        "authors": ["なかがわりえこ", "おおむらゆりこ"],
                        "imageLinks": {"thumbnail": "http://example.com/guri.jpg"},
                    }
                },
            ],
        }

        data = client.post(
            "/api/search/rank",
            json={"query": {"title": "ぐりとぐら"}, "catalog_response": catalog_response},
        ).json()

        top = data["results"][0]["candidate"]
        assert top["title"] == "ぐりとぐら"
        assert top["author"] == "なかがわりえこ, おおむらゆりこ"
        assert top["thumbnail"] == "https://example.com/guri.jpg"

    def test_limit(self, client: TestClient):
        data = client.post(
            "/api/search/rank",
            json={"query": {"title": "ぐりとぐら"}, "candidates": self.CANDIDATES, "limit": 1},
        ).json()

        assert len(data["results"]) == 1

    def test_empty(self, client: TestClient):
        data = client.post("/api/search/rank", json={"query": {"title": "ぐりとぐら"}}).json()

        assert data["results"] == []

    def test_too_many_candidates(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("EHONLEND_MAX_CANDIDATES", "2")
        reload_settings()
        client = TestClient(create_app())

        response = client.post(
            "/api/search/rank",
            json={"query": {"title": "ぐりとぐら"}, "candidates": self.CANDIDATES},
        )

        assert response.status_code == 400
        assert "Too many candidates" in response.json()["detail"]

    def test_invalid_limit(self, client: TestClient):
        response = client.post(
            "/api/search/rank",
            json={"query": {"title": "ぐりとぐら"}, "candidates": [], "limit": 0},
        )

        assert response.status_code == 422


class TestSectionsRoute:
    """Test POST /api/books/sections."""

    BOOKS = [
        {"title": "ぐりとぐら", "author": "なかがわりえこ", "management_number": "か010"},
        {"title": "かいじゅうたちのいるところ", "management_number": "か002"},
        {"title": "はらぺこあおむし", "author": "Eric Carle"},
        {"title": "ノンタン ぶらんこのせて"},
        {"title": "100かいだてのいえ", "kana_group": "は"},
    ]

    def test_sections(self, client: TestClient):
        data = client.post("/api/books/sections", json={"books": self.BOOKS}).json()

        assert [section["group"] for section in data["sections"]] == ["ka", "na", "ha"]
        assert data["sections"][0]["title"] == "か"
        assert [book["title"] for book in data["sections"][0]["books"]] == [
            "かいじゅうたちのいるところ",
            "ぐりとぐら",
        ]

    def test_sort_by_management_number(self, client: TestClient):
        data = client.post(
            "/api/books/sections",
            json={"books": self.BOOKS, "sort_type": "management_number", "kana_filter": "か"},
        ).json()

        assert len(data["sections"]) == 1
        assert [book["management_number"] for book in data["sections"][0]["books"]] == [
            "か002",
            "か010",
        ]

    def test_search_text(self, client: TestClient):
        data = client.post(
            "/api/books/sections", json={"books": self.BOOKS, "search_text": "ERIC"}
        ).json()

        assert [section["group"] for section in data["sections"]] == ["ha"]

    def test_invalid_kana_group(self, client: TestClient):
        response = client.post(
            "/api/books/sections",
            json={"books": [{"title": "x", "kana_group": "ア"}]},
        )

        assert response.status_code == 422

    def test_empty(self, client: TestClient):
        data = client.post("/api/books/sections", json={}).json()

        assert data["sections"] == []
