from datetime import datetime, timedelta, timezone

import pytest
from starlette.requests import Request

from campaign_portal.core.utils import (
    Pagination,
    calculate_read_time,
    client_ip,
    extract_youtube_id,
    gateway_phone,
    is_valid_slug,
    normalize_bd_phone,
    pick_language,
    slugify,
    to_naive_utc,
    truncate_text,
    youtube_thumbnail,
)


def _request(headers: dict) -> Request:
    raw = [(k.lower().encode(), v.encode()) for k, v in headers.items()]
    return Request({"type": "http", "headers": raw})


class TestSlugs:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Hello, World 2024", "hello-world-2024"),
            ("  Road__repair -- Ward 3 ", "road-repair-ward-3"),
            ("---", ""),
        ],
    )
    def test_slugify(self, text, expected):
        assert slugify(text) == expected

    def test_valid_slugs(self):
        assert is_valid_slug("budget-2024")
        assert not is_valid_slug("Budget")
        assert not is_valid_slug("double--hyphen")
        assert not is_valid_slug("-leading")
        assert not is_valid_slug("")


def test_read_time_rounds_up_with_minimum_of_one():
    assert calculate_read_time(None) == 1
    assert calculate_read_time("word " * 200) == 1
    assert calculate_read_time("word " * 201) == 2


class TestYoutube:
    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ&t=42",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://www.youtube.com/embed/dQw4w9WgXcQ",
            "dQw4w9WgXcQ",
        ],
    )
    def test_extracts_id(self, url):
        assert extract_youtube_id(url) == "dQw4w9WgXcQ"

    @pytest.mark.parametrize("url", [None, "", "https://vimeo.com/12345", "short"])
    def test_rejects_other_urls(self, url):
        assert extract_youtube_id(url) is None

    def test_thumbnail(self):
        assert youtube_thumbnail("abc", "maxresdefault") == "https://img.youtube.com/vi/abc/maxresdefault.jpg"


def test_truncate_text():
    assert truncate_text(None, 10) == ""
    assert truncate_text("short", 10) == "short"
    assert truncate_text("a long sentence here", 6) == "a long..."


def test_pick_language_falls_back():
    assert pick_language("Hello", "Bangla", "bn") == "Bangla"
    assert pick_language("Hello", None, "bn") == "Hello"
    assert pick_language(None, "Bangla") == "Bangla"


def test_to_naive_utc_converts_offsets():
    dhaka = timezone(timedelta(hours=6))
    assert to_naive_utc(datetime(2024, 1, 1, 12, 0, tzinfo=dhaka)) == datetime(2024, 1, 1, 6, 0)
    assert to_naive_utc(datetime(2024, 1, 1, 12, 0)) == datetime(2024, 1, 1, 12, 0)
    assert to_naive_utc(None) is None


class TestPagination:
    def test_clamps_page_and_limit(self):
        page = Pagination.from_query(page=0, limit=500, max_limit=100)
        assert page.page == 1
        assert page.limit == 100
        assert page.offset == 0

    def test_meta(self):
        page = Pagination.from_query(page=3, limit=10)
        assert page.offset == 20
        assert page.meta(25) == {"page": 3, "limit": 10, "total": 25, "total_pages": 3}
        assert page.meta(0)["total_pages"] == 0


class TestClientIp:
    def test_forwarded_for_wins(self):
        assert client_ip(_request({"X-Forwarded-For": "10.0.0.1, 10.0.0.2", "X-Real-IP": "10.9.9.9"})) == "10.0.0.1"

    def test_real_ip_fallback(self):
        assert client_ip(_request({"X-Real-IP": " 10.9.9.9 "})) == "10.9.9.9"

    def test_none_without_headers(self):
        assert client_ip(_request({})) is None


class TestPhones:
    @pytest.mark.parametrize("raw", ["01712345678", "+8801712345678", "8801712345678", "017-1234-5678"])
    def test_normalizes(self, raw):
        assert normalize_bd_phone(raw) == "01712345678"

    @pytest.mark.parametrize("raw", [None, "", "01212345678", "0171234567", "123"])
    def test_rejects(self, raw):
        assert normalize_bd_phone(raw) is None

    def test_gateway_form(self):
        assert gateway_phone("01712345678") == "8801712345678"
