"""
Content and request helpers shared by routers and services.

Slug handling, read-time estimation, YouTube URL parsing, time helpers,
pagination arithmetic, client IP extraction and Bangladeshi phone number
normalization.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from starlette.requests import Request

WORDS_PER_MINUTE = 200

_SLUG_VALID = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
_YOUTUBE_URL = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/shorts/)([^&\n?#/]+)")
_YOUTUBE_ID = re.compile(r"^[a-zA-Z0-9_-]{11}$")
_BD_MOBILE = re.compile(r"^01[3-9]\d{8}$")


def slugify(text: str) -> str:
    """Turn a title into a URL slug ("Hello, World 2024" -> "hello-world-2024")."""
    slug = text.lower().strip()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s_-]+", "-", slug)
    return slug.strip("-")


def is_valid_slug(slug: str) -> bool:
    return bool(_SLUG_VALID.match(slug or ""))


def calculate_read_time(content: Optional[str]) -> int:
    """Estimated reading time in whole minutes, never below one."""
    words = len((content or "").split())
    return max(1, math.ceil(words / WORDS_PER_MINUTE))


def extract_youtube_id(url: Optional[str]) -> Optional[str]:
    """
    Extract the video id from a YouTube URL.

    Accepts ``watch?v=``, ``youtu.be/``, ``embed/`` and ``shorts/`` links as
    well as a bare 11-character id. Returns ``None`` for anything else.
    """
    if not url:
        return None
    url = url.strip()
    match = _YOUTUBE_URL.search(url)
    if match:
        return match.group(1)
    if _YOUTUBE_ID.match(url):
        return url
    return None


def youtube_thumbnail(video_id: str, quality: str = "hqdefault") -> str:
    return f"https://img.youtube.com/vi/{video_id}/{quality}.jpg"


def youtube_embed_url(video_id: str) -> str:
    return f"https://www.youtube.com/embed/{video_id}"


def truncate_text(text: Optional[str], max_length: int) -> str:
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip() + "..."


def pick_language(en: Optional[str], bn: Optional[str], lang: str = "en") -> Optional[str]:
    """Return the text for ``lang``, falling back to the other language."""
    if lang == "bn":
        return bn or en
    return en or bn


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (the storage convention)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class Pagination:
    """Page/limit pair resolved to an offset."""

    page: int
    limit: int

    @classmethod
    def from_query(cls, page: int = 1, limit: int = 10, max_limit: int = 100) -> "Pagination":
        return cls(page=max(1, page), limit=min(max(1, limit), max_limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.limit) if total else 0

    def meta(self, total: int) -> dict:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": total,
            "total_pages": self.total_pages(total),
        }


def client_ip(request: Request) -> Optional[str]:
    """First address of ``X-Forwarded-For``, else ``X-Real-IP``, else None."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    return real_ip.strip() if real_ip else None


def normalize_bd_phone(raw: Optional[str]) -> Optional[str]:
    """
    Normalize a Bangladeshi mobile number to its local 11-digit form.

    Non-digits are dropped and a leading ``88`` country code is removed.
    Returns ``None`` when the result is not a valid ``01[3-9]XXXXXXXX`` number.
    """
    digits = re.sub(r"\D", "", raw or "")
    if digits.startswith("88") and len(digits) == 13:
        digits = digits[2:]
    return digits if _BD_MOBILE.match(digits) else None


def gateway_phone(local_number: str) -> str:
    """Local number in the ``88``-prefixed form the SMS gateway expects."""
    return f"88{local_number}"
