"""
SEO metadata builders.

Produces the page metadata (title, canonical URL, language alternates, Open
Graph, Twitter card, robots) and JSON-LD documents the front end embeds for
news articles, events and photo albums.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from campaign_portal.core.utils import truncate_text
from campaign_portal.server.core.config import SiteConfig, settings

DESCRIPTION_LIMIT = 160


def absolute_url(path_or_url: Optional[str], site: Optional[SiteConfig] = None) -> Optional[str]:
    if not path_or_url:
        return None
    if path_or_url.startswith(("http://", "https://")):
        return path_or_url
    site = site or settings.site
    return f"{site.url.rstrip('/')}/{path_or_url.lstrip('/')}"


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() + "Z" if value else None


def build_page_metadata(
    title: str,
    description: Optional[str] = None,
    path: str = "/",
    image: Optional[str] = None,
    page_type: str = "website",
    published_time: Optional[datetime] = None,
    modified_time: Optional[datetime] = None,
    tags: Iterable[str] = (),
    no_index: bool = False,
    site: Optional[SiteConfig] = None,
) -> Dict[str, Any]:
    """
    Metadata for one page.

    The title gets the site short name as suffix, the description is trimmed
    to 160 characters, and ``?lang=bn`` is advertised as the Bengali
    alternate of the canonical URL.
    """
    site = site or settings.site
    full_title = f"{title} | {site.short_name}" if title else site.name
    summary = truncate_text(description or site.description, DESCRIPTION_LIMIT)
    canonical = absolute_url(path, site)
    image_url = absolute_url(image or site.default_image, site)

    open_graph: Dict[str, Any] = {
        "type": page_type,
        "title": full_title,
        "description": summary,
        "url": canonical,
        "site_name": site.name,
        "locale": "en_US",
        "alternate_locale": ["bn_BD"],
        "images": [{"url": image_url, "width": 1200, "height": 630, "alt": title}],
    }
    if page_type == "article":
        open_graph["published_time"] = _iso(published_time)
        open_graph["modified_time"] = _iso(modified_time)
        open_graph["tags"] = list(tags)

    twitter: Dict[str, Any] = {
        "card": "summary_large_image",
        "title": full_title,
        "description": summary,
        "images": [image_url],
    }
    if site.twitter_handle:
        twitter["site"] = site.twitter_handle

    return {
        "title": full_title,
        "description": summary,
        "keywords": list(tags),
        "canonical": canonical,
        "alternates": {"en-US": canonical, "bn-BD": f"{canonical}?lang=bn"},
        "open_graph": open_graph,
        "twitter": twitter,
        "robots": {"index": not no_index, "follow": not no_index},
    }


def article_json_ld(
    headline: str,
    description: Optional[str],
    path: str,
    image: Optional[str],
    published: Optional[datetime],
    modified: Optional[datetime],
    author: Optional[str] = None,
    site: Optional[SiteConfig] = None,
) -> Dict[str, Any]:
    site = site or settings.site
    return {
        "@context": "https://schema.org",
        "@type": "NewsArticle",
        "headline": headline,
        "description": truncate_text(description, DESCRIPTION_LIMIT),
        "image": [absolute_url(image or site.default_image, site)],
        "datePublished": _iso(published),
        "dateModified": _iso(modified or published),
        "author": {"@type": "Person", "name": author or site.name},
        "publisher": {"@type": "Organization", "name": site.name, "url": site.url},
        "mainEntityOfPage": absolute_url(path, site),
    }


def event_json_ld(
    name: str,
    description: Optional[str],
    path: str,
    start: datetime,
    end: Optional[datetime],
    location: Optional[str],
    image: Optional[str],
    site: Optional[SiteConfig] = None,
) -> Dict[str, Any]:
    site = site or settings.site
    return {
        "@context": "https://schema.org",
        "@type": "Event",
        "name": name,
        "description": truncate_text(description, DESCRIPTION_LIMIT),
        "startDate": _iso(start),
        "endDate": _iso(end or start),
        "eventStatus": "https://schema.org/EventScheduled",
        "eventAttendanceMode": "https://schema.org/OfflineEventAttendanceMode",
        "location": {"@type": "Place", "name": location or site.name},
        "image": [absolute_url(image or site.default_image, site)],
        "organizer": {"@type": "Organization", "name": site.name, "url": site.url},
        "url": absolute_url(path, site),
    }


def gallery_json_ld(
    name: str, description: Optional[str], path: str, images: List[str], site: Optional[SiteConfig] = None
) -> Dict[str, Any]:
    site = site or settings.site
    return {
        "@context": "https://schema.org",
        "@type": "ImageGallery",
        "name": name,
        "description": truncate_text(description, DESCRIPTION_LIMIT),
        "url": absolute_url(path, site),
        "image": [absolute_url(url, site) for url in images],
    }


def breadcrumb_json_ld(items: List[tuple[str, str]], site: Optional[SiteConfig] = None) -> Dict[str, Any]:
    """``items`` is an ordered list of ``(name, path)`` pairs."""
    site = site or settings.site
    return {
        "@context": "https://schema.org",
        "@type": "BreadcrumbList",
        "itemListElement": [
            {"@type": "ListItem", "position": position, "name": name, "item": absolute_url(path, site)}
            for position, (name, path) in enumerate(items, start=1)
        ],
    }
