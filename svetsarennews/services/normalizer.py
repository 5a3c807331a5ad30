from __future__ import annotations

import logging
from collections.abc import Iterable
from urllib.parse import urljoin

from pydantic import ValidationError

from ..models.news import NewsCandidate, NewsItem
from .extractor import collapse_whitespace, parse_swedish_date

logger = logging.getLogger(__name__)

MAX_ITEMS = 50


def to_news_item(candidate: NewsCandidate, base_url: str) -> NewsItem | None:
    """Build a NewsItem, or None when the title or date is unusable."""
    title = collapse_whitespace(candidate.title)
    published_at = parse_swedish_date(candidate.raw_date)
    if not title or published_at is None:
        return None
    try:
        return NewsItem(
            title=title,
            link=urljoin(base_url, candidate.link.strip()),
            published_at=published_at,
            description=collapse_whitespace(candidate.description),
        )
    except ValidationError as exc:
        logger.warning("Dropping %r: %s", title, exc.errors()[0]["msg"])
        return None


def identity_key(item: NewsItem) -> str:
    return f"{item.title}::{item.published_at.isoformat()}"


def deduplicate(items: Iterable[NewsItem]) -> list[NewsItem]:
    """Drop repeats by (title, date) first, then by GUID.

    Keeps the first occurrence and preserves original order.
    """
    seen_keys: set[str] = set()
    by_key: list[NewsItem] = []
    for item in items:
        key = identity_key(item)
        if key in seen_keys:
            continue
        seen_keys.add(key)
        by_key.append(item)

    seen_guids: set[str] = set()
    out: list[NewsItem] = []
    for item in by_key:
        if item.guid in seen_guids:
            continue
        seen_guids.add(item.guid)
        out.append(item)
    return out


def normalize_items(
    candidates: Iterable[NewsCandidate],
    base_url: str,
    *,
    limit: int = MAX_ITEMS,
) -> list[NewsItem]:
    items: list[NewsItem] = []
    dropped = 0
    for candidate in candidates:
        item = to_news_item(candidate, base_url)
        if item is None:
            dropped += 1
            continue
        items.append(item)
    if dropped:
        logger.info("Discarded %d candidate(s) without a usable title or date", dropped)

    unique = deduplicate(items)
    # sort is stable, so items sharing a date keep their page order
    unique.sort(key=lambda item: item.published_at, reverse=True)
    return unique[:limit]
