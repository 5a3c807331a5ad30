from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import httpx

from ..config import Settings, get_settings
from ..exceptions import EmptyFeedError
from .extractor import StructuredStrategy, TextPatternStrategy, extract_candidates
from .feed import build_metadata, render_feed
from .fetcher import fetch_source_html
from .normalizer import normalize_items
from .writer import write_feed

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class FeedResult:
    item_count: int
    output_path: Path
    strategy: str | None


@dataclass(slots=True)
class FeedPipeline:
    """Fetch, extract, normalize, render and write, strictly in that order.

    The output file is only touched after every earlier step succeeded.
    """

    settings: Settings | None = None
    client: httpx.AsyncClient | None = None

    def __post_init__(self) -> None:
        if self.settings is None:
            self.settings = get_settings()

    async def run(self, *, now: datetime | None = None) -> FeedResult:
        settings = self.settings
        source = settings.source

        html = await fetch_source_html(source, client=self.client, settings=settings)

        strategies = (
            StructuredStrategy(news_path_marker=settings.news_path_marker),
            TextPatternStrategy(keyword=settings.fallback_keyword),
        )
        candidates = extract_candidates(html, source, strategies)
        items = normalize_items(candidates, source, limit=settings.max_items)
        if not items and settings.require_items:
            raise EmptyFeedError(f"No news items could be extracted from {source}")

        xml = render_feed(items, build_metadata(settings, now=now))
        path = write_feed(xml, settings.output_path)
        logger.info("Wrote RSS with %d item(s) to %s", len(items), path)
        return FeedResult(
            item_count=len(items),
            output_path=path,
            strategy=candidates[0].strategy if candidates else None,
        )
