"""Generate an RSS 2.0 feed from the HSB BRF Svetsaren news listing page.

Pipeline: fetch → extract → normalize/deduplicate → render → write.
"""
from .config import Settings, get_settings
from .exceptions import (
    EmptyFeedError,
    FeedError,
    FetchError,
    ParseError,
    RenderError,
    WriteError,
)
from .models import FeedMetadata, NewsCandidate, NewsItem
from .services import FeedPipeline, FeedResult

__all__ = [
    "EmptyFeedError",
    "FeedError",
    "FeedMetadata",
    "FeedPipeline",
    "FeedResult",
    "FetchError",
    "NewsCandidate",
    "NewsItem",
    "ParseError",
    "RenderError",
    "Settings",
    "WriteError",
    "get_settings",
]
