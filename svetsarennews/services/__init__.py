from .extractor import (
    DEFAULT_STRATEGIES,
    ExtractionStrategy,
    StructuredStrategy,
    TextPatternStrategy,
    extract_candidates,
    parse_swedish_date,
)
from .feed import build_metadata, render_feed
from .fetcher import fetch_source_html
from .normalizer import normalize_items
from .pipeline import FeedPipeline, FeedResult
from .writer import write_feed

__all__ = [
    "DEFAULT_STRATEGIES",
    "ExtractionStrategy",
    "FeedPipeline",
    "FeedResult",
    "StructuredStrategy",
    "TextPatternStrategy",
    "build_metadata",
    "extract_candidates",
    "fetch_source_html",
    "normalize_items",
    "parse_swedish_date",
    "render_feed",
    "write_feed",
]
