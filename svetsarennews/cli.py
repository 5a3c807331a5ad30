from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from pydantic import ValidationError

from .config import Settings
from .exceptions import FeedError
from .http_client import shutdown_http_client
from .services.pipeline import FeedPipeline, FeedResult

logger = logging.getLogger("svetsarennews")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="svetsarennews",
        description="Generate an RSS 2.0 feed from the BRF Svetsaren news page.",
    )
    parser.add_argument("--source-url", help="News listing page to read")
    parser.add_argument("--output", help="Where to write the feed (default docs/feed.xml)")
    parser.add_argument("--max-items", type=int, help="Maximum number of feed items")
    parser.add_argument(
        "--require-items",
        action="store_true",
        default=None,
        help="Exit with an error when no items could be extracted",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
    overrides = {
        "source_url": args.source_url,
        "output_path": args.output,
        "max_items": args.max_items,
        "require_items": args.require_items,
    }
    return Settings(**{key: value for key, value in overrides.items() if value is not None})


async def generate(settings: Settings) -> FeedResult:
    try:
        return await FeedPipeline(settings=settings).run()
    finally:
        await shutdown_http_client()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        settings = settings_from_args(args)
        asyncio.run(generate(settings))
    except ValidationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1
    except FeedError as exc:
        logger.error("%s", exc)
        return 1
    return 0
