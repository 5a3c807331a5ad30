from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from email.utils import format_datetime

from lxml import etree

from ..config import Settings
from ..exceptions import RenderError
from ..models.news import FeedMetadata, NewsItem

ATOM_NS = "http://www.w3.org/2005/Atom"
NSMAP = {"atom": ATOM_NS}


def to_rfc822(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return format_datetime(value.astimezone(timezone.utc), usegmt=True)


def build_metadata(settings: Settings, *, now: datetime | None = None) -> FeedMetadata:
    return FeedMetadata(
        title=settings.feed_title,
        description=settings.feed_description,
        feed_url=settings.feed_url,
        site_url=settings.source,
        language=settings.feed_language,
        generator=settings.feed_generator,
        ttl=settings.feed_ttl,
        build_date=now or datetime.now(timezone.utc),
    )


def _text_element(parent: etree._Element, tag: str, text: str) -> etree._Element:
    element = etree.SubElement(parent, tag)
    element.text = text
    return element


def _item_element(channel: etree._Element, item: NewsItem) -> None:
    node = etree.SubElement(channel, "item")
    _text_element(node, "title", item.title)
    if item.description:
        _text_element(node, "description", item.description)
    _text_element(node, "link", str(item.link))
    guid = _text_element(node, "guid", item.guid)
    guid.set("isPermaLink", "true")
    _text_element(node, "pubDate", to_rfc822(item.published_at))


def render_feed(items: Sequence[NewsItem], metadata: FeedMetadata) -> str:
    """Render an RSS 2.0 document, UTF-8 and indented.

    Raises RenderError when a value holds characters XML cannot represent.
    """
    try:
        return _render(items, metadata)
    except ValueError as exc:
        raise RenderError(f"Could not render feed: {exc}") from exc


def _render(items: Sequence[NewsItem], metadata: FeedMetadata) -> str:
    rss = etree.Element("rss", nsmap=NSMAP)
    rss.set("version", "2.0")
    channel = etree.SubElement(rss, "channel")

    _text_element(channel, "title", metadata.title)
    _text_element(channel, "description", metadata.description)
    _text_element(channel, "link", metadata.site_url)
    self_link = etree.SubElement(channel, f"{{{ATOM_NS}}}link")
    self_link.set("href", metadata.feed_url)
    self_link.set("rel", "self")
    self_link.set("type", "application/rss+xml")
    _text_element(channel, "generator", metadata.generator)
    build_date = to_rfc822(metadata.build_date)
    _text_element(channel, "lastBuildDate", build_date)
    _text_element(channel, "pubDate", build_date)
    _text_element(channel, "language", metadata.language)
    _text_element(channel, "ttl", str(metadata.ttl))

    for item in items:
        _item_element(channel, item)

    xml = etree.tostring(
        rss, encoding="UTF-8", xml_declaration=True, pretty_print=True
    )
    return xml.decode("utf-8")
