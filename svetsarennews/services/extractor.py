from __future__ import annotations

import logging
import re
import unicodedata
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import ClassVar, Protocol
from urllib.parse import urljoin

from bs4 import BeautifulSoup, FeatureNotFound, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup

from ..exceptions import ParseError
from ..models.news import NewsCandidate

logger = logging.getLogger(__name__)

SWEDISH_MONTHS = MappingProxyType(
    {
        "januari": 1,
        "februari": 2,
        "mars": 3,
        "april": 4,
        "maj": 5,
        "juni": 6,
        "juli": 7,
        "augusti": 8,
        "september": 9,
        "oktober": 10,
        "november": 11,
        "december": 12,
    }
)

_MONTH_PATTERN = "|".join(SWEDISH_MONTHS)
_DATE_RE = re.compile(
    rf"(\d{{1,2}})\s+({_MONTH_PATTERN})\s+(\d{{4}})", re.IGNORECASE
)
_DATED_LINE_RE = re.compile(
    rf"^(?P<title>.+?)\s+(?P<date>\d{{1,2}}\s+(?:{_MONTH_PATTERN})\s+\d{{4}})$",
    re.IGNORECASE,
)
_LEADING_BULLET_RE = re.compile(r"^[\s\-–—•·*>»]+")
_TRAILING_SEPARATOR_RE = re.compile(r"[\s\-–—|:,]+$")
_WHITESPACE_RE = re.compile(r"\s+")
_XML_ILLEGAL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")
_SLUG_RE = re.compile(r"[^a-z0-9]+")

_HEADINGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
_CONTAINERS = ["main", "section", "article", "div", "ul", "ol"]
_LINE_BREAKING_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "br", "dd", "div", "dl",
        "dt", "footer", "h1", "h2", "h3", "h4", "h5", "h6", "header", "hr",
        "li", "main", "nav", "ol", "p", "section", "table", "td", "th", "tr",
        "ul",
    }
)


def collapse_whitespace(text: str | None) -> str:
    if not text:
        return ""
    text = _XML_ILLEGAL_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def parse_swedish_date(text: str | None) -> datetime | None:
    """Parse ``<day> <Swedish month> <year>`` into noon UTC of that date.

    Noon keeps the calendar date stable when the instant is later rendered
    in another offset. Returns None when nothing matches or the date does not
    exist, e.g. ``29 februari 2023``.
    """
    if not text:
        return None
    match = _DATE_RE.search(text)
    if match is None:
        return None
    month = SWEDISH_MONTHS.get(match.group(2).lower())
    if month is None:
        return None
    try:
        return datetime(
            int(match.group(3)), month, int(match.group(1)), 12, tzinfo=timezone.utc
        )
    except ValueError:
        return None


def slugify(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", str(text).lower())
    ascii_only = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _SLUG_RE.sub("-", ascii_only).strip("-")


def build_document(html: str) -> BeautifulSoup:
    if not isinstance(html, str):
        raise ParseError(f"Expected HTML text, got {type(html).__name__}")
    try:
        return BeautifulSoup(html, "lxml")
    except (FeatureNotFound, ParserRejectedMarkup, ValueError, TypeError) as exc:
        raise ParseError(f"Could not build document tree: {exc}") from exc


def text_lines(tag: Tag) -> list[str]:
    """Split the visible text of ``tag`` into lines the way a browser would.

    Lines end at block elements and ``<br>``; newlines in the source markup
    are plain whitespace, so minified and pretty-printed pages give the same
    lines.
    """
    parts: list[str] = []

    def walk(node: Tag) -> None:
        for child in node.children:
            if isinstance(child, Tag):
                breaks = child.name in _LINE_BREAKING_TAGS
                if breaks:
                    parts.append("\n")
                walk(child)
                if breaks:
                    parts.append("\n")
            elif type(child) is NavigableString:
                parts.append(_WHITESPACE_RE.sub(" ", child))

    walk(tag)
    lines = (collapse_whitespace(line) for line in "".join(parts).split("\n"))
    return [line for line in lines if line]


def _text(tag: Tag | None) -> str:
    if tag is None:
        return ""
    return collapse_whitespace(tag.get_text(" "))


class ExtractionStrategy(Protocol):
    """One way of finding news items in the listing page.

    ``extract`` returns an empty list when the page does not look the way the
    strategy expects.
    """

    name: ClassVar[str]

    def extract(self, soup: BeautifulSoup, base_url: str) -> list[NewsCandidate]:
        ...


@dataclass(slots=True, frozen=True)
class StructuredStrategy:
    """Reads the ``a > .iteminformation`` cards of the listing page."""

    news_path_marker: str = "/nyheter/"
    info_selector: str = ".iteminformation"
    date_selector: str = ".itemdate"
    description_selector: str = ".itemdescription"

    name: ClassVar[str] = "structured"

    def extract(self, soup: BeautifulSoup, base_url: str) -> list[NewsCandidate]:
        candidates: list[NewsCandidate] = []
        for anchor in soup.find_all("a", href=True):
            href = anchor.get("href", "").strip()
            if self.news_path_marker not in href:
                continue
            info = anchor.select_one(self.info_selector)
            if info is None:
                continue
            title = _text(info.find(_HEADINGS))
            raw_date = _text(info.select_one(self.date_selector))
            if not title or not raw_date:
                continue
            candidates.append(
                NewsCandidate(
                    title=title,
                    raw_date=raw_date,
                    link=urljoin(base_url, href),
                    description=_text(info.select_one(self.description_selector)),
                    strategy=self.name,
                )
            )
        return candidates


@dataclass(slots=True, frozen=True)
class TextPatternStrategy:
    """Finds ``<title> <day> <month> <year>`` lines in blocks about the topic.

    Links are synthesized as ``<source>#<slug>`` and then replaced by
    :func:`resolve_anchor_links` when a matching anchor exists.
    """

    keyword: str = "nyhet"

    name: ClassVar[str] = "text-pattern"

    def extract(self, soup: BeautifulSoup, base_url: str) -> list[NewsCandidate]:
        matches: list[tuple[Tag, NewsCandidate]] = []
        for container in self._containers(soup):
            for line in text_lines(container):
                candidate = self._match_line(line, base_url)
                if candidate is not None:
                    matches.append((container, candidate))
        return resolve_anchor_links(matches, base_url)

    def _containers(self, soup: BeautifulSoup) -> list[Tag]:
        # outermost containers only; nested ones would repeat the same lines
        needle = self.keyword.lower()
        selected: list[Tag] = []
        seen: set[int] = set()
        for container in soup.find_all(_CONTAINERS):
            if needle not in container.get_text().lower():
                continue
            if any(id(parent) in seen for parent in container.parents):
                continue
            seen.add(id(container))
            selected.append(container)
        return selected

    def _match_line(self, line: str, base_url: str) -> NewsCandidate | None:
        match = _DATED_LINE_RE.match(collapse_whitespace(line))
        if match is None:
            return None
        title = _LEADING_BULLET_RE.sub("", match.group("title"))
        title = _TRAILING_SEPARATOR_RE.sub("", title)
        if not title:
            return None
        slug = slugify(title)
        return NewsCandidate(
            title=title,
            raw_date=match.group("date"),
            link=urljoin(base_url, f"#{slug}") if slug else base_url,
            strategy=self.name,
        )


def resolve_anchor_links(
    matches: Sequence[tuple[Tag, NewsCandidate]], base_url: str
) -> list[NewsCandidate]:
    """Prefer the href of an anchor whose visible text equals the title.

    Every candidate scans all anchors of its container, so the cost is
    O(items x anchors). Listing pages hold a few dozen items at most.
    """
    resolved: list[NewsCandidate] = []
    for container, candidate in matches:
        for anchor in container.find_all("a", href=True):
            if collapse_whitespace(anchor.get_text(" ")) != candidate.title:
                continue
            href = anchor.get("href", "").strip()
            if href:
                candidate = candidate.model_copy(
                    update={"link": urljoin(base_url, href)}
                )
                break
        resolved.append(candidate)
    return resolved


DEFAULT_STRATEGIES: tuple[ExtractionStrategy, ...] = (
    StructuredStrategy(),
    TextPatternStrategy(),
)


def extract_candidates(
    html: str,
    base_url: str,
    strategies: Sequence[ExtractionStrategy] = DEFAULT_STRATEGIES,
) -> list[NewsCandidate]:
    """Run the strategies in order and return the first non-empty result.

    Results of different strategies are never merged.
    """
    soup = build_document(html)
    for strategy in strategies:
        candidates = strategy.extract(soup, base_url)
        if candidates:
            logger.info(
                "Strategy %s found %d candidate(s)", strategy.name, len(candidates)
            )
            return candidates
        logger.debug("Strategy %s found nothing", strategy.name)
    logger.info("No news candidates found on %s", base_url)
    return []
