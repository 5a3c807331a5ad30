from datetime import datetime, timezone

import pytest
from bs4 import BeautifulSoup

from svetsarennews.exceptions import ParseError
from svetsarennews.models.news import NewsCandidate
from svetsarennews.services.extractor import (
    StructuredStrategy,
    TextPatternStrategy,
    build_document,
    extract_candidates,
    parse_swedish_date,
    slugify,
    text_lines,
)

SOURCE_URL = "https://www.hsb.se/stockholm/brf/svetsaren/nyheter/"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("02 november 2025", datetime(2025, 11, 2, 12, tzinfo=timezone.utc)),
        ("9 april 2024", datetime(2024, 4, 9, 12, tzinfo=timezone.utc)),
        ("1 Januari 2024", datetime(2024, 1, 1, 12, tzinfo=timezone.utc)),
        ("31 DECEMBER 2023", datetime(2023, 12, 31, 12, tzinfo=timezone.utc)),
        ("29 februari 2024", datetime(2024, 2, 29, 12, tzinfo=timezone.utc)),
        ("Publicerad 30 juni 2025 av styrelsen", datetime(2025, 6, 30, 12, tzinfo=timezone.utc)),
        ("1 maj 2025", datetime(2025, 5, 1, 12, tzinfo=timezone.utc)),
    ],
)
def test_parse_swedish_date_yields_noon_utc(text: str, expected: datetime) -> None:
    parsed = parse_swedish_date(text)
    assert parsed == expected
    assert parsed.utcoffset().total_seconds() == 0


@pytest.mark.parametrize(
    "text",
    [
        "29 februari 2023",
        "31 april 2024",
        "9 april",
        "9 april 24",
        "9 apr 2024",
        "2024-04-09",
        "",
        None,
    ],
)
def test_parse_swedish_date_rejects_invalid(text: str | None) -> None:
    assert parse_swedish_date(text) is None


def test_slugify_strips_diacritics() -> None:
    assert slugify("Vårstädning") == "varstadning"
    assert slugify("Nytt kösystem för p-platser") == "nytt-kosystem-for-p-platser"
    assert slugify("  -- Årsstämma 2025! -- ") == "arsstamma-2025"


def test_structured_strategy_reads_item_cards(structured_html: str) -> None:
    soup = build_document(structured_html)
    candidates = StructuredStrategy().extract(soup, SOURCE_URL)

    assert [c.title for c in candidates] == [
        "Vardagsrummet stängt",
        "Nytt kösystem för p-platser",
        "Nytt kösystem för p-platser",
    ]
    first = candidates[0]
    assert first.raw_date == "14 mars 2024"
    assert first.description == "Lokalen renoveras under två veckor."
    assert first.link == (
        "https://www.hsb.se/stockholm/brf/svetsaren/nyheter/vardagsrummet-stangt/"
    )
    assert all(c.strategy == "structured" for c in candidates)


def test_structured_strategy_ignores_links_outside_news_path() -> None:
    html = """
    <a href="/stockholm/brf/svetsaren/dokument/stadgar/">
      <div class="iteminformation"><h3>Stadgar</h3><div class="itemdate">1 maj 2020</div></div>
    </a>
    """
    soup = build_document(html)
    assert StructuredStrategy().extract(soup, SOURCE_URL) == []


def test_text_pattern_strategy_prefers_anchor_links(plain_html: str) -> None:
    soup = build_document(plain_html)
    candidates = TextPatternStrategy().extract(soup, SOURCE_URL)

    assert [(c.title, c.raw_date) for c in candidates] == [
        ("Vårstädning", "9 april 2024"),
        ("Nytt kösystem för p-platser", "02 november 2025"),
    ]
    assert candidates[0].link == f"{SOURCE_URL}#varstadning"
    assert candidates[1].link == (
        "https://www.hsb.se/stockholm/brf/svetsaren/nyheter/nytt-kosystem-for-p-platser/"
    )


def test_text_pattern_strategy_handles_minified_markup() -> None:
    html = (
        "<div><h2>Nyheter</h2><ul><li>Vårstädning 9 april 2024</li>"
        "<li>Årsstämma 2 maj 2025</li></ul></div>"
    )
    candidates = TextPatternStrategy().extract(build_document(html), SOURCE_URL)

    assert [(c.title, c.raw_date) for c in candidates] == [
        ("Vårstädning", "9 april 2024"),
        ("Årsstämma", "2 maj 2025"),
    ]


def test_text_pattern_strategy_splits_on_line_breaks() -> None:
    html = (
        "<div><h2>Nyheter</h2>"
        "<p>Vårstädning 9 april 2024<br>Årsstämma 2 maj 2025<br/></p></div>"
    )
    candidates = TextPatternStrategy().extract(build_document(html), SOURCE_URL)

    assert [c.title for c in candidates] == ["Vårstädning", "Årsstämma"]


def test_text_lines_keeps_inline_elements_on_one_line() -> None:
    html = """<ul>
      <li><a href="/a/">Nytt kösystem
        för p-platser</a> <span>02 november 2025</span></li><li>Andra raden</li>
    </ul>"""
    container = build_document(html).find("ul")

    assert text_lines(container) == [
        "Nytt kösystem för p-platser 02 november 2025",
        "Andra raden",
    ]


def test_text_pattern_strategy_requires_topic_keyword() -> None:
    html = "<div><p>Vårstädning 9 april 2024</p></div>"
    soup = build_document(html)
    assert TextPatternStrategy().extract(soup, SOURCE_URL) == []


def test_extract_candidates_uses_structured_strategy_first(structured_html: str) -> None:
    candidates = extract_candidates(structured_html, SOURCE_URL)
    assert candidates
    assert {c.strategy for c in candidates} == {"structured"}


def test_extract_candidates_falls_back_when_structure_is_missing(plain_html: str) -> None:
    candidates = extract_candidates(plain_html, SOURCE_URL)
    assert len(candidates) == 2
    assert {c.strategy for c in candidates} == {"text-pattern"}


def test_extract_candidates_returns_empty_list_for_unrelated_page() -> None:
    assert extract_candidates("<html><body><p>Hej</p></body></html>", SOURCE_URL) == []


def test_extract_candidates_stops_at_first_strategy_with_results() -> None:
    class Fixed:
        def __init__(self, name: str, titles: list[str]) -> None:
            self.name = name
            self.titles = titles
            self.calls = 0

        def extract(self, soup: BeautifulSoup, base_url: str) -> list[NewsCandidate]:
            self.calls += 1
            return [
                NewsCandidate(title=t, raw_date="1 maj 2025", link=base_url, strategy=self.name)
                for t in self.titles
            ]

    empty = Fixed("empty", [])
    first = Fixed("first", ["A"])
    second = Fixed("second", ["B"])

    candidates = extract_candidates("<p></p>", SOURCE_URL, (empty, first, second))

    assert [c.title for c in candidates] == ["A"]
    assert (empty.calls, first.calls, second.calls) == (1, 1, 0)


def test_build_document_rejects_non_text_input() -> None:
    with pytest.raises(ParseError):
        build_document(None)  # type: ignore[arg-type]
