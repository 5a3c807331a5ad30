from pathlib import Path

import pytest

from svetsarennews.config import Settings

FIXTURES = Path(__file__).parent / "fixtures"
SOURCE_URL = "https://www.hsb.se/stockholm/brf/svetsaren/nyheter/"


@pytest.fixture
def structured_html() -> str:
    return (FIXTURES / "structured.html").read_text(encoding="utf-8")


@pytest.fixture
def plain_html() -> str:
    return (FIXTURES / "plain.html").read_text(encoding="utf-8")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(source_url=SOURCE_URL, output_path=tmp_path / "docs" / "feed.xml")
