from functools import lru_cache
from pathlib import Path

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="", extra="ignore", populate_by_name=True, frozen=True
    )

    source_url: HttpUrl = Field(
        "https://www.hsb.se/stockholm/brf/svetsaren/nyheter/", alias="SOURCE_URL"
    )
    output_path: Path = Field(Path("docs/feed.xml"), alias="OUTPUT_PATH")

    http_timeout: float = Field(20.0, gt=0, alias="HTTP_TIMEOUT")
    http_user_agent: str = Field(
        "svetsarennews-bot/1.0 (+github actions)",
        alias="HTTP_USER_AGENT",
    )

    news_path_marker: str = Field("/nyheter/", alias="NEWS_PATH_MARKER")
    fallback_keyword: str = Field("nyhet", alias="FALLBACK_KEYWORD")
    max_items: int = Field(50, ge=1, alias="MAX_ITEMS")
    require_items: bool = Field(False, alias="REQUIRE_ITEMS")

    feed_title: str = Field("BRF Svetsaren – Nyheter", alias="FEED_TITLE")
    feed_description: str = Field(
        "RSS 2.0-flöde genererat från HSB BRF Svetsarens nyhetssida.",
        alias="FEED_DESCRIPTION",
    )
    feed_url: str = Field("feed.xml", alias="FEED_URL")
    feed_language: str = Field("sv-SE", alias="FEED_LANGUAGE")
    feed_generator: str = Field(
        "svetsarennews (GitHub Actions)", alias="FEED_GENERATOR"
    )
    feed_ttl: int = Field(60 * 24, ge=1, alias="FEED_TTL")

    @property
    def source(self) -> str:
        return str(self.source_url)


@lru_cache
def get_settings() -> Settings:
    return Settings()
