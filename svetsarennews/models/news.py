from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class NewsCandidate(BaseModel):
    title: str = Field(description="Headline text as found on the page")
    raw_date: str = Field(description="Unparsed date text, e.g. '9 april 2024'")
    link: str = Field(description="Absolute or page-relative href")
    description: str = Field(default="", description="Teaser text, may be empty")
    strategy: str = Field(description="Name of the extraction strategy")


class NewsItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1, description="Item headline")
    link: HttpUrl = Field(description="Absolute item URL")
    published_at: datetime = Field(description="Publication instant in UTC")
    description: str = Field(default="", description="Teaser text, may be empty")

    @property
    def guid(self) -> str:
        return str(self.link)


class FeedMetadata(BaseModel):
    title: str = Field(description="Channel title")
    description: str = Field(description="Channel description")
    feed_url: str = Field(description="Self link of the feed document")
    site_url: str = Field(description="Page the feed is generated from")
    language: str = Field(default="sv-SE")
    generator: str = Field(description="Generator identifier")
    ttl: int = Field(ge=1, description="Time to live in minutes")
    build_date: datetime = Field(description="UTC timestamp of this build")
