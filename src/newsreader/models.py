"""Domain models used across the application.

Attribute names are snake_case; the JSON wire format uses camelCase aliases.
"""

from __future__ import annotations

from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

UNTITLED = "Untitled"
UNKNOWN_SOURCE = "Unknown Source"


class WireModel(BaseModel):
    """Base model that reads and writes camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ArticleSource(WireModel):
    id: Optional[str] = None
    name: str = UNKNOWN_SOURCE


class Article(WireModel):
    """A news article normalised from one of the news providers."""

    source: ArticleSource = Field(default_factory=ArticleSource)
    author: Optional[str] = None
    title: str = UNTITLED
    description: str = ""
    url: str
    url_to_image: Optional[str] = None
    published_at: Optional[str] = None
    content: str = ""


class ListingEntry(WireModel):
    """One teaser scraped from the ScienceDaily front page."""

    title: str
    url: str
    published_at: Optional[str] = None
    description: str


class ArticleDetail(WireModel):
    """Fields extracted from a single ScienceDaily article page."""

    image: Optional[str] = None
    image_description: Optional[str] = None
    key_points: List[str] = Field(default_factory=list)
    paragraphs: List[str] = Field(default_factory=list)
    related_topics: List[str] = Field(default_factory=list)
    related_terms: List[str] = Field(default_factory=list)


class ScrapedArticle(ArticleDetail):
    """An :class:`ArticleDetail` tagged with the page it came from."""

    model_config = ConfigDict(frozen=True)

    url: str


class ChatMessage(WireModel):
    role: Literal["user", "assistant"]
    content: str


class ChatArticle(WireModel):
    """Article context the reader is chatting about."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = None
    url: Optional[str] = None
    date: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    summary: Optional[str] = None
    key_points: List[str] = Field(default_factory=list)

    @field_validator("key_points", mode="before")
    @classmethod
    def _missing_key_points(cls, value: Any) -> Any:
        return [] if value is None else value


class FeedbackRecord(WireModel):
    """Reader feedback on an article's summary and translation."""

    model_config = ConfigDict(extra="allow")

    article_url: Any = None
    article_title: Any = None
    summary_rating: Any = None
    translation_rating: Any = None
    accuracy_rating: Any = None
    comments: Any = None
    language: Any = None
    timestamp: Any = None
