"""Adapters for the NewsAPI.org and NewsData.io article feeds."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping

import requests

from newsreader.errors import MissingCredentialError, UpstreamError
from newsreader.models import UNKNOWN_SOURCE, UNTITLED, Article, ArticleSource

__all__ = [
    "NEWS_API_ENDPOINT",
    "NEWSDATA_ENDPOINT",
    "NewsApiClient",
    "NewsDataClient",
    "NewsDataPage",
    "article_from_newsapi",
    "article_from_newsdata",
]

logger = logging.getLogger(__name__)

NEWS_API_ENDPOINT = "https://newsapi.org/v2/everything"
NEWSDATA_ENDPOINT = "https://newsdata.io/api/1/latest"
DEFAULT_COUNTRIES = "au,us,in"
REQUEST_TIMEOUT = (10, 30)


def _first(values: Any) -> str | None:
    if isinstance(values, list) and values:
        return str(values[0]) if values[0] else None
    return None


def article_from_newsapi(raw: Mapping[str, Any]) -> Article:
    """Map a NewsAPI.org article onto :class:`Article`."""

    source = raw.get("source") or {}
    return Article(
        source=ArticleSource(id=source.get("id"), name=source.get("name") or UNKNOWN_SOURCE),
        author=raw.get("author"),
        title=raw.get("title") or UNTITLED,
        description=raw.get("description") or "",
        url=raw["url"],
        url_to_image=raw.get("urlToImage"),
        published_at=raw.get("publishedAt"),
        content=raw.get("content") or "",
    )


def article_from_newsdata(raw: Mapping[str, Any]) -> Article:
    """Map a NewsData.io result onto :class:`Article`."""

    content = raw.get("content") or ""
    description = raw.get("description") or raw.get("ai_summary") or content[:200] or ""
    return Article(
        source=ArticleSource(
            id=raw.get("source_id") or None,
            name=raw.get("source_name") or UNKNOWN_SOURCE,
        ),
        author=_first(raw.get("creator")),
        title=raw.get("title") or UNTITLED,
        description=description,
        url=raw["link"],
        url_to_image=raw.get("image_url") or None,
        published_at=raw.get("pubDate"),
        content=content or raw.get("description") or raw.get("ai_summary") or "",
    )


def _json_body(response: requests.Response) -> dict:
    try:
        payload = response.json()
    except ValueError:
        logger.warning("Upstream %s returned a body that is not JSON", response.url)
        return {}
    return payload if isinstance(payload, dict) else {}


class NewsApiClient:
    """Keyword search against NewsAPI.org's ``everything`` endpoint."""

    def __init__(self, api_key: str | None, session: requests.Session | None = None) -> None:
        self.api_key = api_key
        self._session = session or requests.Session()

    def search(
        self,
        q: str = "technology",
        category: str = "",
        page_size: int = 20,
        sort_by: str = "publishedAt",
        language: str = "en",
    ) -> List[Article]:
        """Return articles matching ``q``; ``category`` is folded into the query."""

        if not self.api_key:
            raise MissingCredentialError("NEWS_API_KEY")

        effective_query = " ".join(part for part in (q, category) if part)
        params = {
            "q": effective_query,
            "language": language,
            "pageSize": page_size,
            "sortBy": sort_by,
            "apiKey": self.api_key,
        }

        try:
            response = self._session.get(NEWS_API_ENDPOINT, params=params, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise UpstreamError(str(exc)) from exc

        if not response.ok:
            raise UpstreamError(response.text, status_code=response.status_code)

        raw_articles = _json_body(response).get("articles") or []
        articles = [article_from_newsapi(raw) for raw in raw_articles if raw.get("url")]
        logger.info("Fetched %d articles for query %r", len(articles), effective_query)
        return articles


@dataclass
class NewsDataPage:
    articles: List[Article] = field(default_factory=list)
    total_results: int = 0
    next_page: str | None = None


class NewsDataClient:
    """Latest-headlines feed from NewsData.io."""

    def __init__(self, api_key: str | None, session: requests.Session | None = None) -> None:
        self.api_key = api_key
        self._session = session or requests.Session()

    def latest(
        self,
        query: str | None = None,
        category: str | None = None,
        country: str | None = DEFAULT_COUNTRIES,
        language: str | None = "en",
        page: str | None = None,
    ) -> NewsDataPage:
        if not self.api_key:
            raise MissingCredentialError("NEWSDATA_API_KEY")

        params = {"apikey": self.api_key, "language": language or "en"}
        if query:
            params["q"] = query
        if category:
            params["category"] = category
        params["country"] = country or DEFAULT_COUNTRIES
        if page:
            params["page"] = page

        try:
            response = self._session.get(NEWSDATA_ENDPOINT, params=params, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise UpstreamError(str(exc)) from exc

        if not response.ok:
            logger.error("NewsData.io API error: %s %s", response.status_code, response.text)
            raise UpstreamError(response.reason or "Failed to fetch news", status_code=response.status_code)

        data = _json_body(response)
        if data.get("status") != "success":
            raise UpstreamError("API returned error status")

        results = data.get("results") or []
        articles = [
            article_from_newsdata(raw) for raw in results if raw.get("title") and raw.get("link")
        ]
        return NewsDataPage(
            articles=articles,
            total_results=int(data.get("totalResults") or 0),
            next_page=data.get("nextPage") or None,
        )
