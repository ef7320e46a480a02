"""API routes exposing the news feeds, the ScienceDaily scraper and the AI helpers."""

from __future__ import annotations

import json
import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Query, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import Field, ValidationError

from newsreader.config import Settings
from newsreader.errors import UpstreamError
from newsreader.models import (
    Article,
    ChatArticle,
    ChatMessage,
    FeedbackRecord,
    ListingEntry,
    ScrapedArticle,
    WireModel,
)
from newsreader.services.cache import ResponseCache
from newsreader.services.language_model import get_language_model
from newsreader.services.news import DEFAULT_COUNTRIES, NewsApiClient, NewsDataClient
from newsreader.services.scraper import ScienceDailyScraper

logger = logging.getLogger(__name__)

router = APIRouter()


class NewsResponse(WireModel):
    articles: List[Article] = Field(default_factory=list)


class NewsDataResponse(WireModel):
    articles: List[Article] = Field(default_factory=list)
    total_results: int = 0
    next_page: str | None = None


class NewsDataRequest(WireModel):
    query: str | None = None
    category: str | None = None
    country: str | None = None
    language: str | None = None
    page: str | None = None


class ListingResponse(WireModel):
    count: int
    articles: List[ListingEntry] = Field(default_factory=list)


class ScrapeRequest(WireModel):
    url: str | None = None


class SummarizeRequest(WireModel):
    content: str | None = None


class TranslateRequest(WireModel):
    content: str | None = None
    target_language: str | None = None


class ChatRequest(WireModel):
    message: str | None = None
    article: ChatArticle | None = None
    history: List[ChatMessage] = Field(default_factory=list)


class HealthResponse(WireModel):
    status: str
    providers: dict[str, bool]


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_cache(request: Request) -> ResponseCache:
    return request.app.state.cache


def _error_status(exc: Exception) -> int:
    return exc.status_code if isinstance(exc, UpstreamError) else 500


def _error_message(exc: Exception, fallback: str) -> str:
    if isinstance(exc, UpstreamError):
        return exc.message or fallback
    return str(exc) or fallback


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    """Report which upstream providers have credentials configured."""

    return HealthResponse(status="ok", providers=settings.configured_providers())


@router.get("/news", response_model=NewsResponse)
async def search_news(
    q: str = "technology",
    category: str = "",
    page_size: int = Query(default=20, alias="pageSize"),
    sort_by: str = Query(default="publishedAt", alias="sortBy"),
    settings: Settings = Depends(get_settings),
    cache: ResponseCache = Depends(get_cache),
) -> Any:
    """Keyword search through NewsAPI.org."""

    q = q or "technology"
    cache_key = "news:" + json.dumps([q, category, page_size, sort_by])
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    client = NewsApiClient(settings.news_api_key)
    try:
        articles = await run_in_threadpool(client.search, q, category, page_size, sort_by)
    except Exception as exc:  # noqa: BLE001 - every failure becomes a JSON error body
        logger.exception("NewsAPI request failed for query %r", q)
        return JSONResponse(
            {"articles": [], "error": _error_message(exc, "Request failed")},
            status_code=_error_status(exc),
        )

    payload = NewsResponse(articles=articles).model_dump(by_alias=True)
    cache.set(cache_key, payload)
    return payload


async def _latest_news(
    settings: Settings,
    request_payload: NewsDataRequest,
    *,
    cache: ResponseCache | None = None,
) -> Any:
    cache_key = "news2:" + request_payload.model_dump_json()
    if cache is not None:
        cached = cache.get(cache_key)
        if cached is not None:
            return cached

    client = NewsDataClient(settings.newsdata_api_key)
    try:
        page = await run_in_threadpool(
            client.latest,
            request_payload.query,
            request_payload.category,
            request_payload.country or DEFAULT_COUNTRIES,
            request_payload.language or "en",
            request_payload.page,
        )
    except UpstreamError as exc:
        logger.exception("NewsData.io request failed")
        return JSONResponse(
            {"error": "Failed to fetch news", "details": exc.message, "articles": []},
            status_code=exc.status_code,
        )
    except Exception as exc:  # noqa: BLE001 - every failure becomes a JSON error body
        logger.exception("Error fetching news")
        return JSONResponse(
            {"error": "Internal server error", "details": str(exc), "articles": []},
            status_code=500,
        )

    payload = NewsDataResponse(
        articles=page.articles,
        total_results=page.total_results,
        next_page=page.next_page,
    ).model_dump(by_alias=True)
    if cache is not None:
        cache.set(cache_key, payload)
    return payload


@router.get("/news2", response_model=NewsDataResponse)
async def latest_news(
    q: str | None = None,
    query: str | None = None,
    category: str | None = None,
    country: str | None = None,
    language: str | None = None,
    page: str | None = None,
    settings: Settings = Depends(get_settings),
    cache: ResponseCache = Depends(get_cache),
) -> Any:
    """Latest headlines from NewsData.io; ``q`` and ``query`` are synonyms."""

    request_payload = NewsDataRequest(
        query=q or query,
        category=category,
        country=country,
        language=language,
        page=page,
    )
    return await _latest_news(settings, request_payload, cache=cache)


@router.post("/news2", response_model=NewsDataResponse)
async def latest_news_query(
    payload: NewsDataRequest | None = Body(default=None),
    settings: Settings = Depends(get_settings),
) -> Any:
    """Body-driven variant of ``GET /news2``; results are not cached."""

    return await _latest_news(settings, payload or NewsDataRequest())


@router.get("/sciencedaily", response_model=ListingResponse)
async def science_daily_listing(cache: ResponseCache = Depends(get_cache)) -> Any:
    """Scrape the ScienceDaily front page."""

    cache_key = "sciencedaily"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    scraper = ScienceDailyScraper()
    try:
        entries = await run_in_threadpool(scraper.fetch_listing)
    except Exception as exc:  # noqa: BLE001 - every failure becomes a JSON error body
        logger.exception("Scraping error")
        return JSONResponse(
            {"error": "Failed to scrape ScienceDaily", "details": _error_message(exc, "")},
            status_code=500,
        )

    payload = ListingResponse(count=len(entries), articles=entries).model_dump(by_alias=True)
    cache.set(cache_key, payload)
    return payload


@router.post("/scrape", response_model=ScrapedArticle)
async def scrape_article(
    payload: ScrapeRequest | None = Body(default=None),
    cache: ResponseCache = Depends(get_cache),
) -> Any:
    """Scrape one ScienceDaily article page."""

    payload = payload or ScrapeRequest()
    scraper = ScienceDailyScraper()
    url = (payload.url or "").strip()
    if not scraper.allows_url(url):
        return JSONResponse({"error": "Invalid or missing ScienceDaily URL"}, status_code=400)

    cache_key = f"scrape:{url}"
    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    try:
        article = await run_in_threadpool(scraper.fetch_article, url)
    except Exception as exc:  # noqa: BLE001 - every failure becomes a JSON error body
        logger.exception("Article scrape error for %s", url)
        return JSONResponse(
            {"error": "Failed to scrape article", "details": _error_message(exc, "")},
            status_code=500,
        )

    result = article.model_dump(by_alias=True)
    cache.set(cache_key, result)
    return result


@router.post("/summarize")
async def summarize(
    payload: SummarizeRequest | None = Body(default=None),
    settings: Settings = Depends(get_settings),
) -> Any:
    """Return a 3–4 bullet summary of ``content``."""

    payload = payload or SummarizeRequest()
    content = (payload.content or "").strip()
    if not content:
        return JSONResponse({"error": "Missing content"}, status_code=400)

    try:
        model = get_language_model(settings)
        summary = await run_in_threadpool(model.summarize, content)
    except Exception as exc:  # noqa: BLE001 - every failure becomes a JSON error body
        logger.exception("AI summarization error")
        return JSONResponse(
            {"error": _error_message(exc, "Summarization failed")},
            status_code=500,
        )

    return {"summary": summary}


@router.post("/translate")
async def translate(
    payload: TranslateRequest | None = Body(default=None),
    settings: Settings = Depends(get_settings),
) -> Any:
    """Translate ``content`` into ``targetLanguage``."""

    payload = payload or TranslateRequest()
    content = (payload.content or "").strip()
    target_language = (payload.target_language or "").strip()
    if not content or not target_language:
        return JSONResponse({"error": "Missing content or targetLanguage"}, status_code=400)

    try:
        model = get_language_model(settings)
        translation = await run_in_threadpool(model.translate, content, target_language)
    except Exception as exc:  # noqa: BLE001 - every failure becomes a JSON error body
        logger.exception("Translation error")
        return JSONResponse(
            {"error": _error_message(exc, "Translation failed")},
            status_code=500,
        )

    return {"translation": translation}


@router.post("/chat")
async def chat(request: Request, settings: Settings = Depends(get_settings)) -> Any:
    """Answer a reader's question about an article, given the earlier turns.

    The body is parsed here rather than by FastAPI so that rejected requests
    still answer with a ``response`` key.
    """

    try:
        body = await request.json()
    except ValueError:
        return JSONResponse({"response": "No input provided."}, status_code=400)

    try:
        payload = ChatRequest.model_validate(body if body is not None else {})
    except ValidationError as exc:
        logger.info("Rejected chat request: %s", exc)
        return JSONResponse({"response": "Invalid chat request."}, status_code=400)

    message = (payload.message or "").strip()
    if not message:
        return JSONResponse({"response": "No input provided."}, status_code=400)

    try:
        model = get_language_model(settings)
        reply = await run_in_threadpool(model.chat, message, payload.article, payload.history)
    except Exception as exc:  # noqa: BLE001 - every failure becomes a JSON error body
        logger.exception("Chatbot error")
        return JSONResponse(
            {"response": _error_message(exc, "Chat temporarily unavailable.")},
            status_code=500,
        )

    return {"response": reply}


@router.post("/feedback")
async def submit_feedback(request: Request) -> dict[str, bool]:
    """Log reader feedback. Anything that parses as JSON is accepted."""

    try:
        data = await request.json()
    except ValueError as exc:
        logger.warning("Feedback error: %s", exc)
        return {"success": False}

    if isinstance(data, dict):
        record = FeedbackRecord.model_validate(data)
        logger.info("Feedback received: %s", record.model_dump(by_alias=True))
    else:
        logger.info("Feedback received: %r", data)
    return {"success": True}
