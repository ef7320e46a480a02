"""Service layer entry points for News Reader."""

from __future__ import annotations

from .cache import ResponseCache  # noqa: F401
from .extractor import ScienceDailyExtractor, extract_detail, extract_listing  # noqa: F401
from .language_model import LanguageModel, get_language_model  # noqa: F401
from .news import NewsApiClient, NewsDataClient  # noqa: F401
from .retry import call_with_retry  # noqa: F401
from .scraper import ScienceDailyScraper  # noqa: F401

__all__ = [
    "LanguageModel",
    "NewsApiClient",
    "NewsDataClient",
    "ResponseCache",
    "ScienceDailyExtractor",
    "ScienceDailyScraper",
    "call_with_retry",
    "extract_detail",
    "extract_listing",
    "get_language_model",
]
