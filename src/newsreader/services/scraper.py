"""Fetch ScienceDaily pages and hand them to the extractor."""

from __future__ import annotations

import logging
from typing import List

import requests

from newsreader.errors import UpstreamError
from newsreader.models import ListingEntry, ScrapedArticle
from newsreader.services.extractor import SCIENCE_DAILY_ORIGIN, ScienceDailyExtractor

__all__ = ["DEFAULT_HEADERS", "ScienceDailyScraper"]

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = (10, 60)
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
}


class ScienceDailyScraper:
    """Single-page scraper for the ScienceDaily front page and article pages."""

    def __init__(
        self,
        session: requests.Session | None = None,
        extractor: ScienceDailyExtractor | None = None,
        base_url: str = SCIENCE_DAILY_ORIGIN,
    ) -> None:
        self.base_url = base_url
        self._session = session or requests.Session()
        self._session.headers.update(DEFAULT_HEADERS)
        self._extractor = extractor or ScienceDailyExtractor(base_url)

    def allows_url(self, candidate_url: str | None) -> bool:
        """Return ``True`` when ``candidate_url`` lives on the scraped site."""

        return bool(candidate_url) and candidate_url.startswith(self.base_url)

    def fetch_listing(self) -> List[ListingEntry]:
        """Scrape the teaser list from the site's front page."""

        html = self._get(self.base_url)
        entries = self._extractor.extract_listing(html)
        logger.info("Scraped %d ScienceDaily articles", len(entries))
        return entries

    def fetch_article(self, url: str) -> ScrapedArticle:
        """Scrape one article page.

        Raises :class:`ValueError` without touching the network when ``url``
        is outside :attr:`base_url`.
        """

        if not self.allows_url(url):
            raise ValueError(f"Refusing to scrape URL outside {self.base_url}: {url}")

        html = self._get(url)
        detail = self._extractor.extract_detail(html, self.base_url)
        return ScrapedArticle(url=url, **detail.model_dump())

    def _get(self, url: str) -> str:
        try:
            response = self._session.get(url, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise UpstreamError(f"Failed to fetch {url}: {exc}") from exc

        if response.status_code >= 400:
            raise UpstreamError(
                f"Failed to fetch page: {response.status_code}",
                status_code=response.status_code,
            )
        return response.text
