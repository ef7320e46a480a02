"""Markup extraction for ScienceDaily listing and article pages.

The selectors below follow ScienceDaily's current markup and have no
fallbacks. Callers only depend on :meth:`ScienceDailyExtractor.extract_listing`
and :meth:`ScienceDailyExtractor.extract_detail`.
"""

from __future__ import annotations

import logging
from datetime import timezone
from typing import List
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag
from dateutil import parser as date_parser

from newsreader.models import ArticleDetail, ListingEntry

__all__ = [
    "SCIENCE_DAILY_ORIGIN",
    "ScienceDailyExtractor",
    "extract_detail",
    "extract_listing",
    "normalize_date",
]

logger = logging.getLogger(__name__)

SCIENCE_DAILY_ORIGIN = "https://www.sciencedaily.com"
ISO_TIMESTAMP = "%Y-%m-%dT%H:%M:%SZ"


def normalize_date(raw: str) -> str | None:
    """Return ``raw`` as an ISO 8601 UTC timestamp when it parses as a date.

    The em-dash ScienceDaily appends to story dates is dropped first. Text that
    does not parse is returned trimmed but otherwise unchanged; blank input
    gives ``None``.
    """

    cleaned = raw.replace("—", "").strip()
    if not cleaned:
        return None

    try:
        parsed = date_parser.parse(cleaned)
    except (ValueError, OverflowError):
        return cleaned

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc).strftime(ISO_TIMESTAMP)


def _web_url(base_url: str, reference: str) -> str | None:
    """Resolve ``reference`` against ``base_url``; non-HTTP(S) results give ``None``."""

    resolved = urljoin(base_url, reference)
    return resolved if urlparse(resolved).scheme in {"http", "https"} else None


def _text(element: Tag | None) -> str:
    return element.get_text().strip() if element is not None else ""


def _texts(soup: BeautifulSoup, selector: str) -> List[str]:
    values = []
    for element in soup.select(selector):
        text = _text(element)
        if text:
            values.append(text)
    return values


class ScienceDailyExtractor:
    """Pull structured fields out of ScienceDaily pages."""

    LISTING_BLOCK = ".row .col-md-6"
    LISTING_LINK = ".latest-head a"
    LISTING_SUMMARY = ".latest-summary"
    LISTING_DATE = ".story-date"

    DETAIL_IMAGE = "#featured img"
    DETAIL_CAPTION = "#featured figcaption"
    DETAIL_KEY_POINTS = "#text > ul li"
    DETAIL_PARAGRAPHS = "#text p"
    DETAIL_RELATED_TOPICS = "#related_topics a[rel='tag']"
    DETAIL_RELATED_TERMS = "#related_terms a[rel='tag']"

    def __init__(self, base_url: str = SCIENCE_DAILY_ORIGIN) -> None:
        self.base_url = base_url

    def extract_listing(self, html: str) -> List[ListingEntry]:
        """Return the teaser entries on a listing page.

        Blocks without a title, an http(s) link or a description are skipped.
        """

        soup = BeautifulSoup(html, "lxml")
        entries: List[ListingEntry] = []

        for block in soup.select(self.LISTING_BLOCK):
            anchor = block.select_one(self.LISTING_LINK)
            href = (anchor.get("href") or "").strip() if anchor is not None else ""
            title = _text(anchor)

            summary = block.select_one(self.LISTING_SUMMARY)
            date_element = summary.select_one(self.LISTING_DATE) if summary is not None else None
            date_text = date_element.get_text() if date_element is not None else ""

            description = summary.get_text() if summary is not None else ""
            if date_text:
                description = description.replace(date_text, "", 1)
            description = description.strip()

            url = _web_url(self.base_url, href) if href else None
            if not (title and url and description):
                continue

            entries.append(
                ListingEntry(
                    title=title,
                    url=url,
                    published_at=normalize_date(date_text),
                    description=description,
                )
            )

        logger.debug("Extracted %d listing entries", len(entries))
        return entries

    def extract_detail(self, html: str, base_url: str | None = None) -> ArticleDetail:
        """Return the image, key points, body and related tags of an article page."""

        soup = BeautifulSoup(html, "lxml")

        image_element = soup.select_one(self.DETAIL_IMAGE)
        src = (image_element.get("src") or "").strip() if image_element is not None else ""
        image = _web_url(base_url or self.base_url, src) if src else None

        paragraphs = [
            _text(paragraph)
            for paragraph in soup.select(self.DETAIL_PARAGRAPHS)
            if paragraph.find("ul") is None and _text(paragraph)
        ]

        return ArticleDetail(
            image=image,
            image_description=_text(soup.select_one(self.DETAIL_CAPTION)) or None,
            key_points=_texts(soup, self.DETAIL_KEY_POINTS),
            paragraphs=paragraphs,
            related_topics=_texts(soup, self.DETAIL_RELATED_TOPICS),
            related_terms=_texts(soup, self.DETAIL_RELATED_TERMS),
        )


_default_extractor = ScienceDailyExtractor()


def extract_listing(html: str) -> List[ListingEntry]:
    return _default_extractor.extract_listing(html)


def extract_detail(html: str, base_url: str = SCIENCE_DAILY_ORIGIN) -> ArticleDetail:
    return _default_extractor.extract_detail(html, base_url)
