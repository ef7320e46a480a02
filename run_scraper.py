"""Convenience script for running the ScienceDaily scraper locally."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# Ensure the src directory is on the Python path so the newsreader package can be imported
SRC_PATH = Path(__file__).resolve().parent / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from newsreader.config import Settings  # noqa: E402  (import after path setup)
from newsreader.errors import UpstreamError  # noqa: E402
from newsreader.services.scraper import ScienceDailyScraper  # noqa: E402


def main(argv: list[str] | None = None) -> None:
    """Print the ScienceDaily front page, or one article with ``--url``, as JSON."""

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--url", help="ScienceDaily article to scrape instead of the front page")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")

    scraper = ScienceDailyScraper()

    try:
        if args.url:
            logging.info("Scraping %s", args.url)
            result = scraper.fetch_article(args.url).model_dump(by_alias=True)
        else:
            logging.info("Scraping %s", scraper.base_url)
            entries = scraper.fetch_listing()
            result = {
                "count": len(entries),
                "articles": [entry.model_dump(by_alias=True) for entry in entries],
            }
    except (UpstreamError, ValueError) as exc:
        logging.error("Scrape failed: %s", exc)
        sys.exit(1)

    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
