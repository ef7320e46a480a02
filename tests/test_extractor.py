from __future__ import annotations

from newsreader.services.extractor import (
    SCIENCE_DAILY_ORIGIN,
    ScienceDailyExtractor,
    extract_detail,
    extract_listing,
    normalize_date,
)

LISTING_HTML = """
<html>
  <body>
    <div class="row">
      <div class="col-md-6">
        <div class="latest-head"><a href="/releases/2025/10/251024041752.htm">Coral reefs recover</a></div>
        <div class="latest-summary">
          <span class="story-date">October 24, 2025 — </span>Reefs bounce back after bleaching.
        </div>
      </div>
      <div class="col-md-6">
        <div class="latest-head">
          <a href="https://www.sciencedaily.com/releases/2025/10/251023120000.htm">Quiet volcano</a>
        </div>
        <div class="latest-summary"><span class="story-date">Sometime recently — </span>Magma stays put.</div>
      </div>
      <div class="col-md-6">
        <div class="latest-head">No link here</div>
        <div class="latest-summary">Orphaned description.</div>
      </div>
      <div class="col-md-6">
        <div class="latest-head"><a href="/releases/2025/10/251022000000.htm">Date only</a></div>
        <div class="latest-summary"><span class="story-date">October 22, 2025 — </span></div>
      </div>
    </div>
    <div class="row">
      <div class="col-md-6">
        <div class="latest-head"><a href="/releases/2025/10/251021000000.htm">Undated finding</a></div>
        <div class="latest-summary">No date on this one.</div>
      </div>
    </div>
  </body>
</html>
"""

DETAIL_HTML = """
<html>
  <body>
    <div id="featured">
      <img src="/images/1920/coral-reef.jpg" alt="" />
      <figcaption> A recovering reef. </figcaption>
    </div>
    <div id="text">
      <p>Intro paragraph.</p>
      <ul>
        <li>Point one</li>
        <li> </li>
        <li>Point two</li>
      </ul>
      <p>Body paragraph.</p>
      <p>   </p>
    </div>
    <div id="related_topics">
      <ul>
        <li><a rel="tag" href="/news/plants_animals/marine_biology/">Marine Biology</a></li>
        <li><a href="/news/earth_climate/">Not a tag</a></li>
      </ul>
    </div>
    <div id="related_terms">
      <a rel="tag" href="/terms/coral_reef.htm">Coral reef</a>
      <a rel="tag" href="/terms/bleaching.htm">Coral bleaching</a>
    </div>
  </body>
</html>
"""


def test_extract_listing_keeps_well_formed_blocks_only() -> None:
    entries = extract_listing(LISTING_HTML)

    assert [entry.title for entry in entries] == [
        "Coral reefs recover",
        "Quiet volcano",
        "Undated finding",
    ]
    assert all(entry.title and entry.url and entry.description for entry in entries)


def test_extract_listing_resolves_links_and_strips_dates() -> None:
    first, second, third = extract_listing(LISTING_HTML)

    assert first.url == "https://www.sciencedaily.com/releases/2025/10/251024041752.htm"
    assert first.published_at == "2025-10-24T00:00:00Z"
    assert first.description == "Reefs bounce back after bleaching."

    assert second.url == "https://www.sciencedaily.com/releases/2025/10/251023120000.htm"
    assert second.published_at == "Sometime recently"
    assert second.description == "Magma stays put."

    assert third.published_at is None
    assert third.description == "No date on this one."


def test_extract_listing_serialises_camel_case() -> None:
    payload = extract_listing(LISTING_HTML)[0].model_dump(by_alias=True)

    assert set(payload) == {"title", "url", "publishedAt", "description"}


def test_extract_listing_on_unrelated_markup_is_empty() -> None:
    assert extract_listing("<html><body><p>Maintenance</p></body></html>") == []


def test_extract_detail_collects_all_regions() -> None:
    detail = extract_detail(DETAIL_HTML, SCIENCE_DAILY_ORIGIN)

    assert detail.image == "https://www.sciencedaily.com/images/1920/coral-reef.jpg"
    assert detail.image_description == "A recovering reef."
    assert detail.key_points == ["Point one", "Point two"]
    assert detail.paragraphs == ["Intro paragraph.", "Body paragraph."]
    assert detail.related_topics == ["Marine Biology"]
    assert detail.related_terms == ["Coral reef", "Coral bleaching"]


def test_extract_detail_without_featured_region() -> None:
    detail = extract_detail("<html><body><div id='text'><p>Only text.</p></div></body></html>")

    assert detail.image is None
    assert detail.image_description is None
    assert detail.key_points == []
    assert detail.paragraphs == ["Only text."]
    assert detail.related_topics == []


def test_extractor_uses_its_own_base_url() -> None:
    extractor = ScienceDailyExtractor("https://mirror.example.org")

    detail = extractor.extract_detail(DETAIL_HTML)
    entries = extractor.extract_listing(LISTING_HTML)

    assert detail.image == "https://mirror.example.org/images/1920/coral-reef.jpg"
    assert entries[0].url == "https://mirror.example.org/releases/2025/10/251024041752.htm"


def test_extract_detail_keeps_list_items_out_of_paragraphs() -> None:
    html = "<html><body><div id='text'><p>Lead<ul><li>Point</li></ul></p><p>Body</p></div></body></html>"

    detail = extract_detail(html)

    assert detail.key_points == ["Point"]
    assert detail.paragraphs == ["Lead", "Body"]
    assert not any("Point" in paragraph for paragraph in detail.paragraphs)


def test_extract_listing_drops_non_web_links() -> None:
    html = """
    <div class="row">
      <div class="col-md-6">
        <div class="latest-head"><a href="javascript:alert(1)">Scripted</a></div>
        <div class="latest-summary">Looks like a story.</div>
      </div>
      <div class="col-md-6">
        <div class="latest-head"><a href="/releases/2025/10/251020000000.htm">Real story</a></div>
        <div class="latest-summary">An actual finding.</div>
      </div>
    </div>
    """

    entries = extract_listing(html)

    assert [entry.title for entry in entries] == ["Real story"]


def test_extract_detail_drops_non_web_image() -> None:
    html = "<div id='featured'><img src='javascript:alert(1)' /></div><div id='text'><p>Text.</p></div>"

    detail = extract_detail(html, SCIENCE_DAILY_ORIGIN)

    assert detail.image is None
    assert detail.paragraphs == ["Text."]


def test_normalize_date() -> None:
    assert normalize_date("October 24, 2025 — ") == "2025-10-24T00:00:00Z"
    assert normalize_date("2025-10-24T08:30:00+02:00") == "2025-10-24T06:30:00Z"
    assert normalize_date("not a date at all") == "not a date at all"
    assert normalize_date(" — ") is None
