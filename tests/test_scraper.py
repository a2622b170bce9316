# tests/test_scraper.py
"""Tests for article page fetching and extraction."""

import httpx
import pytest

from newslens.core.errors import UpstreamError, ValidationError
from newslens.services.scraper import (
    NO_CONTENT,
    NO_HEADLINE,
    ArticleScraper,
    extract_article_data,
    source_name_from_url,
)

LONG_PARAGRAPH = "A paragraph that is comfortably longer than fifty characters in total."


@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("https://www.example.com/news/1", "example.com"),
        ("https://news.example.org/a", "news.example.org"),
        ("not a url", "Unknown Source"),
    ],
)
def test_source_name_from_url(url, expected) -> None:
    assert source_name_from_url(url) == expected


def test_extract_prefers_title_and_keeps_three_paragraphs() -> None:
    page = (
        "<title>Rates &amp; Markets</title><h1>Ignored heading</h1>"
        + "".join(f"<p>{LONG_PARAGRAPH} {i}</p>" for i in range(5))
    )

    scraped = extract_article_data(page, "https://www.example.com/story")

    assert scraped.headline == "Rates & Markets"
    assert scraped.content.count(LONG_PARAGRAPH) == 3
    assert scraped.source_name == "example.com"


def test_extract_falls_back_to_h1() -> None:
    scraped = extract_article_data("<h1>Storm warning</h1>", "https://example.com/x")

    assert scraped.headline == "Storm warning"
    assert scraped.content == NO_CONTENT


def test_extract_defaults_when_nothing_found() -> None:
    scraped = extract_article_data("<div>nothing</div>", "https://example.com/x")

    assert scraped.headline == NO_HEADLINE
    assert scraped.content == NO_CONTENT


def test_fetch_extracts_page(scraper) -> None:
    scraped = scraper.fetch("https://www.citynews.test/budget")

    assert scraped.headline == "City council passes budget"
    assert scraped.content.startswith("The council approved the plan.")
    assert "seven to two" in scraped.content
    assert "Short." not in scraped.content
    assert scraped.source_name == "citynews.test"


def test_fetch_rejects_non_http_urls(scraper) -> None:
    with pytest.raises(ValidationError, match="Invalid URL provided"):
        scraper.fetch("ftp://example.com/file")


def test_fetch_reports_http_errors() -> None:
    scraper = ArticleScraper(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
    with pytest.raises(UpstreamError, match="Not Found"):
        scraper.fetch("https://example.com/missing")
    scraper.close()


def test_fetch_reports_connection_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    scraper = ArticleScraper(transport=httpx.MockTransport(handler))
    with pytest.raises(UpstreamError, match="Failed to fetch webpage"):
        scraper.fetch("https://example.com/down")
    scraper.close()


def test_extract_handles_inline_markup_and_attribute_order() -> None:
    page = (
        "<html><head><title>Senate passes <em>landmark</em> bill</title>"
        "<meta content=\"The mayor's plan was approved by the council.\" name=\"description\">"
        "</head><body>"
        "<p>Lawmakers voted late on Thursday, <a href=\"/vote\">according to the record</a>, "
        "after a long debate.</p>"
        f"<p>{LONG_PARAGRAPH}</p>"
        "</body></html>"
    )

    scraped = extract_article_data(page, "https://www.example.com/senate")

    assert scraped.headline == "Senate passes landmark bill"
    assert scraped.content.startswith("The mayor's plan was approved by the council.")
    assert "Lawmakers voted late on Thursday, according to the record, after a long debate." in scraped.content
    assert LONG_PARAGRAPH in scraped.content


def test_extract_ignores_short_paragraphs_with_markup() -> None:
    page = "<title>Brief</title><p>Too <b>short</b> to keep.</p>"

    scraped = extract_article_data(page, "https://example.com/brief")

    assert scraped.content == NO_CONTENT
