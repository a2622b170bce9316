"""Fetch an article page and pull out a headline and some body text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlsplit

import httpx
from bs4 import BeautifulSoup

from newslens.core.errors import UpstreamError, ValidationError
from newslens.core.settings import settings

logger = logging.getLogger(__name__)

MIN_PARAGRAPH_LENGTH = 50
MAX_PARAGRAPHS = 3
NO_HEADLINE = "No headline found"
NO_CONTENT = "No content extracted"


@dataclass(frozen=True)
class ScrapedArticle:
    """Text extracted from an article page."""

    headline: str
    content: str
    source_name: str
    url: str


def source_name_from_url(url: str) -> str:
    """Return the hostname without a leading ``www.``."""
    hostname = urlsplit(url).hostname
    if not hostname:
        return "Unknown Source"
    return hostname.removeprefix("www.")


def _text(tag) -> str:
    return " ".join(tag.get_text().split()) if tag else ""


def extract_article_data(page: str, url: str) -> ScrapedArticle:
    """Extract headline, summary text and source name from raw HTML."""
    soup = BeautifulSoup(page, "html.parser")

    headline = _text(soup.title) or _text(soup.find("h1"))

    content = ""
    description = soup.find("meta", attrs={"name": "description"})
    if description and description.get("content"):
        content = " ".join(description["content"].split())

    paragraphs = [_text(p) for p in soup.find_all("p")]
    paragraphs = [text for text in paragraphs if len(text) > MIN_PARAGRAPH_LENGTH]
    if paragraphs:
        body = "\n\n".join(paragraphs[:MAX_PARAGRAPHS])
        content = f"{content}\n\n{body}" if content else body

    return ScrapedArticle(
        headline=headline or NO_HEADLINE,
        content=content or NO_CONTENT,
        source_name=source_name_from_url(url),
        url=url,
    )


class ArticleScraper:
    """Fetches article pages over HTTP with a bounded timeout."""

    def __init__(
        self,
        *,
        timeout_seconds: float | None = None,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            timeout=timeout_seconds or settings.scrape_timeout_seconds,
            headers={"User-Agent": user_agent or settings.scrape_user_agent},
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def fetch(self, url: str) -> ScrapedArticle:
        """Download ``url`` and extract its article text.

        Raises:
            ValidationError: If the URL is not an absolute http(s) URL.
            UpstreamError: If the page cannot be fetched.
        """
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValidationError("Invalid URL provided")

        logger.info("Scraping article from: %s", url)
        try:
            response = self._client.get(url)
        except httpx.TimeoutException as exc:
            raise UpstreamError("Timed out fetching webpage") from exc
        except httpx.HTTPError as exc:
            logger.warning("Fetching %s failed: %s", url, exc)
            raise UpstreamError("Failed to fetch webpage") from exc

        if response.is_error:
            raise UpstreamError(f"Failed to fetch webpage: {response.reason_phrase}")

        return extract_article_data(response.text, url)


def get_article_scraper() -> ArticleScraper:
    """Return a scraper configured from settings."""
    return ArticleScraper()


__all__ = [
    "ArticleScraper",
    "ScrapedArticle",
    "extract_article_data",
    "get_article_scraper",
    "source_name_from_url",
]
