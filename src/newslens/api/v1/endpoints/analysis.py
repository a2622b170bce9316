# src/newslens/api/v1/endpoints/analysis.py
"""Article analysis endpoints for the NewsLens API."""

from __future__ import annotations

from collections.abc import Generator
from typing import Annotated

from fastapi import APIRouter, Depends, status

from newslens.api.v1.dependencies import CurrentUserDep, SessionDep
from newslens.schemas.analysis import (
    AnalysisCreate,
    AnalysisResponse,
    ScrapeRequest,
    ScrapeResponse,
)
from newslens.services.analysis import AnalysisService
from newslens.services.llm import LLMClient, get_llm_client
from newslens.services.scraper import ArticleScraper, get_article_scraper

router = APIRouter(prefix="/analysis", tags=["analysis"])


def get_llm_client_dep() -> Generator[LLMClient, None, None]:
    """Yield an LLM client for the duration of the request."""
    client = get_llm_client()
    try:
        yield client
    finally:
        client.close()


def get_scraper_dep() -> Generator[ArticleScraper, None, None]:
    """Yield an article scraper for the duration of the request."""
    scraper = get_article_scraper()
    try:
        yield scraper
    finally:
        scraper.close()


LLMClientDep = Annotated[LLMClient, Depends(get_llm_client_dep)]
ScraperDep = Annotated[ArticleScraper, Depends(get_scraper_dep)]


@router.post("/", response_model=AnalysisResponse, status_code=status.HTTP_201_CREATED)
def analyze_article(
    payload: AnalysisCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    llm_client: LLMClientDep,
    scraper: ScraperDep,
) -> AnalysisResponse:
    """Analyze an article for bias, sentiment and factual accuracy."""
    service = AnalysisService(llm_client, scraper)
    article, analysis = service.analyze(db, payload, user_id=current_user.user_id)
    return AnalysisResponse(article_id=article.id, analysis=analysis)


@router.post("/scrape", response_model=ScrapeResponse)
def scrape_article(
    payload: ScrapeRequest,
    current_user: CurrentUserDep,
    scraper: ScraperDep,
) -> ScrapeResponse:
    """Fetch a URL and return the extracted headline and text for review."""
    scraped = scraper.fetch(payload.url)
    return ScrapeResponse(
        headline=scraped.headline,
        content=scraped.content,
        source_name=scraped.source_name,
        url=scraped.url,
    )
