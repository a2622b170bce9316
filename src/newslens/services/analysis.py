# src/newslens/services/analysis.py
"""Analysis request handling: fetch, ask the LLM, persist, audit."""

from __future__ import annotations

import json
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from newslens.core.errors import NewsLensError, PersistenceError, ValidationError
from newslens.db.time import utcnow
from newslens.models import AnalysisRequest, Article
from newslens.models.analysis_request import (
    REQUEST_STATUS_COMPLETED,
    REQUEST_STATUS_FAILED,
    REQUEST_STATUS_PENDING,
)
from newslens.schemas.analysis import AnalysisCreate, ArticleAnalysis
from newslens.services.llm import LLMClient
from newslens.services.scraper import ArticleScraper, source_name_from_url

logger = logging.getLogger(__name__)


def _input_type(payload: AnalysisCreate) -> str:
    if payload.input_type:
        return payload.input_type
    if payload.url and not payload.content:
        return "url"
    return "text"


def _input_content(payload: AnalysisCreate) -> str:
    if payload.content:
        return payload.content
    if payload.url:
        return payload.url
    return payload.headline or ""


def _fact_check_document(analysis: ArticleAnalysis) -> str:
    return json.dumps(
        {
            "explanation": analysis.explanation,
            "key_findings": analysis.key_findings,
            "methodology": analysis.methodology,
            "limitations": analysis.limitations,
            "confidence": analysis.confidence,
        }
    )


class AnalysisService:
    """Runs one article through the LLM and stores the snapshot.

    Every submission is recorded in ``analysis_requests`` whether it succeeds
    or fails.
    """

    def __init__(self, llm_client: LLMClient, scraper: ArticleScraper) -> None:
        self.llm_client = llm_client
        self.scraper = scraper

    @staticmethod
    def validate(payload: AnalysisCreate) -> None:
        """Reject submissions with nothing to analyze."""
        if not payload.content and not payload.url:
            raise ValidationError("Article content or URL is required")
        if not payload.headline and not payload.url:
            raise ValidationError("Headline is required")

    def _record_request(self, db: Session, payload: AnalysisCreate, user_id: str | None) -> AnalysisRequest:
        request = AnalysisRequest(
            user_id=user_id,
            input_type=_input_type(payload),
            input_content=_input_content(payload),
            status=REQUEST_STATUS_PENDING,
        )
        db.add(request)
        db.commit()
        return request

    def _mark_failed(self, db: Session, request: AnalysisRequest, message: str) -> None:
        db.rollback()
        try:
            request.status = REQUEST_STATUS_FAILED
            request.error_message = message
            request.completed_at = utcnow()
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error("Could not record failure of analysis request %s: %s", request.id, exc)

    def analyze(
        self,
        db: Session,
        payload: AnalysisCreate,
        *,
        user_id: str | None = None,
    ) -> tuple[Article, ArticleAnalysis]:
        """Analyze a submitted article and persist the result.

        Returns:
            The stored article and the parsed analysis.

        Raises:
            ValidationError: If the submission has nothing to analyze.
            UpstreamError: If the page fetch or the LLM call fails.
            PersistenceError: If the article cannot be stored.
        """
        self.validate(payload)
        try:
            request = self._record_request(db, payload, user_id)
        except SQLAlchemyError as err:
            db.rollback()
            raise PersistenceError("Failed to record analysis request") from err

        headline = payload.headline
        content = payload.content
        url = payload.url
        source_name = source_name_from_url(url) if url else None

        try:
            if url and not content:
                scraped = self.scraper.fetch(url)
                content = scraped.content
                headline = headline or scraped.headline
                source_name = scraped.source_name

            logger.info("Starting analysis for: %s", headline)
            analysis = self.llm_client.analyze_article(headline or "", content)

            article = Article(
                headline=headline or "",
                content=content,
                url=url,
                source_name=source_name,
                bias_score=analysis.bias_score,
                bias_label=analysis.bias_label,
                sentiment_score=analysis.sentiment_score,
                sentiment_label=analysis.sentiment_label,
                fact_check_score=analysis.fact_check_score,
                credibility_score=analysis.credibility_score,
                ai_explanation=analysis.explanation,
                fact_check_explanation=_fact_check_document(analysis),
                analyzed_at=utcnow(),
            )
            db.add(article)
            db.flush()

            request.status = REQUEST_STATUS_COMPLETED
            request.article_id = article.id
            request.completed_at = utcnow()
            db.commit()
        except NewsLensError as err:
            self._mark_failed(db, request, err.message)
            raise
        except SQLAlchemyError as err:
            logger.error("Storing analysis for request %s failed: %s", request.id, err)
            self._mark_failed(db, request, "Failed to store analysis results")
            raise PersistenceError("Failed to store analysis results") from err

        logger.info("Analysis completed successfully for article: %s", article.id)
        return article, analysis


__all__ = ["AnalysisService"]
