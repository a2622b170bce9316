# tests/conftest.py
from __future__ import annotations

import json
import os
from collections.abc import Callable, Generator, Iterator
from datetime import timedelta
from itertools import count
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_BADGES", "false")
os.environ.setdefault("LLM_API_KEY", "test-llm-key")

from newslens.api.v1.endpoints import analysis as analysis_endpoints  # noqa: E402
from newslens.core.security import create_access_token  # noqa: E402
from newslens.db.session import Base, enable_sqlite_foreign_keys  # noqa: E402
from newslens.db.session import get_db as app_get_session  # noqa: E402
from newslens.db.time import utcnow  # noqa: E402
from newslens.main import app as fastapi_app  # noqa: E402
from newslens.models import Article  # noqa: E402
from newslens.services.badges import ensure_badge_catalog  # noqa: E402
from newslens.services.llm import LLMClient  # noqa: E402
from newslens.services.scraper import ArticleScraper  # noqa: E402

TEST_DB_URL = "sqlite://"

_ARTICLE_COUNTER = count(1)

SAMPLE_ANALYSIS: dict[str, Any] = {
    "bias_score": -35,
    "bias_label": "center-left",
    "sentiment_score": -0.2,
    "sentiment_label": "negative",
    "fact_check_score": 82,
    "credibility_score": 7,
    "explanation": "Mostly factual reporting with some loaded framing.",
    "key_findings": ["Quotes are sourced", "Headline is emotive"],
    "methodology": "Language and sourcing review",
    "limitations": "Single article only",
    "confidence": 70,
}


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(autouse=True)
def badge_catalog(db_session: Session) -> None:
    """Seed the static badge catalog for every test."""
    ensure_badge_catalog(db_session)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture()
def user_id() -> str:
    return "user-primary"


@pytest.fixture()
def other_user_id() -> str:
    return "user-secondary"


@pytest.fixture()
def auth_token(user_id: str) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture()
def other_auth_token(other_user_id: str) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return {"Authorization": f"Bearer {create_access_token(other_user_id)}"}


@pytest.fixture()
def make_article(db_session: Session) -> Callable[..., Article]:
    """Return a factory that persists analyzed articles."""

    def _make_article(**overrides: Any) -> Article:
        n = next(_ARTICLE_COUNTER)
        values: dict[str, Any] = {
            "headline": f"Test headline {n}",
            "content": f"Test article body {n}",
            "bias_score": 0.0,
            "bias_label": "center",
            "sentiment_score": 0.0,
            "sentiment_label": "neutral",
            "fact_check_score": 90.0,
            "credibility_score": 8.0,
            "ai_explanation": "Balanced coverage.",
            "analyzed_at": utcnow() - timedelta(minutes=n),
        }
        values.update(overrides)
        article = Article(**values)
        db_session.add(article)
        db_session.commit()
        return article

    return _make_article


@pytest.fixture()
def test_article(make_article: Callable[..., Article]) -> Article:
    """Create a baseline article for tests."""
    return make_article(headline="Baseline article")


def chat_completion_payload(content: str) -> dict[str, Any]:
    """Wrap ``content`` in an OpenAI-style chat completion response."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


@pytest.fixture()
def llm_requests() -> list[httpx.Request]:
    """Requests captured by the mocked LLM transport."""
    return []


@pytest.fixture()
def llm_handler(llm_requests: list[httpx.Request]) -> Callable[[httpx.Request], httpx.Response]:
    """Default LLM behaviour: reply with ``SAMPLE_ANALYSIS``."""

    def _handler(request: httpx.Request) -> httpx.Response:
        llm_requests.append(request)
        return httpx.Response(200, json=chat_completion_payload(json.dumps(SAMPLE_ANALYSIS)))

    return _handler


@pytest.fixture()
def llm_client(llm_handler: Callable[[httpx.Request], httpx.Response]) -> Iterator[LLMClient]:
    client = LLMClient(
        api_key="test-llm-key",
        base_url="https://llm.test/v1",
        model="test-model",
        transport=httpx.MockTransport(llm_handler),
    )
    try:
        yield client
    finally:
        client.close()


@pytest.fixture()
def page_handler() -> Callable[[httpx.Request], httpx.Response]:
    """Default page fetch behaviour: serve a small article."""

    def _handler(request: httpx.Request) -> httpx.Response:
        body = (
            "<html><head><title>City council passes budget</title>"
            '<meta name="description" content="The council approved the plan.">'
            "</head><body>"
            "<p>The city council voted seven to two on Tuesday to approve the new budget.</p>"
            "<p>Short.</p>"
            "</body></html>"
        )
        return httpx.Response(200, text=body)

    return _handler


@pytest.fixture()
def scraper(page_handler: Callable[[httpx.Request], httpx.Response]) -> Iterator[ArticleScraper]:
    article_scraper = ArticleScraper(transport=httpx.MockTransport(page_handler))
    try:
        yield article_scraper
    finally:
        article_scraper.close()


@pytest.fixture()
def mock_upstreams(app: FastAPI, llm_client: LLMClient, scraper: ArticleScraper) -> Iterator[None]:
    """Route the analysis endpoints' LLM and page fetches to mock transports."""
    overrides: dict[Callable[..., Any], Callable[[], Any]] = {
        analysis_endpoints.get_llm_client_dep: lambda: llm_client,
        analysis_endpoints.get_scraper_dep: lambda: scraper,
    }
    for dependency, override in overrides.items():
        app.dependency_overrides[dependency] = override

    try:
        yield
    finally:
        for dependency in list(overrides):
            app.dependency_overrides.pop(dependency, None)
