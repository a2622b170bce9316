# src/newslens/main.py
"""Main entry point for the NewsLens application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from newslens import __version__
from newslens.api.v1 import (
    analysis_router,
    articles_router,
    auth_router,
    badges_router,
    votes_router,
)
from newslens.core.errors import NewsLensError
from newslens.core.settings import settings
from newslens.db.session import SessionLocal
from newslens.services.badges import ensure_badge_catalog

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="NewsLens API",
    description="LLM-backed news bias analysis with community voting",
    version=__version__,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(analysis_router, prefix="/api/v1")
app.include_router(articles_router, prefix="/api/v1")
app.include_router(auth_router, prefix="/api/v1")
app.include_router(badges_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")


@app.exception_handler(NewsLensError)
async def newslens_error_handler(request: Request, exc: NewsLensError) -> JSONResponse:
    """Render service errors as ``{"success": false, "error": ...}``."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
    )


@app.on_event("startup")
async def on_startup() -> None:
    if not settings.seed_badges:
        return
    db = SessionLocal()
    try:
        ensure_badge_catalog(db)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Badge catalog not seeded (run migrations first?): %s", exc)
    finally:
        db.close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "NewsLens API",
        "version": __version__,
        "description": "LLM-backed news bias analysis with community voting",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("newslens.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
