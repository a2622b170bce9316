# src/newslens/services/__init__.py
"""Business logic services for the NewsLens application."""

from .analysis import AnalysisService
from .llm import LLMClient
from .scraper import ArticleScraper
from .streak import StreakService
from .voting import VoteOutcome, VotingService

__all__ = [
    "AnalysisService",
    "ArticleScraper",
    "LLMClient",
    "StreakService",
    "VoteOutcome",
    "VotingService",
]
