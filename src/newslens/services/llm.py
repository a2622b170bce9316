# src/newslens/services/llm.py
"""Client for an OpenAI-compatible chat completions API.

The default configuration targets Groq's hosted endpoint; any service that
speaks the ``/chat/completions`` protocol works.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from newslens.core.errors import UpstreamError
from newslens.core.settings import settings
from newslens.schemas.analysis import ArticleAnalysis
from newslens.services.prompts import ANALYSIS_SYSTEM_PROMPT, ANALYSIS_USER_TEMPLATE

logger = logging.getLogger(__name__)


def extract_json(text: str) -> dict[str, Any]:
    """Extract a JSON object from an LLM reply, tolerating markdown fences."""
    code_block_match = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
    if code_block_match:
        text = code_block_match.group(1).strip()

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        json_match = re.search(r"\{[\s\S]*\}", text)
        if not json_match:
            raise ValueError(f"Could not extract JSON from response: {text[:200]}") from None
        data = json.loads(json_match.group())

    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return data


class LLMClient:
    """Thin synchronous wrapper around the chat completions endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        model: str,
        temperature: float = 0.3,
        max_tokens: int = 2000,
        timeout_seconds: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=timeout_seconds,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, transport: httpx.BaseTransport | None = None) -> LLMClient:
        """Build a client from application settings.

        Raises:
            UpstreamError: If no API key is configured.
        """
        if not settings.llm_api_key:
            raise UpstreamError("LLM_API_KEY is not set")
        return cls(
            api_key=settings.llm_api_key,
            base_url=settings.llm_base_url,
            model=settings.llm_model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout_seconds=settings.llm_timeout_seconds,
            transport=transport,
        )

    @property
    def model_name(self) -> str:
        return self._model

    def close(self) -> None:
        self._client.close()

    def _chat_completion(self, system_prompt: str, user_message: str) -> str:
        try:
            response = self._client.post(
                "/chat/completions",
                json={
                    "model": self._model,
                    "messages": [
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_message},
                    ],
                    "temperature": self._temperature,
                    "max_tokens": self._max_tokens,
                },
            )
        except httpx.TimeoutException as exc:
            logger.warning("LLM request timed out: %s", exc)
            raise UpstreamError("AI analysis timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("LLM request failed: %s", exc)
            raise UpstreamError("AI analysis service is unavailable") from exc

        if response.status_code != httpx.codes.OK:
            logger.warning("LLM API returned %s: %s", response.status_code, response.text[:200])
            raise UpstreamError(f"AI analysis API error: {response.reason_phrase}")

        try:
            return response.json()["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise UpstreamError("Unexpected response from AI analysis") from exc

    def analyze_article(self, headline: str, content: str | None) -> ArticleAnalysis:
        """Ask the model for bias, sentiment and fact-check scores.

        Raises:
            UpstreamError: If the API fails or the reply cannot be parsed.
        """
        user_message = ANALYSIS_USER_TEMPLATE.format(
            headline=headline,
            content=content or "No content provided",
        )
        analysis_text = self._chat_completion(ANALYSIS_SYSTEM_PROMPT, user_message)
        logger.debug("Raw LLM response: %s", analysis_text)

        try:
            return ArticleAnalysis.model_validate(extract_json(analysis_text))
        except (ValueError, PydanticValidationError) as exc:
            logger.error("Failed to parse LLM response as analysis JSON: %s", exc)
            raise UpstreamError("Invalid JSON response from AI analysis") from exc


def get_llm_client() -> LLMClient:
    """Return an LLM client configured from settings."""
    return LLMClient.from_settings()


__all__ = ["LLMClient", "extract_json", "get_llm_client"]
