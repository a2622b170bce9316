# tests/test_llm.py
"""Tests for the chat completions client."""

import json

import httpx
import pytest

from newslens.core.errors import UpstreamError
from newslens.services.llm import LLMClient, extract_json
from tests.conftest import SAMPLE_ANALYSIS, chat_completion_payload


def _client(handler) -> LLMClient:
    return LLMClient(
        api_key="test-llm-key",
        base_url="https://llm.test/v1/",
        model="test-model",
        transport=httpx.MockTransport(handler),
    )


def test_extract_json_plain() -> None:
    assert extract_json('{"a": 1}') == {"a": 1}


def test_extract_json_code_fence() -> None:
    text = 'Here you go:\n```json\n{"bias_label": "center"}\n```\nThanks'
    assert extract_json(text) == {"bias_label": "center"}


def test_extract_json_embedded_object() -> None:
    assert extract_json('The result is {"score": 3} as requested.') == {"score": 3}


def test_extract_json_rejects_non_objects() -> None:
    with pytest.raises(ValueError):
        extract_json("no json here")
    with pytest.raises(ValueError):
        extract_json("[1, 2, 3]")


def test_analyze_article_success(llm_client, llm_requests) -> None:
    analysis = llm_client.analyze_article("Budget passes", "The council voted.")

    assert analysis.bias_label == "center-left"
    assert analysis.bias_score == -35
    assert analysis.key_findings == SAMPLE_ANALYSIS["key_findings"]

    assert len(llm_requests) == 1
    request = llm_requests[0]
    assert request.url.path == "/v1/chat/completions"
    assert request.headers["Authorization"] == "Bearer test-llm-key"
    body = json.loads(request.content)
    assert body["model"] == "test-model"
    assert body["temperature"] == 0.3
    assert body["max_tokens"] == 2000
    assert "Budget passes" in body["messages"][1]["content"]


def test_analyze_article_normalizes_labels() -> None:
    reply = dict(SAMPLE_ANALYSIS, bias_label=" Center-Right ", sentiment_label="NEUTRAL")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=chat_completion_payload(f"```json\n{json.dumps(reply)}\n```"))

    client = _client(handler)
    analysis = client.analyze_article("Headline", None)
    client.close()

    assert analysis.bias_label == "center-right"
    assert analysis.sentiment_label == "neutral"


def test_analyze_article_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"error": "rate limited"})

    client = _client(handler)
    with pytest.raises(UpstreamError) as exc_info:
        client.analyze_article("Headline", "Body")
    client.close()

    assert exc_info.value.status_code == 502
    assert "Too Many Requests" in exc_info.value.message


def test_analyze_article_invalid_json() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=chat_completion_payload("I cannot analyze this."))

    client = _client(handler)
    with pytest.raises(UpstreamError, match="Invalid JSON response from AI analysis"):
        client.analyze_article("Headline", "Body")
    client.close()


def test_analyze_article_out_of_range_scores() -> None:
    reply = dict(SAMPLE_ANALYSIS, bias_score=250)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=chat_completion_payload(json.dumps(reply)))

    client = _client(handler)
    with pytest.raises(UpstreamError, match="Invalid JSON response"):
        client.analyze_article("Headline", "Body")
    client.close()


def test_analyze_article_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = _client(handler)
    with pytest.raises(UpstreamError, match="timed out"):
        client.analyze_article("Headline", "Body")
    client.close()


def test_from_settings_requires_api_key(monkeypatch) -> None:
    from newslens.core.settings import settings

    monkeypatch.setattr(settings, "llm_api_key", None)
    with pytest.raises(UpstreamError, match="LLM_API_KEY"):
        LLMClient.from_settings()
