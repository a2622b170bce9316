"""Analysis submission and LLM result schemas."""

from typing import Literal

from pydantic import BaseModel, Field, HttpUrl, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

BiasLabel = Literal["left", "center-left", "center", "center-right", "right"]
SentimentLabel = Literal["very negative", "negative", "neutral", "positive", "very positive"]
InputType = Literal["text", "url", "file"]

_HTTP_URL = TypeAdapter(HttpUrl)


def _checked_url(v: object) -> object:
    """Validate ``v`` as an http(s) URL but keep the string as submitted."""
    if isinstance(v, str):
        v = v.strip()
        try:
            _HTTP_URL.validate_python(v)
        except PydanticValidationError as exc:
            raise ValueError("Invalid URL provided") from exc
    return v


class AnalysisCreate(BaseModel):
    """Article submitted for analysis.

    Either ``content`` or ``url`` must be present; ``headline`` may be omitted
    for URL submissions and is then taken from the fetched page.
    """

    headline: str | None = Field(None, max_length=500)
    content: str | None = None
    url: str | None = None
    input_type: InputType | None = Field(
        None,
        description="How the article was supplied; inferred when omitted",
    )

    @field_validator("headline", "content")
    @classmethod
    def strip_blank(cls, v: str | None) -> str | None:
        """Treat whitespace-only strings as missing."""
        if v is None:
            return v
        v = v.strip()
        return v or None

    @field_validator("url", mode="before")
    @classmethod
    def check_url(cls, v: object) -> object:
        if v == "":
            return None
        return _checked_url(v)


class ArticleAnalysis(BaseModel):
    """Structured fields the LLM must return."""

    bias_score: float = Field(..., ge=-100, le=100)
    bias_label: BiasLabel
    sentiment_score: float = Field(..., ge=-1, le=1)
    sentiment_label: SentimentLabel
    fact_check_score: float = Field(..., ge=0, le=100)
    credibility_score: float = Field(..., ge=0, le=10)
    explanation: str = ""
    key_findings: list[str] = Field(default_factory=list)
    methodology: str | None = None
    limitations: str | None = None
    confidence: float | None = Field(None, ge=0, le=100)

    @field_validator("bias_label", "sentiment_label", mode="before")
    @classmethod
    def normalize_label(cls, v: object) -> object:
        """Accept labels with stray casing or whitespace."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class AnalysisResponse(BaseModel):
    """Result of a completed analysis."""

    success: bool = True
    article_id: str
    analysis: ArticleAnalysis


class ScrapeRequest(BaseModel):
    """URL to fetch and extract."""

    url: str

    @field_validator("url", mode="before")
    @classmethod
    def check_url(cls, v: object) -> object:
        return _checked_url(v)


class ScrapeResponse(BaseModel):
    """Text extracted from a fetched article page."""

    success: bool = True
    headline: str
    content: str
    source_name: str
    url: str
