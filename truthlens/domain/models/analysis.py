"""Domain models for credibility analysis requests and results."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator, model_validator


class ContentKind(str, Enum):
    """Kinds of content a user can submit for analysis."""

    TEXT = "text"
    URL = "url"
    VIDEO = "video"


def is_valid_url(value: str) -> bool:
    """Check whether a string parses as an absolute URL."""
    try:
        parsed = urlparse(value.strip())
    except ValueError:
        return False
    return bool(parsed.scheme) and bool(parsed.netloc)


class AnalysisRequest(BaseModel):
    """Content submitted by a user for credibility assessment."""

    content: str = Field(..., description="Text, URL or video link to assess")
    kind: ContentKind = Field(default=ContentKind.TEXT, description="Kind of content")

    class Config:
        """Pydantic model configuration."""
        frozen = True  # Immutable model
        json_schema_extra = {
            "example": {
                "content": "According to a peer reviewed clinical trial, the drug may reduce symptoms.",
                "kind": "text",
            }
        }

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Content to analyze cannot be empty")
        return value

    @model_validator(mode="after")
    def _links_are_urls(self) -> "AnalysisRequest":
        if self.kind in (ContentKind.URL, ContentKind.VIDEO) and not is_valid_url(self.content):
            raise ValueError(f"Content is not a valid URL for kind '{self.kind.value}'")
        return self


class RemoteSuccess(BaseModel):
    """Successful response from the hosted model."""

    narrative: str = Field(..., description="Free-form assessment written by the model")
    raw_payload: Dict[str, Any] = Field(default_factory=dict, description="Decoded response body")


class RemoteFailure(BaseModel):
    """Failed call to the hosted model."""

    reason: str = Field(..., description="Status and body text, or the exception message")


RemoteOutcome = Union[RemoteSuccess, RemoteFailure]


class SourceStats(BaseModel):
    """Synthesized source counts shown next to a score."""

    reliable_count: int = Field(..., ge=0)
    questionable_count: int = Field(..., ge=0)
    total_checked: int = Field(..., ge=0)


class FactCheckStats(BaseModel):
    """Synthesized fact-check counts shown next to a score."""

    verified: int = Field(..., ge=0)
    conflicting: int = Field(..., ge=0)
    unverified: int = Field(..., ge=0)


class AnalysisResult(BaseModel):
    """Canonical output of the credibility pipeline.

    The source and fact-check statistics are derived from ``confidence``;
    they are illustrative and not measured, which ``stats_are_synthetic``
    makes explicit to consumers.
    """

    confidence: int = Field(..., ge=0, le=100, description="Credibility score 0-100")
    narrative: str = Field(..., description="Human-readable explanation")
    source_stats: SourceStats
    fact_check_stats: FactCheckStats
    issues: List[str] = Field(..., min_length=1)
    used_remote_model: bool = Field(..., description="Whether the hosted model produced the score")
    stats_are_synthetic: bool = True
    source: str = Field(default="Pattern Analysis", description="Which path produced the result")
    model: Optional[str] = Field(None, description="Model identifier when the hosted model was used")
    notice: Optional[str] = Field(None, description="Informational notice when fallback mode was used")
    request_id: str = Field(default_factory=lambda: uuid4().hex, description="Correlation token")
    analyzed_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        """Pydantic model configuration."""
        frozen = True
