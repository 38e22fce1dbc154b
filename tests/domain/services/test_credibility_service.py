"""Tests for the credibility scoring pipeline."""

import random
from typing import Dict, List, Optional
from unittest.mock import patch

import httpx
import pytest

from truthlens.domain.models.analysis import (
    AnalysisRequest,
    ContentKind,
    RemoteFailure,
    RemoteOutcome,
    RemoteSuccess,
)
from truthlens.domain.services.credibility_service import CredibilityService
from truthlens.infrastructure.ai.groq_adapter import GroqAdapter, GroqConfig


class FakeProvider:
    """AI provider returning a canned outcome."""

    def __init__(self, outcome: Optional[RemoteOutcome] = None, error: Optional[Exception] = None):
        """Initialize fake provider."""
        self._outcome = outcome
        self._error = error
        self.calls: List[str] = []

    async def initialize(self) -> None:
        """Initialize the provider."""
        pass

    async def shutdown(self) -> None:
        """Shutdown the provider."""
        pass

    async def request_assessment(self, content: str) -> RemoteOutcome:
        """Return the canned outcome."""
        self.calls.append(content)
        if self._error:
            raise self._error
        return self._outcome

    @property
    def provider_name(self) -> str:
        """Get provider name."""
        return "Groq AI"

    @property
    def model(self) -> Optional[str]:
        """Get model identifier."""
        return "llama3-8b-8192"

    @property
    def is_available(self) -> bool:
        """Check if available."""
        return True

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get capabilities."""
        return {}


@pytest.fixture
def sensational_request() -> AnalysisRequest:
    """A request full of sensational framing."""
    return AnalysisRequest(content="This miracle cure is 100% guaranteed and they don't want you to know")


@pytest.mark.asyncio
async def test_remote_success(sensational_request: AnalysisRequest, rng: random.Random):
    """Test that a model response produces a remote result."""
    provider = FakeProvider(RemoteSuccess(
        narrative="Red flags: absolute claims.\nCredibility Score: 12/100\nOverall: unreliable.",
        raw_payload={"id": "chatcmpl-1"},
    ))
    service = CredibilityService(provider, rng=rng)

    result = await service.analyze(sensational_request)

    assert provider.calls == [sensational_request.content]
    assert result.confidence == 12
    assert result.used_remote_model is True
    assert result.model == "llama3-8b-8192"
    assert result.notice is None
    assert "Red flags: absolute claims." in result.narrative
    assert result.issues[0].endswith("High-risk misinformation patterns detected")
    assert result.stats_are_synthetic is True


@pytest.mark.asyncio
async def test_remote_response_without_score_uses_default(rng: random.Random):
    """Test that an unparseable model response falls back to 50, not to the heuristic."""
    provider = FakeProvider(RemoteSuccess(narrative="I cannot rate this content."))
    service = CredibilityService(provider, rng=rng)

    result = await service.analyze(AnalysisRequest(content="Peer reviewed research at a university"))

    assert result.confidence == 50
    assert result.used_remote_model is True


@pytest.mark.asyncio
async def test_remote_failure_falls_back(sensational_request: AnalysisRequest, rng: random.Random):
    """Test that a failed call produces a labelled heuristic result."""
    provider = FakeProvider(RemoteFailure(reason="Groq API error: 500 - upstream unavailable"))
    service = CredibilityService(provider, rng=rng)

    result = await service.analyze(sensational_request)

    assert result.confidence == 5
    assert result.used_remote_model is False
    assert result.model is None
    assert "fallback mode" in result.notice
    assert "not real AI model output" in result.narrative
    assert len(result.issues) == 6


@pytest.mark.asyncio
async def test_missing_provider_falls_back_with_key_notice(rng: random.Random):
    """Test fallback mode when no credential is configured at all."""
    service = CredibilityService(None, rng=rng)

    result = await service.analyze(
        AnalysisRequest(content="According to a peer reviewed clinical trial at a major university")
    )

    assert service.remote_available is False
    assert result.confidence == 95
    assert result.used_remote_model is False
    assert "API key" in result.notice


@pytest.mark.asyncio
async def test_provider_exception_never_escapes(sensational_request: AnalysisRequest, rng: random.Random):
    """Test that a misbehaving provider cannot break the pipeline."""
    service = CredibilityService(FakeProvider(error=RuntimeError("boom")), rng=rng)

    result = await service.analyze(sensational_request)

    assert result.used_remote_model is False
    assert result.confidence == 5


@pytest.mark.asyncio
async def test_unexpected_outcome_falls_back(sensational_request: AnalysisRequest, rng: random.Random):
    """Test that a provider returning nothing is treated as a failure."""
    service = CredibilityService(FakeProvider(outcome=None), rng=rng)

    result = await service.analyze(sensational_request)

    assert result.used_remote_model is False


@pytest.mark.asyncio
async def test_request_id_is_stamped(rng: random.Random):
    """Test that the correlation token ends up on the result."""
    service = CredibilityService(None, rng=rng)

    result = await service.analyze(AnalysisRequest(content="Hello"), request_id="abc123")

    assert result.request_id == "abc123"


@pytest.mark.asyncio
async def test_url_content_is_passed_as_text(rng: random.Random):
    """Test that links are sent to the model as raw text."""
    provider = FakeProvider(RemoteSuccess(narrative="Credibility Score: 66/100"))
    service = CredibilityService(provider, rng=rng)

    request = AnalysisRequest(content="https://www.youtube.com/watch?v=abc", kind=ContentKind.VIDEO)
    result = await service.analyze(request)

    assert provider.calls == ["https://www.youtube.com/watch?v=abc"]
    assert result.confidence == 66


@pytest.mark.asyncio
async def test_unreachable_transport_falls_back(sensational_request: AnalysisRequest, rng: random.Random):
    """Test the whole pipeline with a real adapter whose transport is down."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Name or service not known", request=request)

    adapter = GroqAdapter(GroqConfig(api_key="test-key"), transport=httpx.MockTransport(handler))
    await adapter.initialize()
    service = CredibilityService(adapter, rng=rng)

    try:
        result = await service.analyze(sensational_request)
    finally:
        await adapter.shutdown()

    assert result.used_remote_model is False
    assert result.confidence == 5
    assert "fallback mode" in result.notice


@pytest.mark.asyncio
async def test_interpretation_error_falls_back(sensational_request: AnalysisRequest, rng: random.Random):
    """Test that an error while reading the model response falls back to the heuristic."""
    provider = FakeProvider(RemoteSuccess(narrative="Credibility Score: 90/100"))
    service = CredibilityService(provider, rng=rng)

    with patch(
        "truthlens.domain.services.credibility_service.extract_score",
        side_effect=ValueError("bad response"),
    ):
        result = await service.analyze(sensational_request)

    assert result.used_remote_model is False
    assert result.confidence == 5
    assert result.notice == "Groq AI analysis failed. Using fallback mode."
