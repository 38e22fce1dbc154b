"""Service orchestrating the credibility scoring pipeline."""

import logging
import random
from typing import Optional

from ..models.analysis import (
    AnalysisRequest,
    AnalysisResult,
    RemoteFailure,
    RemoteOutcome,
    RemoteSuccess,
)
from ..ports.ai_provider import AIProvider
from .score_interpreter import (
    estimate_heuristic_credibility,
    extract_score,
    fallback_narrative,
    remote_narrative,
    synthesize_stats,
)

logger = logging.getLogger(__name__)

NO_PROVIDER_REASON = "No API key configured"


class CredibilityService:
    """Service for assessing content credibility.

    Asks the hosted model first and falls back to the keyword heuristic on
    any failure. ``analyze`` always returns a result.
    """

    def __init__(self, ai_provider: Optional[AIProvider] = None, rng: Optional[random.Random] = None):
        """Initialize the service.

        Args:
            ai_provider: Hosted model provider (None means fallback mode only)
            rng: Random source for the synthesized statistics
        """
        self.ai = ai_provider
        self._rng = rng
        logger.info("🔧 CredibilityService initialized")

    @property
    def remote_available(self) -> bool:
        """Check if a hosted model provider is configured and ready."""
        return self.ai is not None and self.ai.is_available

    async def analyze(self, request: AnalysisRequest, request_id: Optional[str] = None) -> AnalysisResult:
        """Assess the credibility of a validated request.

        Args:
            request: Validated analysis request
            request_id: Correlation token to stamp on the result

        Returns:
            Analysis result from the model, or from the heuristic fallback
        """
        logger.info(f"🔍 Requesting assessment for {request.kind.value}: {request.content[:100]}...")
        outcome = await self._request_remote(request.content)

        if isinstance(outcome, RemoteSuccess):
            try:
                result = self._interpret_remote(outcome, request_id)
                logger.info(f"✅ Remote assessment complete: confidence={result.confidence}")
                return result
            except Exception as e:
                logger.error(f"❌ Could not interpret model response: {e}", exc_info=True)
                outcome = RemoteFailure(reason=f"Could not interpret model response: {e}")

        logger.warning(f"⚠️ Remote assessment unavailable ({outcome.reason}) - using fallback mode")
        result = self._interpret_fallback(request, outcome.reason, request_id)
        logger.info(f"🎭 Fallback assessment complete: confidence={result.confidence}")
        return result

    async def _request_remote(self, content: str) -> RemoteOutcome:
        if self.ai is None:
            return RemoteFailure(reason=NO_PROVIDER_REASON)
        try:
            outcome = await self.ai.request_assessment(content)
        except Exception as e:
            logger.error(f"❌ AI provider raised instead of reporting failure: {e}")
            return RemoteFailure(reason=str(e) or type(e).__name__)
        if not isinstance(outcome, (RemoteSuccess, RemoteFailure)):
            return RemoteFailure(reason=f"Unexpected provider outcome: {type(outcome).__name__}")
        return outcome

    def _interpret_remote(self, outcome: RemoteSuccess, request_id: Optional[str]) -> AnalysisResult:
        confidence = extract_score(outcome.narrative)
        stats = synthesize_stats(confidence, used_remote_model=True, rng=self._rng)
        provider = self.ai.provider_name
        model = self.ai.model

        fields = dict(
            confidence=confidence,
            narrative=remote_narrative(outcome.narrative, model, provider),
            source_stats=stats.source_stats,
            fact_check_stats=stats.fact_check_stats,
            issues=stats.issues,
            used_remote_model=True,
            source=f"{provider} - Real API",
            model=model,
        )
        if request_id:
            fields["request_id"] = request_id
        return AnalysisResult(**fields)

    def _interpret_fallback(
        self,
        request: AnalysisRequest,
        reason: str,
        request_id: Optional[str],
    ) -> AnalysisResult:
        confidence = estimate_heuristic_credibility(request.content)
        stats = synthesize_stats(confidence, used_remote_model=False, rng=self._rng)

        if "api key" in reason.lower():
            notice = "🤖 Add a Groq API key for real AI analysis!"
        else:
            notice = "Groq AI analysis failed. Using fallback mode."

        fields = dict(
            confidence=confidence,
            narrative=fallback_narrative(confidence),
            source_stats=stats.source_stats,
            fact_check_stats=stats.fact_check_stats,
            issues=stats.issues,
            used_remote_model=False,
            source="Pattern Analysis (fallback)",
            notice=notice,
        )
        if request_id:
            fields["request_id"] = request_id
        return AnalysisResult(**fields)
