"""Groq implementation of the AI provider interface."""

import logging
import os
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, Field

from ...domain.models.analysis import RemoteFailure, RemoteOutcome, RemoteSuccess

logger = logging.getLogger(__name__)

ASSESSMENT_PROMPT = """You are TruthLens, an AI fact-checker. Analyze this content for credibility and misinformation.

Content to analyze: "{content}"

Please provide:
1. A credibility score from 0-100 (where 0 = completely false, 100 = completely credible)
2. Key red flags or positive indicators
3. Overall assessment

Format your response with the score clearly stated as "Credibility Score: X/100" somewhere in your response."""


class GroqConfig(BaseModel):
    """Configuration for Groq adapter."""

    api_key: str = Field(default="", description="Groq API key")
    model: str = Field(default="llama3-8b-8192", description="Model to use")
    base_url: str = Field(default="https://api.groq.com/openai/v1", description="OpenAI-compatible API root")
    temperature: float = Field(default=0.3, description="Temperature for responses")
    max_tokens: int = Field(default=1000, description="Maximum tokens per response")
    timeout: Optional[float] = Field(default=None, description="Transport timeout in seconds (None = no limit)")

    class Config:
        """Pydantic model configuration."""
        extra = "forbid"  # Reject misspelled overrides

    @classmethod
    def from_env(cls) -> "GroqConfig":
        """Create configuration from environment variables."""
        timeout = _parse_timeout(os.getenv("TRUTHLENS_TIMEOUT"))
        config = cls(
            api_key=os.getenv("GROQ_API_KEY", ""),
            model=os.getenv("TRUTHLENS_MODEL", cls.model_fields["model"].default),
            base_url=os.getenv("GROQ_BASE_URL", cls.model_fields["base_url"].default),
            timeout=timeout,
        )

        if config.api_key:
            logger.info(f"✅ Groq API key loaded: {len(config.api_key)} chars")
        else:
            logger.warning("⚠️ GROQ_API_KEY not found in environment variables - fallback mode only")
        return config


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    """Parse a timeout in seconds; invalid or non-positive values mean no limit."""
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError:
        logger.warning(f"⚠️ Ignoring invalid TRUTHLENS_TIMEOUT={value!r} - no timeout set")
        return None
    if timeout <= 0:
        logger.warning(f"⚠️ Ignoring non-positive TRUTHLENS_TIMEOUT={value!r} - no timeout set")
        return None
    return timeout


def build_prompt(content: str) -> str:
    """Build the assessment prompt for a piece of content."""
    return ASSESSMENT_PROMPT.format(content=content)


class GroqAdapter:
    """Groq implementation of the AI provider interface.

    Issues exactly one chat-completion request per assessment: no retry,
    no streaming. Failures are returned as ``RemoteFailure``.
    """

    def __init__(
        self,
        config: Optional[GroqConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            transport: Optional httpx transport (substitutable in tests)
        """
        self._config = config or GroqConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._initialized = False

    async def initialize(self) -> None:
        """Initialize the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self._config.api_key}",
                    "Content-Type": "application/json",
                },
            )
        self._initialized = True

    def build_request_body(self, content: str) -> Dict[str, Any]:
        """Build the chat-completion request body."""
        return {
            "model": self._config.model,
            "messages": [{"role": "user", "content": build_prompt(content)}],
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }

    async def request_assessment(self, content: str) -> RemoteOutcome:
        """Ask the model for a credibility assessment.

        Args:
            content: Text, URL or video link, passed as raw text

        Returns:
            RemoteSuccess with the model's text, or RemoteFailure
        """
        if not self._config.api_key:
            return RemoteFailure(reason="No API key configured")

        logger.info("🤖 Analyzing content with Groq AI...")
        try:
            if self._client is None:
                await self.initialize()

            response = await self._client.post("/chat/completions", json=self.build_request_body(content))
            logger.info(f"📡 Groq response status: {response.status_code}")

            if not response.is_success:
                logger.error(f"❌ Groq API error details: {response.text}")
                return RemoteFailure(reason=f"Groq API error: {response.status_code} - {response.text}")

            payload = response.json()
            return RemoteSuccess(
                narrative=payload["choices"][0]["message"]["content"],
                raw_payload=payload,
            )
        except Exception as e:
            logger.error(f"❌ Groq AI error: {type(e).__name__}: {e}")
            return RemoteFailure(reason=str(e) or type(e).__name__)

    async def shutdown(self) -> None:
        """Clean up resources and shut down the provider."""
        if self._client:
            await self._client.aclose()
            self._client = None
        self._initialized = False

    @property
    def provider_name(self) -> str:
        """Get the name of the AI provider."""
        return "Groq AI"

    @property
    def model(self) -> Optional[str]:
        """Get the model identifier used for requests."""
        return self._config.model

    @property
    def is_available(self) -> bool:
        """Check if the provider is configured and ready."""
        return self._initialized and self._client is not None and bool(self._config.api_key)

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        return {
            "credibility_assessment": True,
            "streaming": False,
            "url_fetching": False,
        }
