"""Protocol for hosted model providers used for credibility assessment."""

from typing import Dict, Optional, Protocol

from ..models.analysis import RemoteOutcome


class AIProvider(Protocol):
    """Protocol defining the interface for hosted model providers.

    ``request_assessment`` must never raise: every failure is reported as a
    ``RemoteFailure`` outcome.
    """

    async def initialize(self) -> None:
        """Initialize the AI provider."""
        ...

    async def shutdown(self) -> None:
        """Clean up resources."""
        ...

    async def request_assessment(self, content: str) -> RemoteOutcome:
        """Ask the model for a credibility assessment of the content."""
        ...

    @property
    def provider_name(self) -> str:
        """Get the name of the AI provider."""
        ...

    @property
    def model(self) -> Optional[str]:
        """Get the model identifier used for requests."""
        ...

    @property
    def is_available(self) -> bool:
        """Check if the provider is configured and ready."""
        ...

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        ...
