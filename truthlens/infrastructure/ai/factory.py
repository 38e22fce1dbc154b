"""Factory for creating and managing AI providers."""

from typing import Callable, Dict, Optional

from ...domain.ports.ai_provider import AIProvider
from .groq_adapter import GroqAdapter, GroqConfig


class AIProviderFactory:
    """Factory for creating and managing AI providers."""

    def __init__(self):
        """Initialize the factory."""
        self._providers: Dict[str, Callable[..., AIProvider]] = {}
        self._instances: Dict[str, AIProvider] = {}

        # Register default providers
        self.register_provider("groq", GroqAdapter)

    def register_provider(self, name: str, provider_class: Callable[..., AIProvider]) -> None:
        """Register a new AI provider.

        Args:
            name: Provider name
            provider_class: Provider class or factory callable
        """
        self._providers[name] = provider_class

    async def create_provider(
        self,
        name: str,
        **kwargs
    ) -> AIProvider:
        """Create and initialize a provider instance.

        Args:
            name: Provider name
            **kwargs: Provider-specific configuration

        Returns:
            Initialized provider instance

        Raises:
            ValueError: If provider not found or the configuration is invalid
        """
        if name not in self._providers:
            raise ValueError(f"Provider '{name}' not found")

        if name not in self._instances:
            # Groq settings come from the environment, overridable per call
            if name == "groq":
                config = GroqConfig(**{**GroqConfig.from_env().model_dump(), **kwargs})
                provider = self._providers[name](config=config)
            else:
                provider = self._providers[name](**kwargs)

            await provider.initialize()
            self._instances[name] = provider

        return self._instances[name]

    def get_provider(self, name: str) -> Optional[AIProvider]:
        """Get an existing provider instance.

        Args:
            name: Provider name

        Returns:
            Provider instance if exists, None otherwise
        """
        return self._instances.get(name)

    @property
    def available_providers(self) -> Dict[str, bool]:
        """Get dictionary of registered providers and their availability."""
        return {
            name: name in self._instances and self._instances[name].is_available
            for name in self._providers
        }

    async def shutdown(self) -> None:
        """Shutdown all provider instances."""
        for provider in self._instances.values():
            await provider.shutdown()
        self._instances.clear()
