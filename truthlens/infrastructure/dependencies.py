"""Dependency injection configuration for hexagonal architecture."""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from ..domain.models.session import AppState
from ..domain.ports.ai_provider import AIProvider
from ..domain.services.credibility_service import CredibilityService
from ..domain.services.history_service import HistoryService
from ..domain.services.session_service import SessionService
from .ai.factory import AIProviderFactory
from .storage.factory import StorageConfig, create_history_store

# Load environment variables from .env file if it exists
load_dotenv()

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Service container for dependency injection."""

    def __init__(self, ai_factory: Optional[AIProviderFactory] = None):
        """Initialize service container."""
        self._services: Dict[str, Any] = {}
        self.ai_factory = ai_factory or AIProviderFactory()
        self._setup_services()

    async def _setup_ai_provider(self) -> Optional[AIProvider]:
        """Setup the AI provider for credibility assessment."""
        try:
            logger.info("🤖 Setting up AI provider...")
            ai_provider = self.ai_factory.get_provider("groq")
            if ai_provider is None:
                logger.info("🔨 Creating new AI provider...")
                ai_provider = await self.ai_factory.create_provider("groq")
            if not ai_provider.is_available:
                logger.warning("⚠️ AI provider not available - CredibilityService will use fallback mode")
                return None
            logger.info("✅ AI provider ready")
            return ai_provider
        except Exception as e:
            logger.warning(f"⚠️ Failed to setup AI provider: {e}")
            logger.info("🎭 CredibilityService will use fallback mode")
            return None

    def _setup_services(self):
        """Setup all services and their dependencies."""
        logger.info("🔧 Setting up service container...")

        # Infrastructure adapters
        history_store = create_history_store(StorageConfig.from_env())

        # Domain state and services
        app_state = AppState()
        session_service = SessionService(app_state, history_store)
        history_service = HistoryService(app_state, history_store, session_service)
        session_service.restore()

        # Note: CredibilityService will be created lazily with its provider
        self._services = {
            'app_state': app_state,
            'history_store': history_store,
            'session_service': session_service,
            'history_service': history_service,
            'credibility_service': None,
        }

        logger.info("✅ Service container setup completed")

    async def _ensure_credibility_service(self) -> CredibilityService:
        """Ensure credibility service is created with its provider."""
        if self._services['credibility_service'] is None:
            logger.info("🔧 Creating CredibilityService...")
            ai_provider = await self._setup_ai_provider()
            self._services['credibility_service'] = CredibilityService(ai_provider)
            logger.info("✅ CredibilityService created")

        return self._services['credibility_service']

    def get(self, service_name: str) -> Any:
        """Get a service by name.

        Args:
            service_name: Name of the service

        Returns:
            Service instance

        Raises:
            KeyError: If service not found
        """
        if service_name not in self._services:
            raise KeyError(f"Service '{service_name}' not found")
        return self._services[service_name]

    def get_app_state(self) -> AppState:
        """Get the application state."""
        return self.get('app_state')

    def get_session_service(self) -> SessionService:
        """Get session service."""
        return self.get('session_service')

    def get_history_service(self) -> HistoryService:
        """Get history service."""
        return self.get('history_service')

    async def get_credibility_service(self) -> CredibilityService:
        """Get credibility service with its provider."""
        return await self._ensure_credibility_service()

    async def shutdown(self) -> None:
        """Shut down providers owned by the container."""
        await self.ai_factory.shutdown()
        self._services['credibility_service'] = None


# Global service container instance
@lru_cache()
def get_service_container() -> ServiceContainer:
    """Get global service container instance.

    Returns:
        Service container instance
    """
    return ServiceContainer()


# Convenience functions for FastAPI dependency injection
def get_app_state() -> AppState:
    """FastAPI dependency for the application state."""
    return get_service_container().get_app_state()


def get_session_service() -> SessionService:
    """FastAPI dependency for session service."""
    return get_service_container().get_session_service()


def get_history_service() -> HistoryService:
    """FastAPI dependency for history service."""
    return get_service_container().get_history_service()


async def get_credibility_service() -> CredibilityService:
    """FastAPI dependency for credibility service."""
    container = get_service_container()
    return await container.get_credibility_service()
