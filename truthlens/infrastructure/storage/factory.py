"""Configuration and factory for history storage."""

import logging
import os

from pydantic import BaseModel

from ...domain.ports.history_store import HistoryStore
from .json_store import JsonFileHistoryStore
from .memory_store import InMemoryHistoryStore

logger = logging.getLogger(__name__)


class StorageConfig(BaseModel):
    """Configuration for the local history store."""

    backend: str = "json"  # 'json' or 'memory'
    history_dir: str = "./data/history"

    @classmethod
    def from_env(cls) -> "StorageConfig":
        """Create configuration from environment variables."""
        return cls(
            backend=os.getenv("TRUTHLENS_HISTORY_BACKEND", "json").lower(),
            history_dir=os.getenv("TRUTHLENS_HISTORY_DIR", "./data/history"),
        )


def create_history_store(config: StorageConfig) -> HistoryStore:
    """Create the history store selected by the configuration.

    Raises:
        ValueError: If the backend is unknown
    """
    if config.backend == "memory":
        logger.info("🧠 Using in-memory history store")
        return InMemoryHistoryStore()
    if config.backend == "json":
        logger.info(f"📁 Using JSON history store at {config.history_dir}")
        return JsonFileHistoryStore(config.history_dir)
    raise ValueError(f"Unknown history backend '{config.backend}'")
