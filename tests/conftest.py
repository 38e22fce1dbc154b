"""Test configuration and common fixtures."""

import random
from typing import Callable

import pytest

from truthlens.domain.models.analysis import AnalysisResult, FactCheckStats, SourceStats
from truthlens.domain.models.session import AppState
from truthlens.domain.services.history_service import HistoryService
from truthlens.domain.services.session_service import SessionService
from truthlens.infrastructure.storage.memory_store import InMemoryHistoryStore


@pytest.fixture
def rng() -> random.Random:
    """Provide a seeded random source for reproducible statistics."""
    return random.Random(1234)


@pytest.fixture
def make_result() -> Callable[..., AnalysisResult]:
    """Provide a builder for analysis results."""

    def _make(confidence: int = 75, used_remote_model: bool = True, **overrides) -> AnalysisResult:
        fields = dict(
            confidence=confidence,
            narrative=f"Credibility Score: {confidence}/100",
            source_stats=SourceStats(reliable_count=9, questionable_count=2, total_checked=14),
            fact_check_stats=FactCheckStats(verified=5, conflicting=0, unverified=1),
            issues=["✅ High content credibility confirmed", f"🎯 AI Confidence Level: {confidence}%"],
            used_remote_model=used_remote_model,
            source="Groq AI - Real API" if used_remote_model else "Pattern Analysis (fallback)",
        )
        fields.update(overrides)
        return AnalysisResult(**fields)

    return _make


@pytest.fixture
def history_store() -> InMemoryHistoryStore:
    """Provide an empty in-memory history store."""
    return InMemoryHistoryStore()


@pytest.fixture
def app_state() -> AppState:
    """Provide a fresh application state."""
    return AppState()


@pytest.fixture
def session_service(app_state: AppState, history_store: InMemoryHistoryStore) -> SessionService:
    """Provide a session service over the in-memory store."""
    return SessionService(app_state, history_store)


@pytest.fixture
def history_service(
    app_state: AppState,
    history_store: InMemoryHistoryStore,
    session_service: SessionService,
) -> HistoryService:
    """Provide a history service over the in-memory store."""
    return HistoryService(app_state, history_store, session_service)
