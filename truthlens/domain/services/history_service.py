"""Service for saving, browsing and deleting analysis history."""

import logging
from typing import List, Optional

from ..models.analysis import AnalysisRequest, AnalysisResult, ContentKind
from ..models.session import AppState, HistoryEntry
from ..ports.history_store import HistoryStore
from .session_service import SessionService

logger = logging.getLogger(__name__)

PREVIEW_LENGTH = 100


class HistoryEntryNotFoundError(LookupError):
    """Raised when a history entry id is unknown."""


class NoCurrentAnalysisError(RuntimeError):
    """Raised when an operation needs a completed analysis and there is none."""


def generate_title(kind: ContentKind, result: AnalysisResult) -> str:
    """Build the display title of a history entry."""
    ai_label = "🤖 AI-Powered" if result.used_remote_model else "🎭 Demo"
    return f"{kind.value.capitalize()} Analysis ({ai_label}) - {result.confidence}% Credible"


def generate_preview(content: str) -> str:
    """Shorten content to a one-glance preview."""
    if len(content) > PREVIEW_LENGTH:
        return content[:PREVIEW_LENGTH] + "..."
    return content


def confidence_badge(confidence: int) -> str:
    """Get the badge class of a saved score."""
    if confidence >= 70:
        return "high"
    if confidence >= 40:
        return "medium"
    return "low"


class HistoryService:
    """Service for the logged-in user's analysis history."""

    def __init__(self, state: AppState, store: HistoryStore, sessions: SessionService):
        """Initialize the service.

        Args:
            state: Application state owned by the controller
            store: Local session and history store
            sessions: Session service used to require a logged-in user
        """
        self._state = state
        self._store = store
        self._sessions = sessions

    def save_current(self) -> HistoryEntry:
        """Save the current analysis at the top of the history.

        Raises:
            NotAuthenticatedError: If nobody is logged in
            NoCurrentAnalysisError: If there is no completed analysis
        """
        user = self._sessions.require_user()
        request, result = self._state.current_request, self._state.current_result
        if request is None or result is None:
            raise NoCurrentAnalysisError("Please complete an analysis first")

        entry = HistoryEntry(
            kind=request.kind,
            title=generate_title(request.kind, result),
            preview=generate_preview(request.content),
            content=request.content,
            confidence=result.confidence,
            result=result,
        )
        self._state.history.insert(0, entry)
        self._store.save_history(user.email, self._state.history)
        logger.info(f"💾 Analysis saved to history: {entry.title}")
        return entry

    def list_entries(self, search: Optional[str] = None, kind: Optional[str] = None) -> List[HistoryEntry]:
        """List history entries matching a search term and kind filter.

        Args:
            search: Case-insensitive term matched against title and content
            kind: "all", "text", "url" or "video" (None means all)

        Returns:
            Matching entries, newest first
        """
        self._sessions.require_user()
        term = (search or "").lower()
        kind = kind or "all"

        return [
            entry for entry in self._state.history
            if (not term or term in entry.title.lower() or term in entry.content.lower())
            and (kind == "all" or entry.kind.value == kind)
        ]

    def get_entry(self, entry_id: str) -> HistoryEntry:
        """Get a history entry by id.

        Raises:
            HistoryEntryNotFoundError: If the id is unknown
        """
        self._sessions.require_user()
        for entry in self._state.history:
            if entry.id == entry_id:
                return entry
        raise HistoryEntryNotFoundError(f"History entry '{entry_id}' not found")

    def view_entry(self, entry_id: str) -> HistoryEntry:
        """Make a saved analysis the current one again."""
        entry = self.get_entry(entry_id)
        request = AnalysisRequest(content=entry.content, kind=entry.kind)
        self._state.restore(request, entry.result)
        logger.info(f"👁️ Viewing history item: {entry.title}")
        return entry

    def delete_entry(self, entry_id: str) -> None:
        """Delete a history entry.

        Raises:
            HistoryEntryNotFoundError: If the id is unknown
        """
        user = self._sessions.require_user()
        entry = self.get_entry(entry_id)
        self._state.history = [e for e in self._state.history if e.id != entry.id]
        self._store.save_history(user.email, self._state.history)
        logger.info(f"🗑️ Analysis deleted: {entry.title}")

    def clear(self) -> None:
        """Delete all history of the logged-in user."""
        user = self._sessions.require_user()
        self._state.history = []
        self._store.clear_history(user.email)
        logger.info("🧹 History cleared")
