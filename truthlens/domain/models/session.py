"""Domain models for the user session, history entries and application state."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from .analysis import AnalysisRequest, AnalysisResult, ContentKind

logger = logging.getLogger(__name__)


class UserProfile(BaseModel):
    """Locally remembered user. No password is ever stored."""

    name: str
    email: str
    logged_in_at: datetime = Field(default_factory=datetime.utcnow)


class HistoryEntry(BaseModel):
    """A saved analysis in a user's history."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = Field(default_factory=datetime.utcnow)
    kind: ContentKind
    title: str
    preview: str
    content: str
    confidence: int = Field(..., ge=0, le=100)
    result: AnalysisResult


@dataclass
class AppState:
    """State owned by the application controller.

    Analyses are correlated by ``request_id``: only the most recently started
    analysis may become the current result, so a slow request that finishes
    after a newer one cannot overwrite it.
    """

    current_user: Optional[UserProfile] = None
    history: List[HistoryEntry] = field(default_factory=list)
    current_request: Optional[AnalysisRequest] = None
    current_result: Optional[AnalysisResult] = None
    pending_request_id: Optional[str] = None
    _pending_request: Optional[AnalysisRequest] = field(default=None, repr=False)

    @property
    def is_authenticated(self) -> bool:
        """Check if a user is logged in."""
        return self.current_user is not None

    def begin_analysis(self, request: AnalysisRequest) -> str:
        """Register a new analysis and return its correlation token."""
        request_id = uuid4().hex
        self.pending_request_id = request_id
        self._pending_request = request
        return request_id

    def complete_analysis(self, result: AnalysisResult) -> bool:
        """Install a finished result if it belongs to the latest analysis.

        Returns:
            True if the result became the current result, False if it was stale
        """
        if result.request_id != self.pending_request_id:
            logger.info(f"⏭️ Discarding stale analysis result {result.request_id}")
            return False
        self.current_request = self._pending_request
        self.current_result = result
        self.pending_request_id = None
        self._pending_request = None
        return True

    def restore(self, request: AnalysisRequest, result: AnalysisResult) -> None:
        """Show a previously saved analysis as the current one.

        Any analysis still in flight is abandoned so it cannot replace the
        restored result when it finishes.
        """
        self.current_request = request
        self.current_result = result
        self.pending_request_id = None
        self._pending_request = None

    def reset_analysis(self) -> None:
        """Forget the current analysis."""
        self.current_request = None
        self.current_result = None
        self.pending_request_id = None
        self._pending_request = None
