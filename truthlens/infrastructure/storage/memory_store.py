"""In-memory implementation of the history store port."""

from typing import Dict, List, Optional

from ...domain.models.session import HistoryEntry, UserProfile
from ...domain.ports.history_store import HistoryStore, history_key


class InMemoryHistoryStore(HistoryStore):
    """History store that lives for the lifetime of the process."""

    def __init__(self):
        """Initialize an empty store."""
        self._session: Optional[UserProfile] = None
        self._histories: Dict[str, List[HistoryEntry]] = {}

    def load_session(self) -> Optional[UserProfile]:
        return self._session

    def save_session(self, user: UserProfile) -> None:
        self._session = user

    def clear_session(self) -> None:
        self._session = None

    def load_history(self, user_email: str) -> List[HistoryEntry]:
        return list(self._histories.get(history_key(user_email), []))

    def save_history(self, user_email: str, entries: List[HistoryEntry]) -> None:
        self._histories[history_key(user_email)] = list(entries)

    def clear_history(self, user_email: str) -> None:
        self._histories.pop(history_key(user_email), None)
