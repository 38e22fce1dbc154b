"""Port interface for local session and history persistence."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.session import HistoryEntry, UserProfile


def history_key(user_email: str) -> str:
    """Normalize an email into the key a user's history is stored under."""
    return user_email.strip().lower()


class HistoryStore(ABC):
    """Abstract interface for the local store of the user session and history.

    This port plays the role browser local storage plays for a web client:
    one remembered user session plus a saved-analysis list per user.
    Concrete implementations live in the infrastructure layer.
    """

    @abstractmethod
    def load_session(self) -> Optional[UserProfile]:
        """Load the remembered user, if any."""
        pass

    @abstractmethod
    def save_session(self, user: UserProfile) -> None:
        """Remember the logged-in user."""
        pass

    @abstractmethod
    def clear_session(self) -> None:
        """Forget the remembered user."""
        pass

    @abstractmethod
    def load_history(self, user_email: str) -> List[HistoryEntry]:
        """Load a user's history, newest first.

        Args:
            user_email: Email identifying the user

        Returns:
            Saved history entries (empty if none)
        """
        pass

    @abstractmethod
    def save_history(self, user_email: str, entries: List[HistoryEntry]) -> None:
        """Replace a user's saved history.

        Args:
            user_email: Email identifying the user
            entries: Entries to persist, newest first
        """
        pass

    @abstractmethod
    def clear_history(self, user_email: str) -> None:
        """Delete all saved history of a user."""
        pass
