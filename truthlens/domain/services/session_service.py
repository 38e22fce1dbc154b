"""Service for the locally remembered user session."""

import logging
from typing import Optional

from ..models.session import AppState, UserProfile
from ..ports.history_store import HistoryStore

logger = logging.getLogger(__name__)


class AuthenticationError(ValueError):
    """Raised when login or signup details are incomplete or inconsistent."""


class NotAuthenticatedError(PermissionError):
    """Raised when an operation requires a logged-in user."""


class SessionService:
    """Service for local-only login, signup and logout.

    There is no real verification: credentials only need to be present
    (and confirmed on signup). Passwords are never stored.
    """

    def __init__(self, state: AppState, store: HistoryStore):
        """Initialize the service.

        Args:
            state: Application state owned by the controller
            store: Local session and history store
        """
        self._state = state
        self._store = store

    @property
    def current_user(self) -> Optional[UserProfile]:
        """Get the logged-in user."""
        return self._state.current_user

    def require_user(self) -> UserProfile:
        """Get the logged-in user or raise NotAuthenticatedError."""
        if self._state.current_user is None:
            raise NotAuthenticatedError("Please login first")
        return self._state.current_user

    def restore(self) -> Optional[UserProfile]:
        """Restore the remembered user and their history from the store."""
        user = self._store.load_session()
        if user is None:
            return None
        self._state.current_user = user
        self._state.history = self._store.load_history(user.email)
        logger.info(f"🔓 Restored session for {user.name} ({len(self._state.history)} history items)")
        return user

    def login(self, email: str, password: str) -> UserProfile:
        """Log a user in.

        Args:
            email: User email
            password: User password (checked for presence only)

        Returns:
            The logged-in user

        Raises:
            AuthenticationError: If a field is missing
        """
        if not email or not password:
            raise AuthenticationError("Please fill in all fields")

        user = UserProfile(name=email.split("@")[0], email=email)
        self._start_session(user)
        logger.info(f"✅ User logged in: {user.name}")
        return user

    def signup(self, name: str, email: str, password: str, confirm_password: str) -> UserProfile:
        """Create a local user and log them in.

        Raises:
            AuthenticationError: If a field is missing or passwords differ
        """
        if not name or not email or not password or not confirm_password:
            raise AuthenticationError("Please fill in all fields")
        if password != confirm_password:
            raise AuthenticationError("Passwords do not match")

        user = UserProfile(name=name, email=email)
        self._start_session(user)
        logger.info(f"✅ User signed up: {user.name}")
        return user

    def logout(self) -> None:
        """Log the current user out and drop their in-memory history."""
        user = self._state.current_user
        self._state.current_user = None
        self._state.history = []
        self._store.clear_session()
        if user:
            logger.info(f"👋 User logged out: {user.name}")

    def _start_session(self, user: UserProfile) -> None:
        self._state.current_user = user
        self._state.history = self._store.load_history(user.email)
        self._store.save_session(user)
