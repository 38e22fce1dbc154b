"""JSON-file implementation of the history store port."""

import hashlib
import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from ...domain.models.session import HistoryEntry, UserProfile
from ...domain.ports.history_store import HistoryStore, history_key

logger = logging.getLogger(__name__)

SESSION_FILE = "truthlens_user.json"


class JsonFileHistoryStore(HistoryStore):
    """History store keeping one JSON file per user in a directory.

    Layout::

        <directory>/truthlens_user.json              remembered user
        <directory>/truthlens_history_<key>.json     history of one user
    """

    def __init__(self, directory: str):
        """Initialize the store.

        Args:
            directory: Directory holding the JSON files (created if missing)
        """
        self._directory = Path(directory)
        self._directory.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        """Get the storage directory."""
        return self._directory

    def _history_path(self, user_email: str) -> Path:
        key = hashlib.sha256(history_key(user_email).encode("utf-8")).hexdigest()[:16]
        return self._directory / f"truthlens_history_{key}.json"

    def load_session(self) -> Optional[UserProfile]:
        path = self._directory / SESSION_FILE
        if not path.exists():
            return None
        try:
            return UserProfile.model_validate_json(path.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, ValidationError) as e:
            logger.warning(f"⚠️ Ignoring unreadable session file {path}: {e}")
            return None

    def save_session(self, user: UserProfile) -> None:
        (self._directory / SESSION_FILE).write_text(user.model_dump_json(indent=2), encoding="utf-8")

    def clear_session(self) -> None:
        (self._directory / SESSION_FILE).unlink(missing_ok=True)

    def load_history(self, user_email: str) -> List[HistoryEntry]:
        path = self._history_path(user_email)
        if not path.exists():
            return []
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise TypeError(f"expected a list of entries, got {type(raw).__name__}")
            return [HistoryEntry.model_validate(item) for item in raw]
        except (UnicodeDecodeError, json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning(f"⚠️ Ignoring unreadable history file {path}: {e}")
            return []

    def save_history(self, user_email: str, entries: List[HistoryEntry]) -> None:
        data = [entry.model_dump(mode="json") for entry in entries]
        self._history_path(user_email).write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug(f"💾 Saved {len(entries)} history items to {self._history_path(user_email)}")

    def clear_history(self, user_email: str) -> None:
        self._history_path(user_email).unlink(missing_ok=True)
