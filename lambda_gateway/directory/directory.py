"""
UserDirectory for the Lambda Gateway backend (in-memory implementation).

Responsibilities:
    - Create user records with generated ids and default emails
    - List records in insertion order
    - Delete records by id

Design:
    - Records live in an insertion-ordered dict keyed by id.
    - One lock serializes writers; readers take it to copy a consistent view.
      Records are frozen dataclasses, so a reader never sees a half-built record.
    - Id generation is delegated to a pluggable strategy (see ids.py).
    - State is process-local and is dropped by `clear()` at shutdown.
"""

import logging
import threading
from typing import Dict, List, Optional

from .base import BaseUserDirectory, UserRecord, default_email
from .ids import BaseIdStrategy, RandomIdStrategy
from ..utils import utc_now_iso

log = logging.getLogger(__name__)

# Attempts at drawing an id not already held before giving up
MAX_ID_ATTEMPTS = 16


class UserDirectory(BaseUserDirectory):
    def __init__(self, id_strategy: Optional[BaseIdStrategy] = None):
        """
        Initialize an empty directory.

        Args:
            id_strategy (Optional[BaseIdStrategy]): Id generator; RandomIdStrategy by default.
        """
        self.id_strategy = id_strategy or RandomIdStrategy()
        self._users: Dict[str, UserRecord] = {}
        self._lock = threading.Lock()

    def _new_id(self) -> str:
        # Caller holds the lock
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self.id_strategy.generate()
            if candidate not in self._users:
                return candidate
            log.warning("User id collision on %r; drawing again", candidate)
        raise RuntimeError(f"Could not generate a unique user id after {MAX_ID_ATTEMPTS} attempts")

    def create_user(self, username: str, email: Optional[str] = None) -> UserRecord:
        """
        Create a user record.

        Rules:
            - Username uniqueness is not enforced.
            - Empty or missing email -> "{username}@example.com".
            - The returned record is the stored object itself.
        """
        with self._lock:
            record = UserRecord(
                id=self._new_id(),
                username=username,
                email=email or default_email(username),
                created_at=utc_now_iso(),
            )
            self._users[record.id] = record
        log.debug("Created user id=%s username=%s", record.id, username)
        return record

    def list_users(self) -> List[UserRecord]:
        with self._lock:
            return list(self._users.values())

    def delete_user(self, user_id: str) -> bool:
        """
        Delete a user by id.

        Returns:
            bool: True if removed, False if no such id (not an error).
        """
        with self._lock:
            removed = self._users.pop(user_id, None)
        if removed is None:
            log.debug("Delete of unknown user id=%s", user_id)
            return False
        return True

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def __len__(self) -> int:
        return self.count()

    def clear(self) -> None:
        """Drop every record (directory teardown)."""
        with self._lock:
            self._users.clear()
