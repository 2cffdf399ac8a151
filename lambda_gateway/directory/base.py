"""
Base directory interface for the Lambda Gateway backend.

Purpose:
    Define a small, stable contract for owning user records so the
    in-memory directory can later be replaced (DynamoDB, SQL) without
    touching the request handlers.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    They are annotated with `# pragma: no cover`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class UserRecord:
    """A user profile. Immutable once created."""
    id: str
    username: str
    email: str
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape used by the HTTP API (camelCase `createdAt`)."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "createdAt": self.created_at,
        }


def default_email(username: str) -> str:
    return f"{username}@example.com"


class BaseUserDirectory(ABC):
    """Abstract base class for user directories."""

    @abstractmethod  # pragma: no cover
    def create_user(self, username: str, email: Optional[str] = None) -> UserRecord:
        """
        Create and store a new record with a fresh id.

        An absent or empty email defaults to `{username}@example.com`.

        Returns:
            UserRecord: The stored record.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def list_users(self) -> List[UserRecord]:
        """Return all records in insertion order."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def delete_user(self, user_id: str) -> bool:
        """
        Remove the record with the given id.

        Returns:
            bool: True if a record was removed, False if the id is unknown.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def count(self) -> int:
        """Return the live number of records."""
        raise NotImplementedError
