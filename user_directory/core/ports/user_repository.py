# user_directory/core/ports/user_repository.py
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Protocol

from user_directory.core.domain.user import User


# --- Storage errors -----------------------------------------------------------

class StorageError(Exception):
    """Base class for failures raised by a storage adapter."""


class UniqueViolationError(StorageError):
    """A write was rejected by a uniqueness constraint in the store."""

    def __init__(self, message: str, constraint: Optional[str] = None):
        super().__init__(message)
        self.constraint = constraint


class StorageUnavailableError(StorageError):
    """The store could not be reached; safe to retry idempotent reads."""


# --- Predicates ---------------------------------------------------------------

@dataclass(frozen=True)
class UserPredicate:
    """
    Conjunction of equality / null checks used to filter users.

    ``alive=True`` adds ``deleted_at IS NULL``; every predicate the directory
    service issues keeps it set.
    """

    id: Optional[str] = None
    email: Optional[str] = None
    is_active: Optional[bool] = None
    alive: bool = True

    @classmethod
    def by_id(cls, user_id: str) -> "UserPredicate":
        return cls(id=user_id)

    @classmethod
    def by_email(cls, email: str) -> "UserPredicate":
        return cls(email=email)

    @classmethod
    def listable(cls) -> "UserPredicate":
        return cls(is_active=True)


# --- Port ---------------------------------------------------------------------

class IUserRepository(Protocol):
    """
    Port for User persistence.
    Implementations: SqlAlchemyUserRepository (relational store).
    """

    def find_one(self, predicate: UserPredicate) -> Optional[User]:
        """Returns the first user matching the predicate, or None."""
        ...

    def find_page(self, predicate: UserPredicate, limit: int, offset: int) -> List[User]:
        """Returns a page of matching users in insertion order."""
        ...

    def count(self, predicate: UserPredicate) -> int:
        """Counts all users matching the predicate (not just one page)."""
        ...

    def insert(self, user: User) -> User:
        """
        Persists a new user and returns the stored state.

        Raises:
            UniqueViolationError: if the store rejects a duplicate email.
        """
        ...

    def update_fields(
        self,
        user_id: str,
        fields: Mapping[str, Any],
        predicate: Optional[UserPredicate] = None,
    ) -> Optional[User]:
        """
        Applies a partial field update to the row with ``user_id``.

        When ``predicate`` is given the row must also match it. Returns the
        updated user, or None when no row matched.
        """
        ...

    def health_check(self) -> bool:
        """Returns True if the underlying storage is accessible."""
        ...
