# user_directory/core/use_cases/user_directory.py
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, TypeVar

import structlog

from user_directory.core.domain.exceptions import (
    DomainError,
    EmailAlreadyExistsError,
    InternalError,
    UserNotFoundError,
)
from user_directory.core.domain.user import User, normalize_email, utc_now
from user_directory.core.ports.user_repository import (
    IUserRepository,
    StorageUnavailableError,
    UniqueViolationError,
    UserPredicate,
)
from user_directory.shared.resilience import ReadRetryPolicy
from user_directory.shared.telemetry import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

T = TypeVar("T")


@dataclass
class UserPatch:
    """Partial update: fields left as None are not touched."""

    email: Optional[str] = None
    name: Optional[str] = None

    def is_empty(self) -> bool:
        return self.email is None and self.name is None


@dataclass
class UserPage:
    users: List[User] = field(default_factory=list)
    total: int = 0
    limit: int = 10
    offset: int = 0


class UserDirectoryService:
    """
    Use Case: the directory of user accounts.

    Responsibilities:
    1. Enforces cross-record invariants (email uniqueness, existence) before any write.
    2. Delegates field validation and state transitions to the User aggregate.
    3. Persists through the IUserRepository port; it is the only write path.
    4. Translates storage failures into domain errors.

    Uniqueness checks are check-then-write and not atomic with the write; the
    store's unique index is the authoritative guard and its violation is
    reported as EmailAlreadyExistsError as well.
    """

    def __init__(self, repository: IUserRepository, read_retry: Optional[ReadRetryPolicy] = None):
        self.repository = repository
        self.read_retry = read_retry or ReadRetryPolicy(retry_on=(StorageUnavailableError,))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_by_id(self, user_id: str) -> User:
        with tracer.start_as_current_span("use_case.get_user") as span:
            span.set_attribute("app.user_id", user_id)
            user = self._guard(
                "get_user",
                lambda: self.read_retry.call(self.repository.find_one, UserPredicate.by_id(user_id)),
            )
            if user is None:
                raise UserNotFoundError(user_id)
            return user

    def list(self, limit: int = 10, offset: int = 0) -> UserPage:
        """
        Returns one page of active users plus the total over the same filter.
        The total comes from its own count query, never from the page length.
        """
        with tracer.start_as_current_span("use_case.list_users") as span:
            span.set_attribute("app.limit", limit)
            span.set_attribute("app.offset", offset)
            predicate = UserPredicate.listable()

            def _read() -> UserPage:
                users = self.read_retry.call(self.repository.find_page, predicate, limit, offset)
                total = self.read_retry.call(self.repository.count, predicate)
                return UserPage(users=users, total=total, limit=limit, offset=offset)

            return self._guard("list_users", _read)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, email: str, name: str) -> User:
        with tracer.start_as_current_span("use_case.create_user"):
            # Aggregate validation runs before any storage access.
            user = User.create(email, name)

            existing = self._guard(
                "create_user",
                lambda: self.repository.find_one(UserPredicate.by_email(user.email)),
            )
            if existing is not None:
                logger.info("user_create_rejected", reason="email_taken")
                raise EmailAlreadyExistsError(user.email)

            stored = self._guard("create_user", lambda: self.repository.insert(user), email=user.email)
            logger.info("user_created", user_id=stored.id)
            return stored

    def update(self, user_id: str, patch: UserPatch) -> User:
        with tracer.start_as_current_span("use_case.update_user") as span:
            span.set_attribute("app.user_id", user_id)

            user = self._guard(
                "update_user",
                lambda: self.repository.find_one(UserPredicate.by_id(user_id)),
            )
            if user is None:
                raise UserNotFoundError(user_id)

            if patch.is_empty():
                return user

            changes: Dict[str, Any] = {}

            if patch.name is not None:
                user.update_name(patch.name)
                changes["name"] = user.name

            if patch.email is not None:
                current_email = user.email
                user.update_email(patch.email)
                if user.email != current_email:
                    taken = self._guard(
                        "update_user",
                        lambda: self.repository.find_one(UserPredicate.by_email(user.email)),
                    )
                    if taken is not None and taken.id != user.id:
                        logger.info("user_update_rejected", user_id=user_id, reason="email_taken")
                        raise EmailAlreadyExistsError(user.email)
                    changes["email"] = user.email

            changes["updated_at"] = user.updated_at or utc_now()

            updated = self._guard(
                "update_user",
                lambda: self.repository.update_fields(user_id, changes, UserPredicate.by_id(user_id)),
                email=changes.get("email"),
            )
            if updated is None:
                # Deleted between the existence check and the write.
                raise UserNotFoundError(user_id)

            logger.info("user_updated", user_id=user_id, fields=sorted(changes))
            return updated

    def delete(self, user_id: str) -> None:
        with tracer.start_as_current_span("use_case.delete_user") as span:
            span.set_attribute("app.user_id", user_id)

            user = self._guard(
                "delete_user",
                lambda: self.repository.find_one(UserPredicate.by_id(user_id)),
            )
            if user is None:
                raise UserNotFoundError(user_id)

            user.mark_deleted()
            changes = {
                "is_active": user.is_active,
                "deleted_at": user.deleted_at,
                "updated_at": user.updated_at,
            }
            deleted = self._guard(
                "delete_user",
                lambda: self.repository.update_fields(user_id, changes, UserPredicate.by_id(user_id)),
            )
            if deleted is None:
                raise UserNotFoundError(user_id)

            logger.info("user_deleted", user_id=user_id)

    # ------------------------------------------------------------------
    # Error translation
    # ------------------------------------------------------------------

    def _guard(self, operation: str, func: Callable[[], T], email: Optional[str] = None) -> T:
        try:
            return func()
        except DomainError:
            raise
        except UniqueViolationError as exc:
            if email:
                logger.info(f"{operation}_rejected", reason="unique_violation", constraint=exc.constraint)
                raise EmailAlreadyExistsError(email) from exc
            logger.error(f"{operation}_failed", error=str(exc), exc_info=True)
            raise InternalError(f"Unexpected failure during {operation}") from exc
        except Exception as exc:
            logger.error(f"{operation}_failed", error=str(exc), exc_info=True)
            raise InternalError(f"Unexpected failure during {operation}") from exc
