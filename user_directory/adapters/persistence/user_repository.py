# user_directory/adapters/persistence/user_repository.py

from __future__ import annotations

from typing import Any, Callable, List, Mapping, Optional, TypeVar

import structlog
from sqlalchemy import ColumnElement, Select, func, select, text, update
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from user_directory.adapters.persistence.models import UserRecord
from user_directory.adapters.persistence.session import db_session
from user_directory.core.domain.user import User
from user_directory.core.ports.user_repository import (
    IUserRepository,
    StorageError,
    StorageUnavailableError,
    UniqueViolationError,
    UserPredicate,
)

logger = structlog.get_logger()

T = TypeVar("T")

# Column names a caller may pass to ``update_fields``.
_UPDATABLE_FIELDS = frozenset({"email", "name", "is_active", "updated_at", "deleted_at"})


class SqlAlchemyUserRepository(IUserRepository):
    """
    Relational implementation of the IUserRepository port.

    Each call runs in its own short-lived session and transaction, so one
    repository instance can be shared by concurrent requests.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _conditions(predicate: UserPredicate) -> List[ColumnElement[bool]]:
        clauses: List[ColumnElement[bool]] = []
        if predicate.id is not None:
            clauses.append(UserRecord.id == predicate.id)
        if predicate.email is not None:
            clauses.append(UserRecord.email == predicate.email)
        if predicate.is_active is not None:
            clauses.append(UserRecord.is_active == predicate.is_active)
        if predicate.alive:
            clauses.append(UserRecord.deleted_at.is_(None))
        return clauses

    def _apply_predicate(self, stmt: Select[Any], predicate: UserPredicate) -> Select[Any]:
        clauses = self._conditions(predicate)
        return stmt.where(*clauses) if clauses else stmt

    def _run(self, operation: str, func: Callable[[Session], T]) -> T:
        """Runs ``func`` in a transaction and maps driver errors onto the port's errors."""
        try:
            with db_session(self._session_factory) as db:
                return func(db)
        except IntegrityError as exc:
            message = str(exc.orig) if exc.orig is not None else str(exc)
            if "unique" in message.lower() or "duplicate" in message.lower():
                raise UniqueViolationError(message, constraint="uq_users_email_alive") from exc
            raise StorageError(f"{operation}: integrity error") from exc
        except OperationalError as exc:
            logger.warning("storage_unavailable", operation=operation, error=str(exc))
            raise StorageUnavailableError(f"{operation}: storage unavailable") from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"{operation}: {exc.__class__.__name__}") from exc

    @staticmethod
    def _to_domain(record: UserRecord) -> User:
        return User(
            id=record.id,
            email=record.email,
            name=record.name,
            is_active=record.is_active,
            created_at=record.created_at,
            updated_at=record.updated_at,
            deleted_at=record.deleted_at,
        )

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def find_one(self, predicate: UserPredicate) -> Optional[User]:
        def _query(db: Session) -> Optional[User]:
            stmt = self._apply_predicate(select(UserRecord), predicate)
            stmt = stmt.order_by(UserRecord.seq).limit(1)
            record = db.execute(stmt).scalar_one_or_none()
            return self._to_domain(record) if record is not None else None

        return self._run("find_one", _query)

    def find_page(self, predicate: UserPredicate, limit: int, offset: int) -> List[User]:
        def _query(db: Session) -> List[User]:
            stmt = self._apply_predicate(select(UserRecord), predicate)
            stmt = stmt.order_by(UserRecord.seq).offset(offset).limit(limit)
            return [self._to_domain(r) for r in db.execute(stmt).scalars().all()]

        return self._run("find_page", _query)

    def count(self, predicate: UserPredicate) -> int:
        def _query(db: Session) -> int:
            stmt = self._apply_predicate(select(func.count()).select_from(UserRecord), predicate)
            return int(db.execute(stmt).scalar_one())

        return self._run("count", _query)

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def insert(self, user: User) -> User:
        def _write(db: Session) -> User:
            record = UserRecord(
                id=user.id,
                email=user.email,
                name=user.name,
                is_active=user.is_active,
                created_at=user.created_at,
                updated_at=user.updated_at,
                deleted_at=user.deleted_at,
            )
            db.add(record)
            db.flush()
            return self._to_domain(record)

        return self._run("insert", _write)

    def update_fields(
        self,
        user_id: str,
        fields: Mapping[str, Any],
        predicate: Optional[UserPredicate] = None,
    ) -> Optional[User]:
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")

        clauses = [UserRecord.id == user_id]
        clauses.extend(self._conditions(predicate or UserPredicate(alive=False)))

        def _write(db: Session) -> Optional[User]:
            result = db.execute(
                update(UserRecord)
                .where(*clauses)
                .values(**dict(fields))
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                return None

            record = db.execute(
                select(UserRecord).where(UserRecord.id == user_id)
            ).scalar_one()
            return self._to_domain(record)

        return self._run("update_fields", _write)

    def health_check(self) -> bool:
        try:
            self._run("health_check", lambda db: db.execute(text("SELECT 1")).scalar_one())
        except StorageError:
            return False
        return True
