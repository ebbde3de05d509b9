# user_directory/core/domain/user.py
import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from user_directory.core.domain.exceptions import ValidationError

MIN_NAME_LENGTH = 2

# Non-empty local part, an "@", and a dotted domain; no whitespace anywhere.
_EMAIL_SHAPE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _require_email_shape(email: Optional[str]) -> str:
    if not email or not _EMAIL_SHAPE.match(email.strip()):
        raise ValidationError("Invalid email format", field="email")
    return normalize_email(email)


def _require_name(name: Optional[str]) -> str:
    trimmed = (name or "").strip()
    if len(trimmed) < MIN_NAME_LENGTH:
        raise ValidationError(
            f"Name must be at least {MIN_NAME_LENGTH} characters", field="name"
        )
    return trimmed


@dataclass
class User:
    """
    The User aggregate: one account, the unit of validation and identity.

    State transitions are pure; persisting them is the directory service's job.
    ``deleted_at`` marks the record as logically absent and is never undone.
    """

    id: str
    email: str
    name: str
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def create(cls, email: str, name: str) -> "User":
        if not email or not email.strip() or not name or not name.strip():
            raise ValidationError("Email and name are required")

        return cls(
            id=str(uuid.uuid4()),
            email=_require_email_shape(email),
            name=_require_name(name),
            is_active=True,
            created_at=utc_now(),
            updated_at=None,
            deleted_at=None,
        )

    # ------------------------------------------------------------------
    # Business logic
    # ------------------------------------------------------------------

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def update_name(self, name: str) -> None:
        self.name = _require_name(name)
        self._touch()

    def update_email(self, email: str) -> None:
        self.email = _require_email_shape(email)
        self._touch()

    def deactivate(self) -> None:
        self.is_active = False

    def activate(self) -> None:
        self.is_active = True

    def mark_deleted(self, at: Optional[datetime] = None) -> None:
        """Soft delete: one-way, the row stays in storage."""
        at = at or utc_now()
        self.is_active = False
        self.deleted_at = at
        self.updated_at = at

    def _touch(self) -> None:
        self.updated_at = utc_now()
