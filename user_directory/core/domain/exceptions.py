# user_directory/core/domain/exceptions.py
from typing import Any, Mapping, Optional


class DomainError(Exception):
    """Base class for all domain-level exceptions."""

    code = "domain_error"

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        self.message = message
        self.details = dict(details) if details else None
        super().__init__(self.message)


# --- Validation Errors ---

class ValidationError(DomainError):
    """Raised when input is malformed or missing. The caller must fix it; no retry."""

    code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


# --- Entity Not Found Errors ---

class NotFoundError(DomainError):
    """Raised when a referenced record does not exist or is logically deleted."""

    code = "not_found"


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str):
        super().__init__(f"User with ID {user_id} not found")
        self.user_id = user_id


# --- Uniqueness Errors ---

class AlreadyExistsError(DomainError):
    """Raised on a uniqueness violation. The caller must change the input."""

    code = "already_exists"


class EmailAlreadyExistsError(AlreadyExistsError):
    def __init__(self, email: str):
        super().__init__(f"User with email '{email}' already exists", details={"field": "email"})
        self.email = email


# --- Process/State Errors ---

class InternalError(DomainError):
    """
    Raised for unexpected storage or runtime failures.
    Idempotent reads may be retried; writes require caller judgment.
    """

    code = "internal_error"
