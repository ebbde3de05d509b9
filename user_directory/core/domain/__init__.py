# user_directory/core/domain/__init__.py
"""
Domain Entities and Value Objects.

This package defines the User aggregate and the domain error taxonomy.
These models are devoid of any infrastructure logic.
"""

from .exceptions import (
    AlreadyExistsError,
    DomainError,
    EmailAlreadyExistsError,
    InternalError,
    NotFoundError,
    UserNotFoundError,
    ValidationError,
)
from .user import User

__all__ = [
    "User",
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "UserNotFoundError",
    "AlreadyExistsError",
    "EmailAlreadyExistsError",
    "InternalError",
]
