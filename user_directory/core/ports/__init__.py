# user_directory/core/ports/__init__.py
"""
Core Ports (Interfaces).

This package defines the Protocols that Infrastructure Adapters must
implement, so the Core Domain can reach storage without knowing the
implementation details.
"""

from .user_repository import (
    IUserRepository,
    StorageError,
    StorageUnavailableError,
    UniqueViolationError,
    UserPredicate,
)

__all__ = [
    "IUserRepository",
    "UserPredicate",
    "StorageError",
    "StorageUnavailableError",
    "UniqueViolationError",
]
