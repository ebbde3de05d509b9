# user_directory/adapters/persistence/__init__.py
"""
Persistence Adapters.

This package implements the Repository port defined in the Core Domain.
It handles the translation between the User aggregate and relational rows.

Components:
- SqlAlchemyUserRepository: Concrete implementation of IUserRepository.
- build_engine / build_session_factory / init_db: engine and schema setup.
"""

from .session import build_engine, build_session_factory, db_session, init_db
from .user_repository import SqlAlchemyUserRepository

__all__ = [
    "SqlAlchemyUserRepository",
    "build_engine",
    "build_session_factory",
    "db_session",
    "init_db",
]
