# user_directory/adapters/api/dependencies.py
from __future__ import annotations

from fastapi import Request

from user_directory.core.ports.user_repository import IUserRepository
from user_directory.core.use_cases.user_directory import UserDirectoryService
from user_directory.shared.config import Settings


# -----------------------------------------------------------------------------
# Application-scoped collaborators
# -----------------------------------------------------------------------------
# ``create_app`` builds these once and stores them on ``app.state``; there is
# no module-level instance. Tests override them with
# ``app.dependency_overrides`` or by passing their own objects to create_app.


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_user_repository(request: Request) -> IUserRepository:
    return request.app.state.user_repository


def get_user_directory(request: Request) -> UserDirectoryService:
    """Dependency returning the process-wide UserDirectoryService."""
    return request.app.state.user_directory
