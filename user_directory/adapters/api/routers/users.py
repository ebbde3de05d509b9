# user_directory/adapters/api/routers/users.py

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from user_directory.adapters.api.dependencies import get_user_directory
from user_directory.adapters.api.errors import HTTP_422_UNPROCESSABLE
from user_directory.adapters.api.schemas.common import ErrorResponse
from user_directory.adapters.api.schemas.users import (
    UserCreate,
    UserListResponse,
    UserRead,
    UserUpdate,
)
from user_directory.core.use_cases.user_directory import UserDirectoryService, UserPatch

DEFAULT_LIMIT = 10
MAX_LIMIT = 100

router = APIRouter(prefix="/users", tags=["users"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "User not found"}}
_CONFLICT = {status.HTTP_409_CONFLICT: {"model": ErrorResponse, "description": "Email already in use"}}
_INVALID = {HTTP_422_UNPROCESSABLE: {"model": ErrorResponse, "description": "Validation error"}}


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
    description="Return one page of active users together with the total number of active users.",
    responses=_INVALID,
)
def list_users(
    *,
    service: UserDirectoryService = Depends(get_user_directory),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT, description="Page size."),
    offset: int = Query(0, ge=0, description="Number of users to skip."),
) -> UserListResponse:
    page = service.list(limit=limit, offset=offset)
    return UserListResponse(
        users=[UserRead.model_validate(u) for u in page.users],
        total=page.total,
        limit=page.limit,
        offset=page.offset,
    )


@router.get(
    "/{user_id}",
    response_model=UserRead,
    summary="Get user by ID",
    responses={**_NOT_FOUND, **_INVALID},
)
def get_user(
    *,
    user_id: UUID,
    service: UserDirectoryService = Depends(get_user_directory),
) -> UserRead:
    return UserRead.model_validate(service.get_by_id(str(user_id)))


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new user",
    responses={**_CONFLICT, **_INVALID},
)
def create_user(
    *,
    payload: UserCreate,
    service: UserDirectoryService = Depends(get_user_directory),
) -> UserRead:
    return UserRead.model_validate(service.create(email=str(payload.email), name=payload.name))


@router.patch(
    "/{user_id}",
    response_model=UserRead,
    summary="Update user",
    description="Patch the provided fields; omitted fields keep their current value.",
    responses={**_NOT_FOUND, **_CONFLICT, **_INVALID},
)
def update_user(
    *,
    user_id: UUID,
    payload: UserUpdate,
    service: UserDirectoryService = Depends(get_user_directory),
) -> UserRead:
    patch = UserPatch(
        email=str(payload.email) if payload.email is not None else None,
        name=payload.name,
    )
    return UserRead.model_validate(service.update(str(user_id), patch))


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete user",
    description="Soft delete: the user disappears from every query but the row is kept.",
    responses=_NOT_FOUND,
)
def delete_user(
    *,
    user_id: UUID,
    service: UserDirectoryService = Depends(get_user_directory),
) -> Response:
    service.delete(str(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
