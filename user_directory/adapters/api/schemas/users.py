"""
user_directory/adapters/api/schemas/users.py

Pydantic models for the "users" HTTP API.

The wire format is camelCase (``isActive``, ``createdAt``...). ``deletedAt``
is deliberately absent from every response model: soft-deleted rows are
never visible through the API.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Optional
from uuid import UUID

from pydantic import EmailStr, Field, StringConstraints

from user_directory.adapters.api.schemas.common import APIModel, RequestModel

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100

# Length limits apply to the trimmed value.
DisplayName = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH),
]


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class UserCreate(RequestModel):
    """
    Payload for creating a new user.
    """

    email: EmailStr = Field(..., description="Login email; stored lower-cased.")
    name: DisplayName = Field(
        ...,
        description="Display name; surrounding whitespace is trimmed.",
    )


class UserUpdate(RequestModel):
    """
    Partial update payload.

    All fields are optional; only provided ones are patched.
    """

    email: Optional[EmailStr] = Field(
        default=None,
        description="New email. If provided, must remain unique.",
    )
    name: Optional[DisplayName] = Field(
        default=None,
        description="New display name.",
    )


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class UserRead(APIModel):
    """
    Full user representation as returned by the API.
    """

    id: UUID = Field(..., description="User identifier")
    email: str
    name: str
    is_active: bool
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    updated_at: Optional[datetime] = Field(
        default=None,
        description="Last update timestamp (UTC); null until the first change.",
    )


class UserListResponse(APIModel):
    """
    Response model for paginated user lists.

    ``total`` counts every user matching the list filter, not just this page.
    """

    users: List[UserRead] = Field(default_factory=list)
    total: int = Field(..., description="Total number of active users.")
    limit: int
    offset: int


__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserRead",
    "UserListResponse",
]
