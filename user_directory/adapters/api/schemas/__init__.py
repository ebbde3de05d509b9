"""
Top-level export module for HTTP API schemas.
"""

from .common import APIModel, ErrorDetail, ErrorResponse, RequestModel
from .users import UserCreate, UserListResponse, UserRead, UserUpdate

__all__ = [
    # Common
    "APIModel", "RequestModel", "ErrorDetail", "ErrorResponse",

    # Users
    "UserCreate", "UserUpdate", "UserRead", "UserListResponse",
]
