# user_directory/core/use_cases/__init__.py
"""
Core Use Cases (Application Logic).

This package contains the interactors of the system. They orchestrate the
flow of data between the User aggregate and the storage port.
"""

from .user_directory import UserDirectoryService, UserPage, UserPatch

__all__ = [
    "UserDirectoryService",
    "UserPage",
    "UserPatch",
]
