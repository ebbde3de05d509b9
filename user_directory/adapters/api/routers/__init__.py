# user_directory/adapters/api/routers/__init__.py
from . import health, users

__all__ = ["health", "users"]
