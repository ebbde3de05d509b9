# user_directory/adapters/api/__init__.py
"""
HTTP API adapter (FastAPI).

- ``create_app()``: application factory returning a FastAPI instance.
"""

from .main import create_app

__all__ = ["create_app"]
