# user_directory/__init__.py
"""
User Directory - layered HTTP CRUD service for user accounts.

This package follows Hexagonal Architecture (Ports & Adapters):
- ``core``: the User aggregate, domain errors, storage port and use cases.
- ``adapters``: SQLAlchemy persistence, FastAPI HTTP API, transports.
- ``shared``: configuration, logging, telemetry, resilience.
"""

__version__ = "1.0.0"
