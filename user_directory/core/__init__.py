# user_directory/core/__init__.py
"""
Core Domain Layer.

This package contains the pure business logic and entities of the system.
- No dependencies on web frameworks.
- No dependencies on infrastructure (database drivers, servers).
- Defines Interfaces (Ports) that the Infrastructure layer must implement.
"""
