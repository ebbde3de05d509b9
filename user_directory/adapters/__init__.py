# user_directory/adapters/__init__.py
"""
Infrastructure Adapters.

This package contains the concrete implementations of the Ports defined in
`user_directory.core.ports`, and the driving adapters that call the core:
- `api`: The Primary Adapter (Driving) - FastAPI web server.
- `persistence`: Secondary Adapter (Driven) - SQLAlchemy relational store.
- `transports`: start/stop lifecycle for the listeners serving the API.

Dependencies point INWARD. These modules depend on `user_directory.core`,
but `user_directory.core` never imports from here.
"""
