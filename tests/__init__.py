# tests/__init__.py
"""
Test Suite for the User Directory.

Organization:
- `core`: User aggregate and directory service, against mocks and an in-memory store.
- `adapters`: SQLAlchemy repository, HTTP endpoints and transports.
- `test_api_smoke.py`: system routes (health, OpenAPI, docs).
"""
