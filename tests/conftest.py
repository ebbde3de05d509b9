# tests/conftest.py
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from user_directory.adapters.api.main import create_app
from user_directory.adapters.persistence import (
    SqlAlchemyUserRepository,
    build_engine,
    build_session_factory,
    init_db,
)
from user_directory.bootstrap import Components
from user_directory.core.domain.user import User
from user_directory.core.ports.user_repository import IUserRepository
from user_directory.core.use_cases.user_directory import UserDirectoryService
from user_directory.shared.config import AppEnv, Settings
from user_directory.shared.resilience import NoRetry


@pytest.fixture(scope="function")
def settings():
    """Settings for an isolated in-memory database with tracing off."""
    return Settings(
        APP_ENV=AppEnv.TESTING,
        DATABASE_URL="sqlite://",
        STORAGE_READ_RETRIES=1,
        LOG_LEVEL="WARNING",
        LOG_FORMAT="console",
        OTEL_EXPORTER_OTLP_ENDPOINT=None,
        DOCS_ENABLED=True,
    )


@pytest.fixture(scope="function")
def engine(settings):
    engine = build_engine(settings)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def repository(engine):
    """A real repository over a fresh in-memory SQLite database."""
    return SqlAlchemyUserRepository(build_session_factory(engine))


@pytest.fixture(scope="function")
def service(repository):
    return UserDirectoryService(repository, read_retry=NoRetry())


@pytest.fixture(scope="function")
def mock_repo():
    """Returns a mock User Repository. Every read finds nothing by default."""
    repo = MagicMock(spec=IUserRepository)
    repo.find_one.return_value = None
    repo.find_page.return_value = []
    repo.count.return_value = 0
    repo.health_check.return_value = True
    return repo


@pytest.fixture(scope="function")
def mock_service(mock_repo):
    """Directory service wired to the mock repository."""
    return UserDirectoryService(mock_repo, read_retry=NoRetry())


@pytest.fixture(scope="function")
def app(settings, engine, repository, service):
    components = Components(settings=settings, engine=engine, repository=repository, service=service)
    return create_app(settings, components=components)


@pytest.fixture(scope="function")
def client(app):
    """
    Returns a FastAPI TestClient bound to the in-memory database.
    The lifespan runs, so startup and shutdown hooks are exercised too.
    """
    with TestClient(app) as c:
        yield c


@pytest.fixture(scope="function")
def ann(repository):
    """A single stored user, written straight through the repository."""
    return repository.insert(User.create("a@x.com", "Ann"))


@pytest.fixture(scope="function")
def sample_users(service):
    """Three users created through the directory service, in insertion order."""
    return [
        service.create("ann@x.com", "Ann"),
        service.create("bob@x.com", "Bob"),
        service.create("cid@x.com", "Cid"),
    ]
