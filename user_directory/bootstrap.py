# user_directory/bootstrap.py
"""
Composition root.

Builds the engine, repository and directory service from settings with plain
constructor calls. The caller (``create_app`` or the CLI) owns the returned
objects and is responsible for ``dispose()``.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from sqlalchemy import Engine

from user_directory.adapters.persistence import (
    SqlAlchemyUserRepository,
    build_engine,
    build_session_factory,
    init_db,
)
from user_directory.core.ports.user_repository import StorageUnavailableError
from user_directory.core.use_cases.user_directory import UserDirectoryService
from user_directory.shared.config import Settings, get_settings
from user_directory.shared.resilience import ReadRetryPolicy

logger = structlog.get_logger()


@dataclass
class Components:
    settings: Settings
    engine: Engine
    repository: SqlAlchemyUserRepository
    service: UserDirectoryService

    def dispose(self) -> None:
        self.engine.dispose()


def build_components(settings: Optional[Settings] = None, *, create_schema: bool = True) -> Components:
    settings = settings or get_settings()

    engine = build_engine(settings)
    if create_schema:
        init_db(engine)

    repository = SqlAlchemyUserRepository(build_session_factory(engine))
    service = UserDirectoryService(
        repository,
        read_retry=ReadRetryPolicy(
            attempts=settings.STORAGE_READ_RETRIES,
            retry_on=(StorageUnavailableError,),
        ),
    )

    logger.info("components_built", database=engine.url.render_as_string(hide_password=True))
    return Components(settings=settings, engine=engine, repository=repository, service=service)
