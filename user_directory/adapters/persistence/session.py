# user_directory/adapters/persistence/session.py

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from user_directory.adapters.persistence.models import Base
from user_directory.shared.config import Settings, get_settings

# ---------------------------------------------------------------------------
# Engine / Session factory
# ---------------------------------------------------------------------------


def build_engine(settings: Optional[Settings] = None) -> Engine:
    """
    Create the SQLAlchemy engine for ``settings.DATABASE_URL``.

    The engine owns the connection pool, the only resource shared between
    requests.
    """
    settings = settings or get_settings()
    url = settings.DATABASE_URL

    # SQLite needs a special flag when used in a multi-threaded web app.
    connect_args: dict[str, object] = {}
    kwargs: dict[str, object] = {}
    if url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database.
            kwargs["poolclass"] = StaticPool

    return create_engine(
        url,
        echo=settings.DATABASE_ECHO,
        connect_args=connect_args,
        pool_pre_ping=not url.startswith("sqlite"),
        **kwargs,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        class_=Session,
    )


def init_db(engine: Engine) -> None:
    """Create tables and indexes that do not exist yet."""
    Base.metadata.create_all(bind=engine)


@contextmanager
def db_session(factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """
    Transactional scope: commit on success, roll back on error.

        with db_session(factory) as db:
            ...
    """
    db = factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


__all__ = ["build_engine", "build_session_factory", "init_db", "db_session"]
