"""Database connection management and initialization."""

from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine as sa_create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from scholarmatch.config import DEFAULT_DB_PATH
from scholarmatch.storage.models import Base

# Module-level engine and session factory
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def create_engine(database_url: str) -> Engine:
    """Create an engine for a SQLAlchemy URL.

    SQLite files get their parent directory created; in-memory SQLite shares
    one connection so every session sees the same database.
    """
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return sa_create_engine(database_url, echo=False, pool_pre_ping=True)

    if url.database and url.database != ":memory:":
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return sa_create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    return sa_create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def get_engine(database_url: Optional[str] = None) -> Engine:
    """Get or create the module-level SQLAlchemy engine.

    Args:
        database_url: Optional SQLAlchemy URL. Defaults to data/scholarmatch.db.

    Returns:
        SQLAlchemy Engine instance.
    """
    global _engine

    if _engine is None:
        if database_url is None:
            database_url = f"sqlite:///{DEFAULT_DB_PATH}"
        _engine = create_engine(database_url)

    return _engine


def get_session_factory(engine: Optional[Engine] = None) -> sessionmaker[Session]:
    """Return a session factory, bound to ``engine`` or the module engine."""
    global _session_factory

    if engine is not None:
        return sessionmaker(bind=engine, expire_on_commit=False)

    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), expire_on_commit=False)

    return _session_factory


@contextmanager
def session_scope(factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Provide a transactional scope around a series of operations."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(database_url: Optional[str] = None, engine: Optional[Engine] = None) -> Engine:
    """Initialize the database by creating all tables.

    Args:
        database_url: Optional SQLAlchemy URL for the module engine.
        engine: Explicit engine to initialize instead of the module engine.

    Returns:
        The initialized engine.
    """
    if engine is None:
        engine = get_engine(database_url)
    Base.metadata.create_all(engine)
    return engine


def reset_engine() -> None:
    """Dispose of the module-level engine and session factory."""
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
