import logging
import sqlite3
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.engine import Engine

from .config import Settings
from .models import Base

logger = logging.getLogger(__name__)

# Global state for the current database
_current_engine: Engine | None = None
_current_session_factory: sessionmaker | None = None


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign keys for SQLite."""
    if not isinstance(dbapi_connection, sqlite3.Connection):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_db(database_url: str, settings: Settings | None = None) -> None:
    """
    Connect to the database at database_url.

    Creates the tables if they don't exist. Pool settings only apply to
    non-SQLite URLs.
    """
    global _current_engine, _current_session_factory

    if _current_engine is not None:
        close_db()

    engine_kwargs = {"echo": settings.db_echo if settings else False}
    if settings and not database_url.startswith("sqlite"):
        engine_kwargs.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=True,
        )

    logger.info("Connecting to the database")
    _current_engine = create_engine(database_url, **engine_kwargs)
    _current_session_factory = sessionmaker(bind=_current_engine)

    # Create tables if they don't exist
    Base.metadata.create_all(_current_engine)


def close_db() -> None:
    """Dispose of the current engine."""
    global _current_engine, _current_session_factory

    if _current_engine is not None:
        _current_engine.dispose()
        _current_engine = None
        _current_session_factory = None
        logger.info("Database connection closed")


def get_session() -> Session:
    """Get a database session."""
    if _current_session_factory is None:
        raise RuntimeError("Database is not initialized")
    return _current_session_factory()


def get_db():
    """FastAPI dependency for database sessions."""
    session = get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def is_db_initialized() -> bool:
    """Check if a database connection has been set up."""
    return _current_engine is not None
