"""
Database Configuration Module

Sets up SQLAlchemy 2.0 for the library catalog.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Every gateway call in that request uses the same session
3. The gateway commits or rolls back each unit of work
4. The session is closed when the request ends

Sessions are created with expire_on_commit=False: objects handed back to the
services stay readable after a commit, for the rest of the request.
"""

from collections.abc import Generator
import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from library_catalog.config import get_settings

settings = get_settings()


def _engine_options() -> dict:
    """
    Build create_engine() keyword arguments for the configured database.

    SQLite connections are shared across FastAPI's worker threads, so the
    same-thread check is turned off. Pool sizing only applies to servers.
    """
    if settings.is_sqlite:
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
    }


# =============================================================================
# Database Engine
# =============================================================================
engine = create_engine(
    settings.database_url,
    echo=settings.debug,  # Log SQL in debug mode
    **_engine_options(),
)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    """SQLite ignores foreign keys unless asked on every connection."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

        class Book(Base):
            __tablename__ = "books"
            ...
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, code after yield closes it,
    even if the handler raised.

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """
    Create all database tables from the model metadata.

    Called on application startup; there is no migration tooling.
    """
    # Import models so every table is registered on Base.metadata
    import library_catalog.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
