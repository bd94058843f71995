"""
Database connection and session management module.

Uses SQLAlchemy for ORM operations. Supports PostgreSQL (production) and
SQLite (local development and tests).
Provides the session factory, the FastAPI session dependency and the
transaction scope every mutation runs inside.
"""

import os
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session
from sqlalchemy.pool import StaticPool

from app.logging_config import get_logger, log_with_context

logger = get_logger("db")

# Read database URL from environment
# Fallback to SQLite for local development when PostgreSQL is not available
DATABASE_URL = os.getenv(
    "DATABASE_URL",
    "sqlite:///./academic_records.db"
)

# Connection pool bounds (PostgreSQL only). Requests wait up to
# DB_POOL_TIMEOUT seconds for a free connection, then fail.
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "16"))
DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "0"))
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "60"))

# Configure engine kwargs based on database type
# SQLite does not support pool_size, max_overflow, or pool_pre_ping
engine_kwargs = {"echo": False}

if DATABASE_URL.startswith("postgresql"):
    engine_kwargs.update({
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    })
elif DATABASE_URL.startswith("sqlite"):
    # SQLite needs check_same_thread=False for FastAPI (multi-threaded)
    engine_kwargs["connect_args"] = {"check_same_thread": False}
    # In-memory databases live inside one connection, share it
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool

# Create SQLAlchemy engine
engine = create_engine(DATABASE_URL, **engine_kwargs)

# Foreign keys must be switched on per connection for cascades to apply
if DATABASE_URL.startswith("sqlite"):
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

# Session factory - creates new database sessions
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session.

    Yields a session and ensures proper cleanup after request completion.
    This pattern guarantees connections are returned to the pool even if
    an exception occurs during request processing.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session) -> Generator[Session, None, None]:
    """
    Scope a unit of work on an existing session.

    Commits when the block exits normally; rolls back and re-raises on any
    exception, so multi-step writes either land together or not at all.

    Usage:
        with transaction(db):
            db.add(user)
            db.add(student)
    """
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise


def create_tables(bind=None):
    """Create all database tables (no-op for tables that already exist)."""
    # Models must be imported so they are registered with Base.metadata
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)


def drop_tables(bind=None):
    """Drop all database tables."""
    import app.models  # noqa: F401

    Base.metadata.drop_all(bind=bind or engine)


def check_connection() -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except Exception as e:
        log_with_context(logger, "ERROR", "Database connection failed: {}".format(e),
                         extra_data={"database": engine.url.render_as_string(hide_password=True)})
        return False
    log_with_context(logger, "INFO", "Database connection established",
                     extra_data={"dialect": engine.dialect.name})
    return True
