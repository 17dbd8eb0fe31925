"""
SQLAlchemy session management for Libreria.
Builds the engine and session factory, defines the declarative base for the
ORM models, and provides the `get_db` dependency and `init_db` bootstrap.
"""

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from libreria.core.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def configure_engine(engine: Engine) -> Engine:
    """SQLite ignores foreign keys unless asked per connection."""
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _build_engine() -> Engine:
    if settings.DATABASE_URL.startswith("sqlite"):
        return configure_engine(
            create_engine(settings.DATABASE_URL, connect_args={"check_same_thread": False})
        )
    return configure_engine(create_engine(settings.DATABASE_URL, pool_pre_ping=True))


engine = _build_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(bind: Engine | None = None) -> None:
    """Creates every table known to the models."""
    from libreria.models import book, favorite, review, user, vote  # noqa: F401

    target = bind or engine
    Base.metadata.create_all(bind=target)
    logger.info(f"Database schema ready on {target.url.render_as_string(hide_password=True)}")


def get_db():
    """
    Yields a database session for use as a FastAPI dependency.

    Ensures:
        The session is closed after the request.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
