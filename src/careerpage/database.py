"""Database configuration and session management."""

from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import declarative_base, sessionmaker

from careerpage.config import settings

# The model_validator in Settings always populates this field after init.
assert settings.database_url is not None, "database_url must be set in Settings"
DATABASE_URL: str = settings.database_url


def build_engine(url: str, **kwargs):
    """
    Create an engine, enabling foreign key enforcement on SQLite.

    SQLite ignores ``ON DELETE CASCADE`` unless the pragma is switched on for
    every connection, and bulk job deletes rely on it to remove applications.

    Args:
        url: SQLAlchemy database URL
        **kwargs: Extra arguments for ``create_engine``

    Returns:
        Engine instance
    """
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(url, echo=False, **kwargs)

    if url.startswith("sqlite"):

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    Dependency function to get database session.

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def is_unique_violation(exc: IntegrityError) -> bool:
    """
    Tell whether an IntegrityError was raised by a unique constraint.

    Args:
        exc: The IntegrityError raised by the driver

    Returns:
        True for PostgreSQL code 23505 or SQLite's UNIQUE constraint message
    """
    orig = exc.orig
    if getattr(orig, "pgcode", None) == "23505" or getattr(orig, "sqlstate", None) == "23505":
        return True
    return "unique" in str(orig).lower()
