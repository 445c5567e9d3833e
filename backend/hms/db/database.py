"""
Database engine and sessions via SQLAlchemy.

PostgreSQL (psycopg3) is the system of record; SQLite is supported for
development and tests with foreign key enforcement switched on.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, scoped_session, declarative_base

from hms.config import config

# SQLAlchemy base for model declarations
Base = declarative_base()

# Engine and session factory (initialized lazily)
_engine = None
_session_factory = None


def build_engine(url: str, echo: bool = False):
    """Create an engine for ``url``.

    SQLite only enforces ON DELETE / ON UPDATE policies when the
    ``foreign_keys`` pragma is set on every connection.
    """
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg://")

    if url.startswith("sqlite"):
        engine = create_engine(url, echo=echo)

        @event.listens_for(engine, "connect")
        def enable_foreign_keys(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    return create_engine(
        url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections before use
        pool_recycle=300,  # Recycle connections every 5 minutes
        pool_reset_on_return="rollback",
    )


def get_engine():
    """Get or create the SQLAlchemy engine."""
    global _engine
    if _engine is None:
        _engine = build_engine(config.get_database_url(), echo=config.DB_ECHO)
    return _engine


def get_db_session():
    """Get a scoped database session.

    Returns the thread-local session from the scoped session factory.
    Release it with close_db_session() when the unit of work is done.
    """
    global _session_factory
    if _session_factory is None:
        _session_factory = scoped_session(
            sessionmaker(bind=get_engine(), autoflush=False)
        )

    return _session_factory()


def init_db(engine=None):
    """Create all tables (development/testing; production uses Alembic)."""
    # Import models so they register with Base.metadata
    from hms import models  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())


def drop_db(engine=None):
    """Drop all tables in reverse dependency order."""
    from hms import models  # noqa: F401

    Base.metadata.drop_all(bind=engine or get_engine())


def close_db_session():
    """Roll back anything pending and remove the thread-local session."""
    if _session_factory is not None:
        try:
            _session_factory.rollback()
        finally:
            _session_factory.remove()


# Alias for convenience
db = Base
