"""
Database access for the hospital management schema.

- Engine/session management (SQLAlchemy, PostgreSQL or SQLite)
- Typed constraint violations translated from driver errors
"""

from .database import db, Base, build_engine, get_engine, get_db_session, init_db, drop_db, close_db_session
from .errors import (
    ConstraintViolation,
    NotNullViolation,
    UniqueViolation,
    CheckViolation,
    ForeignKeyViolation,
    InvalidStatusError,
    translate_integrity_error,
    translate_enum_lookup_error,
)

__all__ = [
    "db",
    "Base",
    "build_engine",
    "get_engine",
    "get_db_session",
    "init_db",
    "drop_db",
    "close_db_session",
    "ConstraintViolation",
    "NotNullViolation",
    "UniqueViolation",
    "CheckViolation",
    "ForeignKeyViolation",
    "InvalidStatusError",
    "translate_integrity_error",
    "translate_enum_lookup_error",
]
