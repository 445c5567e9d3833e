"""
RecordService: shared write path for all domain services.

Every write goes through _commit(), which flushes, commits and, when the
engine rejects the statement, rolls back and raises a typed
ConstraintViolation naming the violated constraint. Any other database
error still rolls the session back before it propagates.
"""

import enum
import logging
from typing import Any, Iterable, List, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError, StatementError
from sqlalchemy.orm import Session as DbSession

from hms.db.database import Base, get_db_session
from hms.db.errors import InvalidStatusError, translate_enum_lookup_error, translate_integrity_error

E = TypeVar("E", bound=enum.Enum)


class RecordService:
    """
    Insert/update/delete with constraint-violation translation.

    Usage:
        service = RecordService(session)
        staff = service.add(Staff(...))
        service.delete(staff)
    """

    def __init__(self, db_session: Optional[DbSession] = None):
        self._db = db_session
        self.logger = logging.getLogger(f"service.{type(self).__name__}")

    @property
    def db(self) -> DbSession:
        if self._db is None:
            self._db = get_db_session()
        return self._db

    # -------------------------------------------------------------------------
    # Write operations
    # -------------------------------------------------------------------------

    def add(self, record):
        """Insert a row and return it refreshed."""
        self.db.add(record)
        self._commit(f"insert {record.__tablename__}")
        self.db.refresh(record)
        self.logger.info(f"Inserted {record.__tablename__} {self._identity(record)}")
        return record

    def add_all(self, records: Iterable) -> List:
        """Insert several rows in one transaction."""
        records = list(records)
        self.db.add_all(records)
        self._commit(f"insert {len(records)} rows")
        return records

    def update(self, record, **changes):
        """Assign column values and commit. ON UPDATE CASCADE applies to key changes."""
        for key, value in changes.items():
            if not hasattr(type(record), key):
                raise AttributeError(f"{type(record).__name__} has no column {key!r}")
            setattr(record, key, value)
        self._commit(f"update {record.__tablename__}")
        self.logger.info(f"Updated {record.__tablename__} {self._identity(record)}: {sorted(changes)}")
        return record

    def delete(self, record) -> None:
        """
        Delete a row. Dependents follow their FK policy: CASCADE rows are
        removed, SET NULL columns are cleared, RESTRICT raises
        ForeignKeyViolation and nothing is deleted.
        """
        table = record.__tablename__
        identity = self._identity(record)
        self.db.delete(record)
        self._commit(f"delete {table}")
        self.logger.info(f"Deleted {table} {identity}")

    def _commit(self, action: str) -> None:
        try:
            self.db.flush()
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise self._rejected(action, translate_integrity_error(e, Base.metadata)) from e
        except StatementError as e:
            self.db.rollback()
            violation = translate_enum_lookup_error(e, Base.metadata)
            if violation is None:
                self.logger.error(f"Failed {action}: {e}")
                raise
            raise self._rejected(action, violation) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            self.logger.error(f"Failed {action}: {e}")
            raise

    def _rejected(self, action: str, violation):
        self.logger.warning(
            f"Rejected {action}: {violation.kind} violation "
            f"(constraint={violation.constraint}, table={violation.table})"
        )
        return violation

    # -------------------------------------------------------------------------
    # Read operations
    # -------------------------------------------------------------------------

    def get(self, model: Type, pk: Any):
        """Get a row by primary key, or None."""
        return self.db.get(model, pk)

    def find_all(self, model: Type, **filters) -> List:
        """All rows of ``model`` matching equality filters, in primary key order."""
        query = self.db.query(model).filter_by(**filters)
        return query.order_by(*model.__table__.primary_key.columns).all()

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def coerce_status(enum_cls: Type[E], value) -> E:
        """Convert a display string (or member) into ``enum_cls``."""
        if isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(value)
        except ValueError:
            raise InvalidStatusError(enum_cls, value) from None

    @staticmethod
    def _identity(record) -> str:
        mapper = record.__mapper__
        values = mapper.primary_key_from_instance(record)
        return ",".join(str(v) for v in values)
