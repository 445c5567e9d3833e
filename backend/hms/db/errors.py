"""
Typed constraint violations.

The engine reports every rejected write as an IntegrityError whose shape
depends on the driver. translate_integrity_error() normalises psycopg and
sqlite3 errors into one of the ConstraintViolation subclasses below so
callers can tell a missing parent from a duplicate natural key.
Closed-enum values are checked by SQLAlchemy before the statement reaches
the driver; translate_enum_lookup_error() reports those as the named CHECK.
"""

import re
from typing import Optional, Tuple

from sqlalchemy import CheckConstraint, Enum, PrimaryKeyConstraint, UniqueConstraint
from sqlalchemy.exc import IntegrityError, StatementError


class ConstraintViolation(Exception):
    """A write rejected by the schema's constraint system."""

    kind = "constraint"

    def __init__(
        self,
        message: str,
        constraint: Optional[str] = None,
        table: Optional[str] = None,
        columns: Tuple[str, ...] = (),
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.constraint = constraint
        self.table = table
        self.columns = tuple(columns)
        self.detail = detail

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "constraint": self.constraint,
            "table": self.table,
            "columns": list(self.columns),
            "message": str(self),
        }


class NotNullViolation(ConstraintViolation):
    kind = "not_null"


class UniqueViolation(ConstraintViolation):
    kind = "unique"


class CheckViolation(ConstraintViolation):
    kind = "check"


class ForeignKeyViolation(ConstraintViolation):
    """Missing parent row, or a RESTRICT delete/update with dependents."""

    kind = "foreign_key"


class InvalidStatusError(ValueError):
    """A status string outside its closed set of variants."""

    def __init__(self, enum_cls, value):
        allowed = ", ".join(repr(m.value) for m in enum_cls)
        super().__init__(f"{value!r} is not a valid {enum_cls.__name__} (expected one of {allowed})")
        self.enum_cls = enum_cls
        self.value = value


# PostgreSQL SQLSTATE class 23 codes
_SQLSTATE_TYPES = {
    "23502": NotNullViolation,
    "23505": UniqueViolation,
    "23514": CheckViolation,
    "23503": ForeignKeyViolation,
    "23001": ForeignKeyViolation,  # restrict_violation
}

_SQLITE_PATTERNS = (
    (re.compile(r"NOT NULL constraint failed: (?P<target>.+)"), NotNullViolation),
    (re.compile(r"UNIQUE constraint failed: (?P<target>.+)"), UniqueViolation),
    (re.compile(r"CHECK constraint failed: (?P<target>.+)"), CheckViolation),
    (re.compile(r"FOREIGN KEY constraint failed"), ForeignKeyViolation),
)


def translate_integrity_error(exc: IntegrityError, metadata=None) -> ConstraintViolation:
    """Map an IntegrityError onto a ConstraintViolation subclass."""
    orig = getattr(exc, "orig", None)
    detail = str(orig) if orig is not None else str(exc)

    sqlstate = getattr(orig, "sqlstate", None)
    if sqlstate:
        return _from_postgres(orig, sqlstate, detail)
    return _from_sqlite(detail, metadata)


def _from_postgres(orig, sqlstate: str, detail: str) -> ConstraintViolation:
    violation_type = _SQLSTATE_TYPES.get(sqlstate, ConstraintViolation)
    diag = getattr(orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    table = getattr(diag, "table_name", None)
    column = getattr(diag, "column_name", None)
    columns = (column,) if column else ()
    message = detail.splitlines()[0] if detail else "constraint violation"
    return violation_type(message, constraint=constraint, table=table, columns=columns, detail=detail)


def _from_sqlite(detail: str, metadata) -> ConstraintViolation:
    for pattern, violation_type in _SQLITE_PATTERNS:
        match = pattern.search(detail)
        if not match:
            continue

        if violation_type is ForeignKeyViolation:
            return ForeignKeyViolation(detail, detail=detail)

        target = match.group("target").strip()
        if violation_type is CheckViolation:
            table = _table_for_check(target, metadata)
            return CheckViolation(detail, constraint=target, table=table, detail=detail)

        # "table.col" or "table.col_a, table.col_b"
        qualified = [part.strip() for part in target.split(",")]
        table = qualified[0].split(".", 1)[0]
        columns = tuple(part.split(".", 1)[-1] for part in qualified)

        constraint = None
        if violation_type is UniqueViolation:
            constraint = _unique_constraint_name(table, columns, metadata)
        return violation_type(detail, constraint=constraint, table=table, columns=columns, detail=detail)

    return ConstraintViolation(detail, detail=detail)


def _unique_constraint_name(table_name: str, columns, metadata) -> Optional[str]:
    """Recover the declared name of a unique constraint from its columns."""
    if metadata is None or table_name not in metadata.tables:
        return None
    wanted = set(columns)
    for constraint in metadata.tables[table_name].constraints:
        if isinstance(constraint, (UniqueConstraint, PrimaryKeyConstraint)):
            if {c.name for c in constraint.columns} == wanted:
                return constraint.name
    return None


def _table_for_check(constraint_name: str, metadata) -> Optional[str]:
    if metadata is None:
        return None
    for table in metadata.tables.values():
        for constraint in table.constraints:
            if isinstance(constraint, CheckConstraint) and constraint.name == constraint_name:
                return table.name
    return None


# Raised by sqlalchemy.Enum when binding a value outside its variants
_ENUM_NAME = re.compile(r"Enum name: (?P<name>\w+)\.")


def translate_enum_lookup_error(exc: StatementError, metadata=None) -> Optional[CheckViolation]:
    """CheckViolation for a rejected closed-enum value, or None for any other statement error."""
    orig = getattr(exc, "orig", None)
    if not isinstance(orig, LookupError):
        return None

    detail = str(orig)
    match = _ENUM_NAME.search(detail)
    constraint = match.group("name") if match else None
    table, columns = _enum_column(constraint, metadata)
    return CheckViolation(detail, constraint=constraint, table=table, columns=columns, detail=detail)


def _enum_column(type_name: Optional[str], metadata):
    if metadata is None or type_name is None:
        return None, ()
    for table in metadata.tables.values():
        for column in table.columns:
            if isinstance(column.type, Enum) and column.type.name == type_name:
                return table.name, (column.name,)
    return None, ()
