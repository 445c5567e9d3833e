"""
Column type helpers shared by the model modules.
"""

from datetime import datetime, timezone

from sqlalchemy import Enum


def utcnow() -> datetime:
    """Naive UTC timestamp for created_at/updated_at columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def enum_values(enum_cls):
    return [member.value for member in enum_cls]


def closed_enum(enum_cls, name: str) -> Enum:
    """
    Closed set of string variants stored as VARCHAR plus a named CHECK.

    The database keeps the exact display strings ("In Progress", "No Show");
    Python code sees enum members.
    """
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        create_constraint=True,
        validate_strings=True,
        values_callable=enum_values,
    )
