"""Human-readable descriptions of audited changes.

The functions here read SQLAlchemy attribute history, which holds both the
value loaded from the database and the value pending in the session, so a
field-level diff needs no separate snapshot of the object.
"""

from datetime import date, datetime
from typing import Any

from sqlalchemy import Date, DateTime, inspect, select
from sqlalchemy.orm import ColumnProperty

from user_management.core.constants import AUDIT_DATE_FORMAT


NULL_VALUE = "null"


def display_name(key: str) -> str:
    """Render an attribute key the way audit details name fields.

    Example:
        >>> display_name("date_of_birth")
        'DateOfBirth'
    """
    return "".join(part.capitalize() for part in key.split("_"))


def format_date(value: Any) -> str:
    """Format a date-like value as ``YYYY-MM-DD``.

    Args:
        value: A ``date``, ``datetime`` or ISO-8601 string

    Returns:
        The formatted date

    Raises:
        ValueError: If a string value is not a parseable date
    """
    if isinstance(value, date):
        return value.strftime(AUDIT_DATE_FORMAT)
    return datetime.fromisoformat(str(value)).strftime(AUDIT_DATE_FORMAT)


def format_value(value: Any, is_date: bool = False) -> str:
    """Render a field value for audit details."""
    if value is None:
        return NULL_VALUE
    if is_date:
        return format_date(value)
    return str(value)


def _stored_values(obj: Any, keys: list[str]) -> dict[str, Any]:
    """Read attributes straight from the object's row.

    Called inside a flush, before any pending statement has been emitted, so
    the row still holds the values the object was last persisted with.
    """
    state = inspect(obj)
    mapper = state.mapper
    columns = [mapper.column_attrs[key].columns[0] for key in keys]
    criteria = [
        column == value for column, value in zip(mapper.primary_key, state.identity)
    ]
    session = state.session
    with session.no_autoflush:
        row = session.execute(select(*columns).where(*criteria)).one()
    return dict(zip(keys, row))


def original_values(obj: Any, keys: list[str]) -> dict[str, Any]:
    """Values of attributes as last loaded from the database.

    Attribute history drops the loaded value when it was ``None`` or when the
    attribute was expired before being reassigned. For a persistent object
    those values are read back from its row.
    """
    state = inspect(obj)
    values: dict[str, Any] = {}
    unknown: list[str] = []

    for key in keys:
        history = state.attrs[key].history
        if history.deleted:
            values[key] = history.deleted[0]
        elif history.unchanged:
            values[key] = history.unchanged[0]
        elif state.has_identity:
            unknown.append(key)
        else:
            values[key] = None

    if unknown:
        values.update(_stored_values(obj, unknown))
    return values


def current_value(obj: Any, key: str) -> Any:
    """Value of an attribute as pending in the session."""
    history = inspect(obj).attrs[key].history
    if history.added:
        return history.added[0]
    if history.unchanged:
        return history.unchanged[0]
    return None


def _is_date_column(prop: ColumnProperty) -> bool:
    return any(isinstance(column.type, (Date, DateTime)) for column in prop.columns)


def diff_fields(obj: Any) -> list[str]:
    """List the fields of a modified object whose value actually changed.

    Primary key columns are skipped. Date columns are compared by their
    ``YYYY-MM-DD`` rendering, so a change in time-of-day precision alone
    is not reported.

    Args:
        obj: A persistent, modified model instance

    Returns:
        One ``"{Field} changed from '{old}' to '{new}'"`` entry per change,
        in column order
    """
    state = inspect(obj)
    mapper = state.mapper
    primary_keys = {column.key for column in mapper.primary_key}
    # Expired and untouched attributes cannot have changed
    props = [
        prop
        for prop in mapper.column_attrs
        if prop.key not in primary_keys
        and not prop.key.startswith("_")
        and not state.attrs[prop.key].history.empty()
    ]
    originals = original_values(obj, [prop.key for prop in props])
    changes: list[str] = []

    for prop in props:
        is_date = _is_date_column(prop)
        original = format_value(originals[prop.key], is_date)
        current = format_value(current_value(obj, prop.key), is_date)

        if original != current:
            changes.append(
                f"{display_name(prop.key)} changed from '{original}' to '{current}'"
            )

    return changes


def describe_created(obj: Any) -> str:
    return f"User {obj.forename} {obj.surname} created with email {obj.email}"


def describe_updated(obj: Any) -> str:
    changes = diff_fields(obj)
    if not changes:
        return f"User {obj.forename} {obj.surname} updated with no changes detected"
    return f"User {obj.forename} {obj.surname} updated: {', '.join(changes)}"


def describe_deleted(obj: Any) -> str:
    """Describe a deletion from the values the row had before it was removed."""
    values = original_values(obj, ["forename", "surname", "email"])
    return (
        f"User {values['forename']} {values['surname']} "
        f"deleted with email {values['email']}"
    )
