"""Automatic audit capture via a SQLAlchemy ``before_flush`` listener.

Every flush of an ``AuditedSession`` inspects the pending changes of models
that inherit from ``AuditMixin`` and adds one ``AuditLog`` per changed object
to the same flush, so an audit row is committed if and only if the change
it describes is committed.
"""

from datetime import UTC, datetime
from typing import Any

import structlog
from sqlalchemy import event
from sqlalchemy.orm import Session

from user_management.core.audit.details import (
    describe_created,
    describe_deleted,
    describe_updated,
)
from user_management.core.audit.models import AuditLog
from user_management.core.constants import ACTION_CREATE, ACTION_DELETE, ACTION_UPDATE
from user_management.core.database.session import AuditedSession


log = structlog.get_logger()


def _should_audit(obj: Any) -> bool:
    """Check if an object should be audited.

    Args:
        obj: SQLAlchemy model instance

    Returns:
        True if the object has __audit__ = True
    """
    return getattr(obj, "__audit__", False)


def _create_audit_entry(
    session: Session,
    action_type: str,
    obj: Any,
    details: str,
) -> AuditLog:
    """Add an audit log entry for a model change to the session.

    Args:
        session: The flushing session
        action_type: Create, Update or Delete
        obj: The affected model instance
        details: Description of the change

    Returns:
        The pending audit entry
    """
    entry = AuditLog(
        action_type=action_type,
        timestamp=datetime.now(UTC),
        details=details,
    )
    if obj.id is None:
        # Pending insert: the flush copies the generated ID into user_id.
        entry.subject = obj
    else:
        entry.user_id = obj.id

    session.add(entry)

    log.debug(
        "audit_log_captured",
        action_type=action_type,
        user_id=obj.id,
    )
    return entry


def capture_changes(session: Session) -> list[AuditLog]:
    """Synthesize audit entries for every audited object in a flush.

    Args:
        session: The session about to flush

    Returns:
        The audit entries added to the session
    """
    entries: list[AuditLog] = []

    for obj in list(session.new):
        if _should_audit(obj):
            entries.append(
                _create_audit_entry(session, ACTION_CREATE, obj, describe_created(obj))
            )

    # Every attribute assignment marks an object dirty, even one that sets
    # the same value, which is recorded as an update with no changes.
    for obj in list(session.dirty):
        if _should_audit(obj):
            entries.append(
                _create_audit_entry(session, ACTION_UPDATE, obj, describe_updated(obj))
            )

    for obj in list(session.deleted):
        if _should_audit(obj):
            entries.append(
                _create_audit_entry(session, ACTION_DELETE, obj, describe_deleted(obj))
            )

    return entries


def _before_flush(session: Session, _flush_context: Any, _instances: Any) -> None:
    """Capture changes before they're flushed to the database."""
    capture_changes(session)


def setup_audit_listeners(session_class: type[Session] = AuditedSession) -> None:
    """Attach the audit listener to a session class.

    Call this during application startup. Repeated calls are no-ops, so an
    object is never audited twice by the same session class.

    Args:
        session_class: Session class to observe
    """
    if not event.contains(session_class, "before_flush", _before_flush):
        event.listen(session_class, "before_flush", _before_flush)


def remove_audit_listeners(session_class: type[Session] = AuditedSession) -> None:
    """Detach the audit listener from a session class."""
    if event.contains(session_class, "before_flush", _before_flush):
        event.remove(session_class, "before_flush", _before_flush)
