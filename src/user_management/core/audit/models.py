"""Audit log database model.

Stores an append-only, human-readable trail of user record changes.
Rows are written by the flush interceptor (or, in service audit mode,
by ``AuditService``) and never updated or deleted afterwards.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from user_management.core.constants import MAX_ACTION_TYPE_LENGTH
from user_management.core.database.base import Base, IntegerIdMixin


if TYPE_CHECKING:
    from user_management.modules.users.models import User


class AuditLog(Base, IntegerIdMixin):
    """Audit log entry describing one change to a user.

    Attributes:
        user_id: The user the change applies to. Deliberately not a foreign
            key: audit rows outlive the users they describe.
        action_type: Create, Update or Delete
        timestamp: When the change was captured (UTC)
        details: Human-readable description of the change
        subject: Write-only link to a user that is still pending insert, so
            the flush can fill ``user_id`` once the user's ID is generated
    """

    __tablename__ = "audit_logs"

    user_id: Mapped[int] = mapped_column(
        nullable=False,
        index=True,
    )
    action_type: Mapped[str] = mapped_column(
        String(MAX_ACTION_TYPE_LENGTH),
        nullable=False,
        index=True,
    )
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )
    details: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    subject: Mapped["User"] = relationship(
        "User",
        primaryjoin="foreign(AuditLog.user_id) == User.id",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return (
            f"<AuditLog(id={self.id}, user_id={self.user_id}, "
            f"action_type={self.action_type})>"
        )
