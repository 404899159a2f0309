"""Audit service for recording changes explicitly.

Used when the application runs with ``AUDIT_MODE=service``: sessions are
not intercepted, and the user service records creations itself.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from user_management.core.audit.details import describe_created
from user_management.core.audit.models import AuditLog
from user_management.core.constants import ACTION_CREATE


if TYPE_CHECKING:
    from user_management.modules.users.models import User


log = structlog.get_logger()


class AuditService:
    """Service for creating audit log entries outside the flush interceptor."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize audit service.

        Args:
            session: Database session of the current unit-of-work
        """
        self.session = session

    async def log(
        self,
        action_type: str,
        user_id: int,
        details: str | None = None,
    ) -> AuditLog:
        """Create an audit log entry.

        Args:
            action_type: Create, Update or Delete
            user_id: ID of the affected user
            details: Description of the change

        Returns:
            Created audit log entry
        """
        entry = AuditLog(
            user_id=user_id,
            action_type=action_type,
            timestamp=datetime.now(UTC),
            details=details,
        )

        self.session.add(entry)
        await self.session.flush()

        log.info(
            "audit_log_created",
            action_type=action_type,
            user_id=user_id,
        )

        return entry

    async def log_user_created(self, user: "User") -> AuditLog:
        """Record the creation of a user that has already been flushed.

        Args:
            user: The newly created user

        Returns:
            Created audit log entry
        """
        return await self.log(
            action_type=ACTION_CREATE,
            user_id=user.id,
            details=describe_created(user),
        )
