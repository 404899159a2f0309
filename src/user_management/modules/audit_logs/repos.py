"""Audit log repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import Select, func, select

from user_management.api.dependencies import DBSession
from user_management.core.audit.models import AuditLog
from user_management.core.database import Repository


class AuditLogRepository(Repository[AuditLog]):
    """Read access to the audit trail.

    Audit rows are append-only: they are written by the flush interceptor
    or ``AuditService`` and never updated through this repository.
    """

    model = AuditLog

    def __init__(self, session: DBSession) -> None:
        super().__init__(session)

    async def list_filtered(
        self,
        page: int = 1,
        page_size: int = 10,
        search: str | None = None,
        action_type: str | None = None,
        sort_descending: bool = True,
    ) -> tuple[list[AuditLog], int]:
        """List audit logs with filtering and pagination.

        Args:
            page: Page number (1-indexed)
            page_size: Number of items per page
            search: Substring the details must contain
            action_type: Exact action type to match
            sort_descending: Newest first when True

        Returns:
            Tuple of (audit logs on the page, total matching count)
        """
        filtered = self._apply_filters(select(AuditLog), search, action_type)

        count_stmt = select(func.count()).select_from(filtered.subquery())
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar_one()

        if sort_descending:
            ordering = (AuditLog.timestamp.desc(), AuditLog.id.desc())
        else:
            ordering = (AuditLog.timestamp.asc(), AuditLog.id.asc())

        offset = (page - 1) * page_size
        stmt = filtered.order_by(*ordering).offset(offset).limit(page_size)
        result = await self.session.execute(stmt)
        logs = list(result.scalars().all())

        return logs, total

    async def list_for_user(self, user_id: int) -> list[AuditLog]:
        """List every audit log for a user, newest first.

        Args:
            user_id: The user's ID

        Returns:
            The user's audit logs
        """
        stmt = (
            select(AuditLog)
            .where(AuditLog.user_id == user_id)
            .order_by(AuditLog.timestamp.desc(), AuditLog.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    def _apply_filters(
        stmt: Select[tuple[AuditLog]],
        search: str | None,
        action_type: str | None,
    ) -> Select[tuple[AuditLog]]:
        if search and search.strip():
            stmt = stmt.where(
                AuditLog.details.is_not(None),
                AuditLog.details.contains(search, autoescape=True),
            )
        if action_type and action_type.strip():
            stmt = stmt.where(AuditLog.action_type == action_type)
        return stmt


# Type alias for dependency injection
AuditLogRepo = Annotated[AuditLogRepository, Depends(AuditLogRepository)]
