"""Audit log query service."""

from typing import Annotated

from fastapi import Depends

from user_management.core.audit.models import AuditLog
from user_management.core.errors import NotFoundError
from user_management.modules.audit_logs.repos import AuditLogRepo


class AuditLogService:
    """Filtered, paginated and ordered access to the audit trail."""

    def __init__(self, repo: AuditLogRepo) -> None:
        self.repo = repo

    async def list_audit_logs(
        self,
        page: int = 1,
        page_size: int = 10,
        search: str | None = None,
        action_type: str | None = None,
        sort_descending: bool = True,
    ) -> tuple[list[AuditLog], int]:
        """List audit logs.

        Blank ``search`` and ``action_type`` values are ignored. Ties on
        timestamp are broken by ID so pages never overlap.

        Args:
            page: Page number (1-indexed)
            page_size: Items per page
            search: Substring of the details to match
            action_type: Exact action type to match
            sort_descending: Newest first when True, oldest first otherwise

        Returns:
            Tuple of (page of audit logs, total matching count)
        """
        return await self.repo.list_filtered(
            page=page,
            page_size=page_size,
            search=search,
            action_type=action_type,
            sort_descending=sort_descending,
        )

    async def get_audit_log(self, audit_log_id: int) -> AuditLog | None:
        """Get an audit log by ID.

        Args:
            audit_log_id: The audit log's ID

        Returns:
            The audit log if found, None otherwise
        """
        return await self.repo.get_by_id(audit_log_id)

    async def get_audit_log_or_404(self, audit_log_id: int) -> AuditLog:
        """Get an audit log by ID.

        Raises:
            NotFoundError: If the audit log does not exist
        """
        audit_log = await self.get_audit_log(audit_log_id)
        if audit_log is None:
            raise NotFoundError(
                f"Audit log with ID {audit_log_id} not found.",
                resource="audit_log",
                resource_id=str(audit_log_id),
            )
        return audit_log


# Type alias for dependency injection
AuditLogSvc = Annotated[AuditLogService, Depends(AuditLogService)]
