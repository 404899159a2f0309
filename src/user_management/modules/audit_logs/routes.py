"""Audit log API routes."""

from fastapi import Query

from user_management.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE, MAX_PAGE_SIZE
from user_management.modules.audit_logs import router
from user_management.modules.audit_logs.schemas import (
    AuditLogListResponse,
    AuditLogResponse,
)
from user_management.modules.audit_logs.services import AuditLogSvc


@router.get(
    "",
    response_model=AuditLogListResponse,
    summary="List audit logs",
    description=(
        "Returns a page of audit logs filtered by details substring and action "
        "type, ordered by timestamp. `total` counts all matching entries."
    ),
)
async def list_audit_logs(
    service: AuditLogSvc,
    page: int = Query(1, ge=1, le=MAX_PAGE, description="Page number"),
    page_size: int = Query(
        DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize", description="Items per page"
    ),
    search: str | None = Query(None, description="Substring of the details"),
    action_type: str | None = Query(None, alias="actionType", description="Create, Update or Delete"),
    sort_descending: bool = Query(True, alias="sortDescending", description="Newest first"),
) -> AuditLogListResponse:
    """List audit logs."""
    logs, total = await service.list_audit_logs(
        page=page,
        page_size=page_size,
        search=search,
        action_type=action_type,
        sort_descending=sort_descending,
    )
    return AuditLogListResponse(
        logs=[AuditLogResponse.model_validate(entry) for entry in logs],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get(
    "/{audit_log_id}",
    response_model=AuditLogResponse,
    summary="Get audit log by ID",
)
async def get_audit_log(audit_log_id: int, service: AuditLogSvc) -> AuditLogResponse:
    """Get audit log by ID."""
    audit_log = await service.get_audit_log_or_404(audit_log_id)
    return AuditLogResponse.model_validate(audit_log)
