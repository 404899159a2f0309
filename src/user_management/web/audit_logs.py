"""HTML pages for browsing the audit trail."""

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse

from user_management.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE, MAX_PAGE_SIZE
from user_management.modules.audit_logs.services import AuditLogSvc
from user_management.web.templating import templates
from user_management.web.view_models import AuditLogListViewModel, AuditLogViewModel


router = APIRouter(prefix="/auditlogs", include_in_schema=False)


@router.get("", response_class=HTMLResponse)
async def audit_log_list_page(
    request: Request,
    service: AuditLogSvc,
    page: int = Query(1, ge=1, le=MAX_PAGE),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize"),
    search: str | None = Query(None),
    action_type: str | None = Query(None, alias="actionType"),
    sort_descending: bool = Query(True, alias="sortDescending"),
) -> HTMLResponse:
    """List audit logs with search, action filter, ordering and paging."""
    logs, total = await service.list_audit_logs(
        page=page,
        page_size=page_size,
        search=search,
        action_type=action_type,
        sort_descending=sort_descending,
    )
    model = AuditLogListViewModel(
        items=[AuditLogViewModel.model_validate(entry) for entry in logs],
        current_page=page,
        page_size=page_size,
        total_items=total,
        search_query=search,
        action_type_filter=action_type,
        sort_descending=sort_descending,
    )
    return templates.TemplateResponse(request, "auditlogs/list.html", {"model": model})


@router.get("/{audit_log_id}", response_class=HTMLResponse)
async def audit_log_details_page(
    request: Request, audit_log_id: int, service: AuditLogSvc
) -> HTMLResponse:
    """Show one audit log entry."""
    entry = await service.get_audit_log_or_404(audit_log_id)
    return templates.TemplateResponse(
        request, "auditlogs/details.html", {"entry": AuditLogViewModel.model_validate(entry)}
    )
