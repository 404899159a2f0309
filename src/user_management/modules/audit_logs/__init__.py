"""Audit logs module: filtered, paginated access to the audit trail."""

from fastapi import APIRouter


router = APIRouter(prefix="/auditlogs", tags=["audit logs"])

# Import routes to register them (must be after router is defined)
from user_management.modules.audit_logs import routes  # noqa: F401, E402


# Module metadata
__module__ = {
    "name": "audit_logs",
    "version": "1.0.0",
    "description": "Audit trail queries",
    "dependencies": [],
}
