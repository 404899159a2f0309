"""Audit trail: model, flush interceptor and explicit audit service."""

from user_management.core.audit.interceptor import (
    capture_changes,
    remove_audit_listeners,
    setup_audit_listeners,
)
from user_management.core.audit.models import AuditLog
from user_management.core.audit.service import AuditService


__all__ = [
    "AuditLog",
    "AuditService",
    "capture_changes",
    "remove_audit_listeners",
    "setup_audit_listeners",
]
