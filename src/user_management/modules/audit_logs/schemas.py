"""Pydantic schemas for audit log responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class AuditLogResponse(BaseModel):
    """Schema for a single audit log entry."""

    id: int
    user_id: int
    action_type: str
    timestamp: datetime
    details: str | None = None

    model_config = ConfigDict(from_attributes=True)


class AuditLogListResponse(BaseModel):
    """Schema for a page of audit logs.

    ``total`` counts every matching entry, not just this page.
    """

    logs: list[AuditLogResponse]
    total: int
    page: int
    page_size: int
