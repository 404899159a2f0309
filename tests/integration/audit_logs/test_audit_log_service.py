"""Integration tests for audit log queries."""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from user_management.core.audit.models import AuditLog
from user_management.core.errors import NotFoundError
from user_management.modules.audit_logs.repos import AuditLogRepository
from user_management.modules.audit_logs.services import AuditLogService


BASE_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def service(db: AsyncSession) -> AuditLogService:
    return AuditLogService(AuditLogRepository(db))


@pytest.fixture
async def audit_trail(db: AsyncSession) -> list[AuditLog]:
    """Twelve entries a minute apart; every third is a Create for user 1."""
    entries = []
    for i in range(12):
        action_type = ["Create", "Update", "Delete"][i % 3]
        entries.append(
            AuditLog(
                user_id=1 if action_type == "Create" else 2,
                action_type=action_type,
                timestamp=BASE_TIME + timedelta(minutes=i),
                details=f"User Test {i} {action_type.lower()}d with 100%_match"
                if i == 5
                else f"User Test {i} {action_type.lower()}d",
            )
        )
    db.add_all(entries)
    await db.flush()
    return entries


class TestListAuditLogs:
    """Tests for AuditLogService.list_audit_logs."""

    @pytest.mark.asyncio
    async def test_first_page_newest_first(self, service: AuditLogService, audit_trail):
        logs, total = await service.list_audit_logs(page=1, page_size=5)

        assert total == 12
        assert [entry.id for entry in logs] == [12, 11, 10, 9, 8]

    @pytest.mark.asyncio
    async def test_last_page_is_partial(self, service: AuditLogService, audit_trail):
        logs, total = await service.list_audit_logs(page=3, page_size=5)

        assert total == 12
        assert [entry.id for entry in logs] == [2, 1]

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, service: AuditLogService, audit_trail):
        logs, total = await service.list_audit_logs(page=9, page_size=5)

        assert logs == []
        assert total == 12

    @pytest.mark.asyncio
    async def test_ascending_order(self, service: AuditLogService, audit_trail):
        logs, _ = await service.list_audit_logs(page_size=3, sort_descending=False)

        assert [entry.id for entry in logs] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_action_type_filter(self, service: AuditLogService, audit_trail):
        logs, total = await service.list_audit_logs(page_size=20, action_type="Create")

        assert total == 4
        assert all(entry.action_type == "Create" for entry in logs)

    @pytest.mark.asyncio
    async def test_search_matches_details_substring(self, service: AuditLogService, audit_trail):
        logs, total = await service.list_audit_logs(search="Test 1")

        # "Test 1", "Test 10" and "Test 11"
        assert total == 3
        assert {entry.id for entry in logs} == {2, 11, 12}

    @pytest.mark.asyncio
    async def test_search_wildcards_are_literal(self, service: AuditLogService, audit_trail):
        logs, total = await service.list_audit_logs(search="100%_")

        assert total == 1
        assert logs[0].id == 6

    @pytest.mark.asyncio
    async def test_blank_filters_ignored(self, service: AuditLogService, audit_trail):
        _, total = await service.list_audit_logs(search="  ", action_type="")

        assert total == 12

    @pytest.mark.asyncio
    async def test_filters_combine(self, service: AuditLogService, audit_trail):
        _, total = await service.list_audit_logs(search="Test 1", action_type="Update")

        # Entries 1 and 10 are Updates
        assert total == 2


class TestGetAuditLog:
    """Tests for single-entry lookups."""

    @pytest.mark.asyncio
    async def test_get_audit_log(self, service: AuditLogService, audit_trail):
        entry = await service.get_audit_log(3)

        assert entry is not None
        assert entry.action_type == "Delete"

    @pytest.mark.asyncio
    async def test_get_missing_audit_log(self, service: AuditLogService, audit_trail):
        assert await service.get_audit_log(999) is None

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_audit_log_or_404(999)

        assert exc_info.value.message == "Audit log with ID 999 not found."
