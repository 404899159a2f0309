"""Integration tests for UserService against a real session."""

from datetime import date

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories.user import UserCreateFactory
from user_management.core.audit import AuditService
from user_management.core.audit.models import AuditLog
from user_management.core.errors import NotFoundError
from user_management.modules.audit_logs.repos import AuditLogRepository
from user_management.modules.users.repos import UserRepository
from user_management.modules.users.schemas import UserUpdate
from user_management.modules.users.services import UserService


@pytest.fixture
def service(db: AsyncSession) -> UserService:
    return UserService(repo=UserRepository(db), audit_repo=AuditLogRepository(db))


async def count_audit_logs(db: AsyncSession) -> int:
    result = await db.execute(select(AuditLog))
    return len(result.scalars().all())


class TestQueries:
    """Listing and filtering the fixture users."""

    @pytest.mark.asyncio
    async def test_get_all_ordered_by_id(self, service: UserService, seeded_users):
        users = await service.get_all()

        assert [u.id for u in users] == list(range(1, 12))

    @pytest.mark.asyncio
    @pytest.mark.parametrize(("is_active", "expected"), [(True, 7), (False, 4), (None, 11)])
    async def test_filter_by_active(self, service: UserService, seeded_users, is_active, expected):
        users = await service.filter_by_active(is_active)

        assert len(users) == expected
        if is_active is not None:
            assert all(u.is_active is is_active for u in users)

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, service: UserService, seeded_users):
        assert await service.get_by_id(999) is None


class TestMutations:
    """Create, update and delete through the service."""

    @pytest.mark.asyncio
    async def test_create_user_audited_once(self, service: UserService, db: AsyncSession):
        user = await service.create_user(UserCreateFactory.build())

        logs = await service.get_user_audit_logs(user.id)

        assert user.id is not None
        assert [entry.action_type for entry in logs] == ["Create"]

    @pytest.mark.asyncio
    async def test_update_user(self, service: UserService, seeded_users):
        updated = await service.update_user(
            UserUpdate(
                id=1,
                forename="Peter",
                surname="Loewe",
                email="ploew@example.com",
                is_active=True,
                date_of_birth=date(1988, 2, 11),
            )
        )

        logs = await service.get_user_audit_logs(1)

        assert updated.surname == "Loewe"
        assert len(logs) == 1
        assert logs[0].details == (
            "User Peter Loewe updated: Surname changed from 'Loew' to 'Loewe'"
        )

    @pytest.mark.asyncio
    async def test_update_missing_user_writes_nothing(
        self, service: UserService, db: AsyncSession, seeded_users
    ):
        with pytest.raises(NotFoundError):
            await service.update_user(
                UserUpdate(id=999, forename="No", surname="One", email="none@example.com")
            )

        assert await count_audit_logs(db) == 0

    @pytest.mark.asyncio
    async def test_delete_user_keeps_trail(self, service: UserService, seeded_users):
        user = await service.get_user(1)
        await service.delete_user(user)

        logs = await service.get_user_audit_logs(1)

        assert await service.get_by_id(1) is None
        assert [entry.action_type for entry in logs] == ["Delete"]


class TestServiceAuditMode:
    """The service records creations itself when sessions are not audited."""

    @pytest.fixture
    def audit_mode(self) -> str:
        return "service"

    @pytest.fixture
    def service(self, db: AsyncSession) -> UserService:
        return UserService(
            repo=UserRepository(db),
            audit_repo=AuditLogRepository(db),
            audit=AuditService(db),
        )

    @pytest.mark.asyncio
    async def test_create_logged_update_not(self, service: UserService, db: AsyncSession):
        user = await service.create_user(UserCreateFactory.build(forename="Robin"))
        await service.update_user(
            UserUpdate(id=user.id, forename="Rob", surname=user.surname, email=user.email)
        )

        logs = await service.get_user_audit_logs(user.id)

        assert [entry.action_type for entry in logs] == ["Create"]
        assert logs[0].details.startswith("User Robin ")
