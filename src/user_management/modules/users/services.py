"""User service for business logic."""

from typing import Annotated

import structlog
from fastapi import Depends

from user_management.api.dependencies import AppSettings, DBSession
from user_management.core.audit import AuditLog, AuditService
from user_management.core.errors import NotFoundError
from user_management.modules.audit_logs.repos import AuditLogRepo, AuditLogRepository
from user_management.modules.users.models import User
from user_management.modules.users.repos import UserRepo, UserRepository
from user_management.modules.users.schemas import UserCreate, UserUpdate


log = structlog.get_logger()


class UserService:
    """Service for user management operations.

    Contains business logic for user CRUD operations, active-status
    filtering and the per-user audit trail.

    When ``audit`` is given, sessions are not intercepted and the service
    records user creation itself; otherwise the flush interceptor records
    every change.
    """

    def __init__(
        self,
        repo: UserRepository,
        audit_repo: AuditLogRepository,
        audit: AuditService | None = None,
    ) -> None:
        self.repo = repo
        self.audit_repo = audit_repo
        self.audit = audit

    async def get_all(self) -> list[User]:
        """Get all users."""
        return await self.repo.get_all()

    async def get_by_id(self, user_id: int) -> User | None:
        """Get a user by ID.

        Args:
            user_id: The user's ID

        Returns:
            User if found, None otherwise
        """
        return await self.repo.get_by_id(user_id)

    async def get_user(self, user_id: int) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If user not found
        """
        user = await self.repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError(
                f"User with ID {user_id} not found.",
                resource="user",
                resource_id=str(user_id),
            )
        return user

    async def filter_by_active(self, is_active: bool | None) -> list[User]:
        """Return users by active state.

        Args:
            is_active: Status to match, or None for every user

        Returns:
            Matching users
        """
        if is_active is None:
            return await self.repo.get_all()
        return await self.repo.list_by_active(is_active)

    async def create_user(self, data: UserCreate) -> User:
        """Create a new user.

        Args:
            data: User creation data

        Returns:
            The created user
        """
        user = User(**data.model_dump())
        user = await self.repo.create(user)

        if self.audit is not None:
            await self.audit.log_user_created(user)

        log.info("user_created", user_id=user.id)
        return user

    async def update_user(self, data: UserUpdate) -> User:
        """Update a stored user from a payload.

        Loads the stored user and copies onto it every field the payload
        set; fields omitted from the payload keep their stored value.

        Args:
            data: Update data, including the user's ID

        Returns:
            The updated user

        Raises:
            NotFoundError: If user not found
        """
        user = await self.get_user(data.id)

        for field, value in data.model_dump(exclude_unset=True, exclude={"id"}).items():
            setattr(user, field, value)

        user = await self.repo.update(user)
        log.info("user_updated", user_id=user.id)
        return user

    async def delete_user(self, user: User) -> None:
        """Delete a user.

        Args:
            user: The user to delete
        """
        user_id = user.id
        await self.repo.delete(user)
        log.info("user_deleted", user_id=user_id)

    async def get_user_audit_logs(self, user_id: int) -> list[AuditLog]:
        """Get a user's audit trail, newest first.

        Args:
            user_id: The user's ID

        Returns:
            The user's audit logs
        """
        return await self.audit_repo.list_for_user(user_id)


def get_user_service(
    repo: UserRepo,
    audit_repo: AuditLogRepo,
    session: DBSession,
    settings: AppSettings,
) -> UserService:
    """Build the user service for the configured audit mode."""
    audit = AuditService(session) if settings.audit_mode == "service" else None
    return UserService(repo=repo, audit_repo=audit_repo, audit=audit)


# Type alias for dependency injection
UserSvc = Annotated[UserService, Depends(get_user_service)]
