"""User repository for database operations."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy import select

from user_management.api.dependencies import DBSession
from user_management.core.database import Repository
from user_management.modules.users.models import User


class UserRepository(Repository[User]):
    """Repository for User database operations.

    Inherits get_all/get_by_id/create/update/delete from ``Repository``.
    """

    model = User

    def __init__(self, session: DBSession) -> None:
        super().__init__(session)

    async def list_by_active(self, is_active: bool) -> list[User]:
        """List users with the given active status.

        Args:
            is_active: Status to match

        Returns:
            Matching users ordered by ID
        """
        stmt = select(User).where(User.is_active == is_active).order_by(User.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())


# Type alias for dependency injection
UserRepo = Annotated[UserRepository, Depends(UserRepository)]
