"""Generic repository over a single model."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from user_management.core.database.base import Base


ModelT = TypeVar("ModelT", bound=Base)


class Repository(Generic[ModelT]):
    """CRUD operations for one model within the current unit-of-work.

    Writes are flushed, never committed: the request-scoped session
    commits once, so audit rows produced at flush time land in the
    same transaction as the change itself.

    Subclasses set ``model``:

        class UserRepository(Repository[User]):
            model = User
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_all(self) -> list[ModelT]:
        """Get every row, ordered by primary key.

        Returns:
            All instances of the model
        """
        stmt = select(self.model).order_by(self._primary_key())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, entity_id: int) -> ModelT | None:
        """Get a row by primary key.

        Args:
            entity_id: The primary key value

        Returns:
            The instance if found, None otherwise
        """
        return await self.session.get(self.model, entity_id)

    async def create(self, entity: ModelT) -> ModelT:
        """Add a new row.

        Args:
            entity: Instance to persist

        Returns:
            The created instance with its ID populated
        """
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: ModelT) -> ModelT:
        """Flush pending changes made to a tracked instance.

        Args:
            entity: Instance with updated fields

        Returns:
            The updated instance
        """
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelT) -> None:
        """Delete a row.

        Args:
            entity: Instance to delete
        """
        await self.session.delete(entity)
        await self.session.flush()

    def _primary_key(self) -> Any:
        return self.model.__mapper__.primary_key[0]
