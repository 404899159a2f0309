"""User factories for tests."""

from datetime import date
from uuid import uuid4

from polyfactory.factories.pydantic_factory import ModelFactory
from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from user_management.modules.users.models import User
from user_management.modules.users.schemas import UserCreate


class UserFactory(SQLAlchemyFactory[User]):
    """Factory for creating transient User instances."""

    __model__ = User
    __set_primary_key__ = False

    @classmethod
    def forename(cls) -> str:
        """Generate a forename."""
        return f"Test{uuid4().hex[:4]}"

    @classmethod
    def surname(cls) -> str:
        """Generate a surname."""
        return f"User{uuid4().hex[:4]}"

    @classmethod
    def email(cls) -> str:
        """Generate a unique email."""
        return f"user-{uuid4().hex[:8]}@example.com"

    @classmethod
    def is_active(cls) -> bool:
        """Default to active."""
        return True

    @classmethod
    def date_of_birth(cls) -> date:
        """A fixed date in the past."""
        return date(1990, 5, 17)


class UserCreateFactory(ModelFactory[UserCreate]):
    """Factory for creating UserCreate schemas."""

    __model__ = UserCreate

    @classmethod
    def forename(cls) -> str:
        """Generate a forename."""
        return f"New{uuid4().hex[:4]}"

    @classmethod
    def surname(cls) -> str:
        """Generate a surname."""
        return f"User{uuid4().hex[:4]}"

    @classmethod
    def email(cls) -> str:
        """Generate a unique email."""
        return f"user-{uuid4().hex[:8]}@example.com"

    @classmethod
    def is_active(cls) -> bool:
        """Default to active."""
        return True

    @classmethod
    def date_of_birth(cls) -> date:
        """A fixed date in the past."""
        return date(1985, 11, 2)
