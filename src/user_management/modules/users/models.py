"""User database models."""

from datetime import date

from sqlalchemy import Boolean, Date, String
from sqlalchemy.orm import Mapped, mapped_column

from user_management.core.constants import (
    MAX_EMAIL_LENGTH,
    MAX_FORENAME_LENGTH,
    MAX_SURNAME_LENGTH,
)
from user_management.core.database.base import AuditMixin, Base, IntegerIdMixin


class User(Base, IntegerIdMixin, AuditMixin):
    """A managed user record.

    Every insert, update and delete of a user is captured in the audit
    log by the flush interceptor.

    Attributes:
        forename: Given name
        surname: Family name
        email: Contact email address
        is_active: Whether the account is active
        date_of_birth: Optional date of birth, never in the future
    """

    __tablename__ = "users"

    forename: Mapped[str] = mapped_column(
        String(MAX_FORENAME_LENGTH),
        nullable=False,
    )
    surname: Mapped[str] = mapped_column(
        String(MAX_SURNAME_LENGTH),
        nullable=False,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH),
        nullable=False,
        index=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        default=True,
        nullable=False,
    )
    date_of_birth: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, is_active={self.is_active})>"
