"""SQLAlchemy declarative base and common mixins."""

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class IntegerIdMixin:
    """Mixin that adds a store-generated integer primary key."""

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
    )


class AuditMixin:
    """Marker mixin to enable automatic audit logging.

    Models that inherit from this mixin have their creation, update and
    deletion captured in the audit log by the before-flush listener in
    ``user_management.core.audit.interceptor``. The listener reads
    ``forename``, ``surname`` and ``email`` to describe the change.

    Example:
        class User(Base, IntegerIdMixin, AuditMixin):
            __tablename__ = "users"
    """

    # Marker attribute checked by the audit interceptor
    __audit__: bool = True
