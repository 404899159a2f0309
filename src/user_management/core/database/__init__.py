"""Database layer - session management, base models, and repositories."""

from user_management.core.database.base import AuditMixin, Base, IntegerIdMixin
from user_management.core.database.repository import Repository
from user_management.core.database.session import (
    AuditedSession,
    build_session_factory,
    create_engine_for,
    get_db,
    get_engine,
    get_session_factory,
    init_models,
)


__all__ = [
    "AuditMixin",
    "AuditedSession",
    "Base",
    "IntegerIdMixin",
    "Repository",
    "build_session_factory",
    "create_engine_for",
    "get_db",
    "get_engine",
    "get_session_factory",
    "init_models",
]
