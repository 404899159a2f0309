"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from user_management.config import Settings, get_settings
from user_management.core.database import get_db


# Type alias for database session dependency
DBSession = Annotated[AsyncSession, Depends(get_db)]

# Type alias for settings dependency (overridable in tests)
AppSettings = Annotated[Settings, Depends(get_settings)]
