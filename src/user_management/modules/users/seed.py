"""Fixture users for development stores and tests."""

from datetime import date
from typing import Any

import structlog
from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from user_management.modules.users.models import User


log = structlog.get_logger()


SEED_USERS: list[dict[str, Any]] = [
    {"forename": "Peter", "surname": "Loew", "email": "ploew@example.com", "is_active": True, "date_of_birth": date(1988, 2, 11)},
    {"forename": "Benjamin Franklin", "surname": "Gates", "email": "bfgates@example.com", "is_active": True, "date_of_birth": date(1978, 5, 24)},
    {"forename": "Castor", "surname": "Troy", "email": "ctroy@example.com", "is_active": False, "date_of_birth": date(1998, 8, 21)},
    {"forename": "Memphis", "surname": "Raines", "email": "mraines@example.com", "is_active": True, "date_of_birth": date(1991, 1, 16)},
    {"forename": "Stanley", "surname": "Goodspeed", "email": "sgodspeed@example.com", "is_active": True, "date_of_birth": date(1996, 9, 7)},
    {"forename": "H.I.", "surname": "McDunnough", "email": "himcdunnough@example.com", "is_active": True, "date_of_birth": date(1983, 10, 29)},
    {"forename": "Cameron", "surname": "Poe", "email": "cpoe@example.com", "is_active": False, "date_of_birth": date(1987, 4, 7)},
    {"forename": "Edward", "surname": "Malus", "email": "emalus@example.com", "is_active": False, "date_of_birth": date(1989, 3, 11)},
    {"forename": "Damon", "surname": "Macready", "email": "dmacready@example.com", "is_active": False, "date_of_birth": date(1994, 12, 19)},
    {"forename": "Johnny", "surname": "Blaze", "email": "jblaze@example.com", "is_active": True, "date_of_birth": date(1990, 3, 28)},
    {"forename": "Robin", "surname": "Feld", "email": "rfeld@example.com", "is_active": True, "date_of_birth": date(1995, 7, 20)},
]


async def seed_users(session: AsyncSession) -> list[User]:
    """Insert the fixture users into an empty users table.

    Rows go in through a bulk ``INSERT`` rather than the unit-of-work, so
    seeding writes no audit entries. An already populated table is left
    untouched.

    Args:
        session: Database session

    Returns:
        The users in the table, ordered by ID
    """
    count = (await session.execute(select(func.count()).select_from(User))).scalar_one()
    if count == 0:
        await session.execute(insert(User), SEED_USERS)
        log.info("users_seeded", count=len(SEED_USERS))

    result = await session.execute(select(User).order_by(User.id))
    return list(result.scalars().all())
