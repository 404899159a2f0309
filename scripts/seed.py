#!/usr/bin/env python
"""
Load the fixture users into the configured database.
"""

import argparse
import asyncio
import sys

from sqlalchemy import delete

from user_management.core.audit.models import AuditLog
from user_management.core.database import get_engine, get_session_factory, init_models
from user_management.modules.users.models import User
from user_management.modules.users.seed import seed_users


async def seed_default() -> None:
    """Insert the fixture users unless the table already has rows."""
    async with get_session_factory()() as session:
        users = await seed_users(session)
        await session.commit()
        print(f"Users in table: {len(users)}")


async def seed_reset() -> None:
    """Empty users and audit logs, then insert the fixture users."""
    async with get_session_factory()() as session:
        await session.execute(delete(AuditLog))
        await session.execute(delete(User))
        users = await seed_users(session)
        await session.commit()
        print(f"Reset users table with {len(users)} fixture users")


async def main(scenario: str, create_tables: bool) -> None:
    """Run the seeding based on scenario."""
    if create_tables:
        await init_models(get_engine())

    if scenario == "default":
        await seed_default()
    elif scenario == "reset":
        await seed_reset()
    else:
        print(f"Unknown scenario: {scenario}")
        print("Available scenarios: default, reset")
        sys.exit(1)

    await get_engine().dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed database with fixture users")
    parser.add_argument(
        "--scenario",
        "-s",
        default="default",
        help="Seed scenario to run (default, reset)",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding",
    )
    args = parser.parse_args()

    asyncio.run(main(args.scenario, args.create_tables))
