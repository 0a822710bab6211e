"""
Seed script for the restaurant catalog.

Creates the tables if needed and inserts dishes, sizes, ingredients and
their dependency/incompatibility rules. Existing catalogs are left alone
unless --reset is given.
"""

import argparse
import asyncio
import os
import sys

# Add the project root to the Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from configurator.db.async_session import get_async_db, get_async_db_manager, shutdown_async_database
from configurator.db.seed import seed_catalog
from configurator.utils.logger import setup_logging


async def main(reset: bool = False, database_url: str = None) -> bool:
    manager = get_async_db_manager(database_url)
    try:
        if reset:
            await manager.drop_tables()
        await manager.create_tables()

        seeded = False
        async for db in get_async_db():
            seeded = await seed_catalog(db)
        return seeded
    finally:
        await shutdown_async_database()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the restaurant catalog")
    parser.add_argument("--reset", action="store_true", help="Drop all tables before seeding")
    parser.add_argument("--database-url", default=None, help="Async database URL (defaults to settings)")
    args = parser.parse_args()

    setup_logging()
    asyncio.run(main(reset=args.reset, database_url=args.database_url))
