"""
Integration tests for the async database manager.
"""

import pytest
from sqlalchemy import text

from configurator.db import async_session
from configurator.db.async_session import (
    AsyncDatabaseManager,
    get_async_db,
    get_async_db_manager,
    shutdown_async_database,
)
from configurator.services.catalog import AsyncCatalogService
from seed_data.seed_catalog import main as seed_main


@pytest.mark.asyncio
async def test_connection(db_manager):
    assert await db_manager.test_connection() is True


@pytest.mark.asyncio
async def test_get_async_session_yields_working_session(db_manager):
    async for session in db_manager.get_async_session():
        result = await session.execute(text("SELECT 1"))
        assert result.scalar() == 1


@pytest.mark.asyncio
async def test_foreign_keys_enforced(db_manager):
    async with db_manager.async_session_factory() as db:
        result = await db.execute(text("PRAGMA foreign_keys"))
        assert result.scalar() == 1


@pytest.mark.asyncio
async def test_drop_and_close(async_test_db_url):
    manager = AsyncDatabaseManager(async_test_db_url)
    await manager.create_tables()
    await manager.drop_tables()
    await manager.close()

    assert manager.async_engine is None


@pytest.mark.asyncio
async def test_global_manager_session_dependency(async_test_db_url):
    manager = get_async_db_manager(async_test_db_url)
    try:
        assert get_async_db_manager() is manager

        async for session in get_async_db():
            result = await session.execute(text("SELECT 1"))
            assert result.scalar() == 1
    finally:
        await shutdown_async_database()

    assert manager.async_engine is None
    assert async_session._async_db_manager is None


@pytest.mark.asyncio
async def test_seed_script_seeds_once(async_test_db_url):
    assert await seed_main(database_url=async_test_db_url) is True
    assert await seed_main(database_url=async_test_db_url) is False
    assert async_session._async_db_manager is None

    manager = AsyncDatabaseManager(async_test_db_url)
    try:
        async with manager.async_session_factory() as db:
            ingredients = await AsyncCatalogService.get_ingredients_by_ids(db, list(range(1, 12)))
        assert len(ingredients) == 11
    finally:
        await manager.close()
