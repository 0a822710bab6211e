"""
Test configuration and fixtures for pytest.

Every test gets its own SQLite file so order transactions (which take the
write lock with BEGIN IMMEDIATE) never interfere across tests. Sessions are
short-lived: open one per operation with ``async with session_factory() as db``.
"""

import os
import sys
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy import insert

# Add the project root to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from configurator.db.async_session import AsyncDatabaseManager
from configurator.db.seed import seed_catalog
from configurator.models.base_dish import BaseDish
from configurator.models.ingredient import Ingredient, IngredientDependency, IngredientIncompatibility
from configurator.models.size import Size
from configurator.models.user import User
from configurator.services.base import AsyncTransactionManager


@pytest.fixture
def async_test_db_url(tmp_path) -> str:
    """Get a fresh async SQLite URL for one test."""
    return f"sqlite+aiosqlite:///{tmp_path / 'test_orders.db'}"


@pytest_asyncio.fixture
async def db_manager(async_test_db_url):
    """Database manager with all tables created."""
    manager = AsyncDatabaseManager(async_test_db_url)
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
def session_factory(db_manager):
    return db_manager.async_session_factory


@pytest_asyncio.fixture
async def seeded_factory(session_factory):
    """Session factory over the full reference catalog."""
    async with session_factory() as db:
        await seed_catalog(db)
    return session_factory


@pytest_asyncio.fixture
async def pizza_factory(session_factory):
    """
    Session factory over a minimal pizza catalog.

    Mozzarella (tracked, 3 left) requires Tomatoes (unlimited); Eggs and
    Mushrooms are incompatible, stored in one orientation only.
    """
    async with session_factory() as db:
        async with AsyncTransactionManager(db, "test catalog"):
            await db.execute(insert(User), [
                {"id": 1, "email": "owner@example.com", "name": "Owner"},
                {"id": 2, "email": "other@example.com", "name": "Other"},
            ])
            await db.execute(insert(BaseDish), [{"id": 1, "name": "Pizza"}])
            await db.execute(insert(Size), [
                {"id": 1, "name": "Small", "price": Decimal("5.00"), "max_ingredients": 3},
                {"id": 2, "name": "Medium", "price": Decimal("7.00"), "max_ingredients": 5},
            ])
            await db.execute(insert(Ingredient), [
                {"id": 1, "name": "Mozzarella", "price": Decimal("1.00"), "availability": 3},
                {"id": 2, "name": "Tomatoes", "price": Decimal("0.50"), "availability": None},
                {"id": 3, "name": "Mushrooms", "price": Decimal("0.80"), "availability": 1},
                {"id": 4, "name": "Eggs", "price": Decimal("1.00"), "availability": None},
            ])
            await db.execute(insert(IngredientDependency), [{"ingredient_id": 1, "depends_on_id": 2}])
            await db.execute(insert(IngredientIncompatibility), [{"ingredient1_id": 4, "ingredient2_id": 3}])
    return session_factory

