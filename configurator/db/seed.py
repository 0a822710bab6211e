"""
Reference catalog for the restaurant.

Ingredient availability of None means the ingredient is not tracked.
Incompatibilities are listed once per pair; both orientations are stored
so that either direction can be queried directly.
"""

from decimal import Decimal

from sqlalchemy import insert, select, func
from sqlalchemy.ext.asyncio import AsyncSession

from configurator.models.base_dish import BaseDish
from configurator.models.ingredient import Ingredient, IngredientDependency, IngredientIncompatibility
from configurator.models.size import Size
from configurator.models.user import User
from configurator.services.base import AsyncTransactionManager
from configurator.utils.logger import db_logger

USERS = [
    {"id": 1, "email": "alice@example.com", "name": "Alice"},
    {"id": 2, "email": "bob@example.com", "name": "Bob"},
    {"id": 3, "email": "carol@example.com", "name": "Carol"},
    {"id": 4, "email": "dave@example.com", "name": "Dave"},
]

BASE_DISHES = [
    {"id": 1, "name": "Pizza"},
    {"id": 2, "name": "Pasta"},
    {"id": 3, "name": "Salad"},
]

SIZES = [
    {"id": 1, "name": "Small", "price": Decimal("5.00"), "max_ingredients": 3},
    {"id": 2, "name": "Medium", "price": Decimal("7.00"), "max_ingredients": 5},
    {"id": 3, "name": "Large", "price": Decimal("9.00"), "max_ingredients": 7},
]

INGREDIENTS = [
    {"id": 1, "name": "Mozzarella", "price": Decimal("1.00"), "availability": 3},
    {"id": 2, "name": "Tomatoes", "price": Decimal("0.50"), "availability": None},
    {"id": 3, "name": "Mushrooms", "price": Decimal("0.80"), "availability": 3},
    {"id": 4, "name": "Ham", "price": Decimal("1.20"), "availability": 2},
    {"id": 5, "name": "Olives", "price": Decimal("0.70"), "availability": None},
    {"id": 6, "name": "Tuna", "price": Decimal("1.50"), "availability": 2},
    {"id": 7, "name": "Eggs", "price": Decimal("1.00"), "availability": None},
    {"id": 8, "name": "Anchovies", "price": Decimal("1.50"), "availability": 1},
    {"id": 9, "name": "Parmesan", "price": Decimal("1.20"), "availability": None},
    {"id": 10, "name": "Carrots", "price": Decimal("0.40"), "availability": None},
    {"id": 11, "name": "Potatoes", "price": Decimal("0.30"), "availability": None},
]

# (ingredient, requires)
DEPENDENCIES = [
    (2, 5),   # Tomatoes require Olives
    (9, 1),   # Parmesan requires Mozzarella
    (1, 2),   # Mozzarella requires Tomatoes
    (6, 5),   # Tuna requires Olives
]

INCOMPATIBLE_PAIRS = [
    (7, 3),   # Eggs / Mushrooms
    (7, 2),   # Eggs / Tomatoes
    (4, 3),   # Ham / Mushrooms
    (5, 8),   # Olives / Anchovies
]


async def seed_catalog(db: AsyncSession, include_users: bool = True) -> bool:
    """
    Insert the reference catalog in one transaction.

    Returns:
        False if ingredients already exist and nothing was inserted
    """
    async with AsyncTransactionManager(db, "seed catalog"):
        existing = (await db.execute(select(func.count(Ingredient.id)))).scalar()
        if existing:
            db_logger.info("Catalog already seeded, skipping", "SEED", ingredients=existing)
            return False

        if include_users:
            await db.execute(insert(User), USERS)
        await db.execute(insert(BaseDish), BASE_DISHES)
        await db.execute(insert(Size), SIZES)
        await db.execute(insert(Ingredient), INGREDIENTS)
        await db.execute(
            insert(IngredientDependency),
            [{"ingredient_id": a, "depends_on_id": b} for a, b in DEPENDENCIES],
        )
        await db.execute(
            insert(IngredientIncompatibility),
            [
                {"ingredient1_id": a, "ingredient2_id": b}
                for first, second in INCOMPATIBLE_PAIRS
                for a, b in ((first, second), (second, first))
            ],
        )

    db_logger.success("Catalog seeded", "SEED",
                      dishes=len(BASE_DISHES), sizes=len(SIZES), ingredients=len(INGREDIENTS))
    return True
