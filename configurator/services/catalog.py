from typing import Dict, Iterable, List, Optional

from sqlalchemy import select, union_all
from sqlalchemy.ext.asyncio import AsyncSession

from configurator.models.base_dish import BaseDish
from configurator.models.ingredient import Ingredient, IngredientDependency, IngredientIncompatibility
from configurator.models.size import Size
from configurator.schemas.catalog import CatalogSnapshot, DishSnapshot, IngredientSnapshot, SizeSnapshot
from configurator.utils.logger import catalog_logger


def _unique_in_order(values: Iterable[int]) -> List[int]:
    seen = set()
    result = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


class AsyncCatalogService:
    """
    Read access to dishes, sizes, ingredients and their rule edges.

    Nothing here writes; ingredient availability is changed only through
    AsyncInventoryLedger inside an order transaction.
    """

    @staticmethod
    async def get_dish(db: AsyncSession, dish_id: int) -> Optional[DishSnapshot]:
        result = await db.execute(select(BaseDish).where(BaseDish.id == dish_id))
        dish = result.scalar_one_or_none()
        return DishSnapshot.model_validate(dish) if dish else None

    @staticmethod
    async def get_size(db: AsyncSession, size_id: int) -> Optional[SizeSnapshot]:
        result = await db.execute(select(Size).where(Size.id == size_id))
        size = result.scalar_one_or_none()
        return SizeSnapshot.model_validate(size) if size else None

    @staticmethod
    async def get_ingredients_by_ids(db: AsyncSession, ingredient_ids: List[int]) -> List[IngredientSnapshot]:
        """Fetch ingredients by id; unknown ids are simply absent from the result."""
        if not ingredient_ids:
            return []

        # Column select so availability is always read fresh, never from the identity map
        stmt = select(
            Ingredient.id, Ingredient.name, Ingredient.price, Ingredient.availability
        ).where(Ingredient.id.in_(ingredient_ids))
        result = await db.execute(stmt)
        return [IngredientSnapshot.model_validate(dict(row._mapping)) for row in result.all()]

    @staticmethod
    async def get_dependencies(db: AsyncSession, ingredient_id: int) -> List[int]:
        """Ids of the ingredients `ingredient_id` requires."""
        stmt = (
            select(IngredientDependency.depends_on_id)
            .where(IngredientDependency.ingredient_id == ingredient_id)
            .order_by(IngredientDependency.depends_on_id)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())

    @staticmethod
    async def get_incompatibilities(db: AsyncSession, ingredient_id: int) -> List[int]:
        """
        Ids of the ingredients that cannot be combined with `ingredient_id`.

        Edges are matched in both orientations, so a pair stored only as
        (A, B) still makes B incompatible with A.
        """
        forward = select(IngredientIncompatibility.ingredient2_id.label("other_id")).where(
            IngredientIncompatibility.ingredient1_id == ingredient_id
        )
        backward = select(IngredientIncompatibility.ingredient1_id.label("other_id")).where(
            IngredientIncompatibility.ingredient2_id == ingredient_id
        )
        both = union_all(forward, backward).subquery()
        result = await db.execute(select(both.c.other_id).order_by(both.c.other_id))
        return _unique_in_order(other for other in result.scalars().all() if other != ingredient_id)

    @staticmethod
    async def load_snapshot(
        db: AsyncSession,
        dish_id: int,
        size_id: int,
        ingredient_ids: List[int]
    ) -> CatalogSnapshot:
        """
        Read everything the constraint evaluator needs for one candidate order.

        Run inside the order transaction, this is the commit-time view of
        the catalog; run outside it, it is only advisory.
        """
        dish = await AsyncCatalogService.get_dish(db, dish_id)
        size = await AsyncCatalogService.get_size(db, size_id)

        candidates = await AsyncCatalogService.get_ingredients_by_ids(db, ingredient_ids)
        ingredients: Dict[int, IngredientSnapshot] = {ing.id: ing for ing in candidates}

        dependencies: Dict[int, tuple] = {}
        incompatibilities: Dict[int, tuple] = {}
        for ingredient_id in ingredients:
            dependencies[ingredient_id] = tuple(await AsyncCatalogService.get_dependencies(db, ingredient_id))
            incompatibilities[ingredient_id] = tuple(
                await AsyncCatalogService.get_incompatibilities(db, ingredient_id)
            )

        # Names for referenced ingredients that were not selected
        referenced = {
            other
            for edges in (*dependencies.values(), *incompatibilities.values())
            for other in edges
            if other not in ingredients
        }
        for ingredient in await AsyncCatalogService.get_ingredients_by_ids(db, sorted(referenced)):
            ingredients[ingredient.id] = ingredient

        catalog_logger.debug(
            "Loaded catalog snapshot", "SNAPSHOT",
            dish_id=dish_id, size_id=size_id, ingredients=len(ingredients)
        )

        return CatalogSnapshot(
            dish=dish,
            size=size,
            ingredients=ingredients,
            dependencies=dependencies,
            incompatibilities=incompatibilities,
        )
