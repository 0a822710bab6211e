from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from configurator.models.ingredient import Ingredient
from configurator.schemas.violation import OrderViolation
from configurator.services.async_error_handler import OrderValidationError
from configurator.utils.logger import inventory_logger


class AsyncInventoryLedger:
    """
    Per-ingredient stock counters.

    Only tracked ingredients (non-NULL availability) ever change. None of
    these methods commit: they must run inside the order transaction that
    owns the reservation or release.
    """

    @staticmethod
    async def decrement_if_positive(db: AsyncSession, ingredient_id: int) -> int:
        """Take one unit if any are left. Returns the number of rows changed."""
        stmt = (
            update(Ingredient)
            .where(
                Ingredient.id == ingredient_id,
                Ingredient.availability.is_not(None),
                Ingredient.availability > 0,
            )
            .values(availability=Ingredient.availability - 1)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount

    @staticmethod
    async def increment_if_tracked(db: AsyncSession, ingredient_id: int) -> int:
        """Give back one unit. No ceiling is enforced. Returns the number of rows changed."""
        stmt = (
            update(Ingredient)
            .where(
                Ingredient.id == ingredient_id,
                Ingredient.availability.is_not(None),
            )
            .values(availability=Ingredient.availability + 1)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount

    @staticmethod
    async def get_availability(db: AsyncSession, ingredient_id: int) -> Optional[int]:
        result = await db.execute(select(Ingredient.availability).where(Ingredient.id == ingredient_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def reserve(db: AsyncSession, ingredient_id: int) -> Optional[int]:
        """
        Reserve one unit of an ingredient for the order being created.

        Returns:
            The new availability, or None for an unlimited ingredient

        Raises:
            OrderValidationError: the ingredient is tracked and already at zero,
                i.e. another order took the last unit after validation
        """
        if await AsyncInventoryLedger.decrement_if_positive(db, ingredient_id):
            remaining = await AsyncInventoryLedger.get_availability(db, ingredient_id)
            inventory_logger.debug("Reserved ingredient", "RESERVE",
                                   ingredient_id=ingredient_id, remaining=remaining)
            return remaining

        result = await db.execute(
            select(Ingredient.name, Ingredient.availability).where(Ingredient.id == ingredient_id)
        )
        row = result.one_or_none()
        if row is None:
            raise OrderValidationError(OrderViolation.unknown_ingredient(ingredient_id))
        if row.availability is None:
            return None

        inventory_logger.warning("Ingredient ran out before reservation", "RESERVE",
                                 ingredient_id=ingredient_id)
        raise OrderValidationError(OrderViolation.out_of_stock(ingredient_id, row.name))

    @staticmethod
    async def release(db: AsyncSession, ingredient_id: int) -> Optional[int]:
        """
        Return one unit of an ingredient from a cancelled order.

        Returns:
            The new availability, or None for an unlimited ingredient
        """
        if not await AsyncInventoryLedger.increment_if_tracked(db, ingredient_id):
            return None

        remaining = await AsyncInventoryLedger.get_availability(db, ingredient_id)
        inventory_logger.debug("Released ingredient", "RELEASE",
                               ingredient_id=ingredient_id, remaining=remaining)
        return remaining
