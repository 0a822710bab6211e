from decimal import Decimal
from typing import List, Optional

from sqlalchemy import select, insert, delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from configurator.models.order import Order, OrderIngredient
from configurator.schemas.order import OrderIngredientItem, OrderResponse


def _owned_order_ids(order_id: int, user_id: int):
    return select(Order.id).where(Order.id == order_id, Order.user_id == user_id)


class AsyncOrderStore:
    """
    Row-level access to orders and their ingredient associations.

    Callers own the transaction; nothing here commits.
    """

    @staticmethod
    async def insert_order(db: AsyncSession, user_id: int, dish_id: int, size_id: int, total: Decimal) -> int:
        order = Order(user_id=user_id, dish_id=dish_id, size_id=size_id, total=total)
        db.add(order)
        await db.flush()
        return order.id

    @staticmethod
    async def insert_order_ingredient(db: AsyncSession, order_id: int, ingredient_id: int) -> None:
        await db.execute(insert(OrderIngredient).values(order_id=order_id, ingredient_id=ingredient_id))

    @staticmethod
    async def get_order_ingredient_ids(
        db: AsyncSession,
        order_id: int,
        user_id: Optional[int] = None
    ) -> List[int]:
        """Ingredient ids of an order; with `user_id`, only if that user owns it."""
        stmt = select(OrderIngredient.ingredient_id).where(OrderIngredient.order_id == order_id)
        if user_id is not None:
            stmt = stmt.where(OrderIngredient.order_id.in_(_owned_order_ids(order_id, user_id)))
        result = await db.execute(stmt.order_by(OrderIngredient.ingredient_id))
        return list(result.scalars().all())

    @staticmethod
    async def delete_order_ingredients(db: AsyncSession, order_id: int, user_id: Optional[int] = None) -> int:
        stmt = delete(OrderIngredient).where(OrderIngredient.order_id == order_id)
        if user_id is not None:
            stmt = stmt.where(OrderIngredient.order_id.in_(_owned_order_ids(order_id, user_id)))
        result = await db.execute(stmt.execution_options(synchronize_session=False))
        return result.rowcount

    @staticmethod
    async def delete_order(db: AsyncSession, order_id: int, user_id: int) -> int:
        """Delete the order row only if `user_id` owns it. Returns rows affected (0 or 1)."""
        stmt = (
            delete(Order)
            .where(Order.id == order_id, Order.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await db.execute(stmt)
        return result.rowcount

    @staticmethod
    async def list_orders(db: AsyncSession, user_id: int) -> List[OrderResponse]:
        """A user's orders with their ingredients, most recent first."""
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .options(
                selectinload(Order.dish),
                selectinload(Order.size),
                selectinload(Order.order_ingredients).selectinload(OrderIngredient.ingredient),
            )
            .order_by(Order.id.desc())
        )
        result = await db.execute(stmt)

        return [
            OrderResponse(
                id=order.id,
                dish_id=order.dish_id,
                dish=order.dish.name,
                size_id=order.size_id,
                size=order.size.name,
                size_price=order.size.price,
                total=order.total,
                ingredients=[
                    OrderIngredientItem.model_validate(item.ingredient)
                    for item in sorted(order.order_ingredients, key=lambda item: item.ingredient_id)
                ],
            )
            for order in result.scalars().all()
        ]
