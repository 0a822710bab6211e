"""
Order creation and cancellation.

Both operations run as a single transaction:

    create: begin -> validate dish/size/ingredients against the live catalog
            -> insert order -> per ingredient: insert association, reserve
            -> commit
    delete: begin -> load the owner's order ingredients -> release each
            -> delete associations -> delete order row (id AND owner)
            -> commit

A failure anywhere rolls the whole transaction back, so an order is never
visible with a partial ingredient set or partial reservation.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from configurator.schemas.order import (
    OrderCreate,
    OrderCreated,
    OrderDeletionResult,
    OrderQuote,
    OrderResponse,
)
from configurator.services import constraints
from configurator.services.async_error_handler import OrderValidationError
from configurator.services.base import AsyncTransactionManager, with_transaction
from configurator.services.catalog import AsyncCatalogService
from configurator.services.inventory import AsyncInventoryLedger
from configurator.services.order_store import AsyncOrderStore
from configurator.utils.logger import order_logger


class AsyncOrderService:
    """
    Async order service: validated, all-or-nothing order creation and deletion.
    """

    @staticmethod
    async def _quote(db: AsyncSession, order: OrderCreate) -> OrderQuote:
        snapshot = await AsyncCatalogService.load_snapshot(db, order.dish_id, order.size_id, order.ingredient_ids)
        constraints.validate(order.ingredient_ids, snapshot)
        return OrderQuote(
            dish_id=order.dish_id,
            size_id=order.size_id,
            ingredient_ids=list(order.ingredient_ids),
            total=constraints.quote_total(order.ingredient_ids, snapshot),
        )

    @staticmethod
    async def check_order(db: AsyncSession, order: OrderCreate) -> OrderQuote:
        """
        Advisory validation without side effects.

        Availability may change before the order is submitted; create_order
        runs every check again inside its own transaction.

        Raises:
            OrderValidationError: the configuration is not acceptable
            PersistenceFailure: the catalog could not be read
        """
        return await with_transaction(db, "check order", AsyncOrderService._quote, order)

    @staticmethod
    async def create_order(db: AsyncSession, user_id: int, order: OrderCreate) -> OrderCreated:
        """
        Validate and persist an order, reserving one unit of each tracked ingredient.

        Args:
            db: Async database session with no transaction in progress
            user_id: Owner of the new order
            order: Dish, size and selected ingredients

        Returns:
            The new order id and the total charged

        Raises:
            OrderValidationError: a rule was broken; nothing was written
            PersistenceFailure: the transaction failed and was rolled back
        """
        order_logger.info(f"Creating order for user {user_id}", "CREATE",
                          dish_id=order.dish_id, size_id=order.size_id,
                          ingredients=order.ingredient_ids)
        try:
            async with AsyncTransactionManager(db, "create order"):
                quote = await AsyncOrderService._quote(db, order)

                order_id = await AsyncOrderStore.insert_order(
                    db, user_id, order.dish_id, order.size_id, quote.total
                )

                # One ingredient at a time; any failure aborts the whole order
                for ingredient_id in order.ingredient_ids:
                    await AsyncOrderStore.insert_order_ingredient(db, order_id, ingredient_id)
                    await AsyncInventoryLedger.reserve(db, ingredient_id)
        except OrderValidationError as e:
            order_logger.warning(f"Order rejected: {e.violation.message}", "CREATE",
                                 user_id=user_id, kind=e.kind.value)
            raise

        order_logger.success("Order created", "CREATE",
                             order_id=order_id, user_id=user_id, total=str(quote.total))
        return OrderCreated(order_id=order_id, total=quote.total)

    @staticmethod
    async def delete_order(db: AsyncSession, user_id: int, order_id: int) -> OrderDeletionResult:
        """
        Cancel an order and give its ingredients back to inventory.

        An order that does not exist or belongs to someone else is left
        untouched and reported with rows_affected=0; that is not an error.

        Raises:
            PersistenceFailure: the transaction failed and was rolled back
        """
        async with AsyncTransactionManager(db, "delete order"):
            ingredient_ids = await AsyncOrderStore.get_order_ingredient_ids(db, order_id, user_id=user_id)

            for ingredient_id in ingredient_ids:
                await AsyncInventoryLedger.release(db, ingredient_id)

            await AsyncOrderStore.delete_order_ingredients(db, order_id, user_id=user_id)
            rows_affected = await AsyncOrderStore.delete_order(db, order_id, user_id)

        if rows_affected:
            order_logger.success("Order cancelled", "DELETE",
                                 order_id=order_id, user_id=user_id, released=len(ingredient_ids))
        else:
            order_logger.info("Order not found or not owned by user", "DELETE",
                              order_id=order_id, user_id=user_id)
        return OrderDeletionResult(order_id=order_id, rows_affected=rows_affected)

    @staticmethod
    async def list_orders(db: AsyncSession, user_id: int) -> List[OrderResponse]:
        """Order history for a user, newest first."""
        return await with_transaction(db, "list orders", AsyncOrderStore.list_orders, user_id)
