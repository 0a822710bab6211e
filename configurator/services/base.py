"""
Transaction management for async order operations.

Every order mutation runs inside one AsyncTransactionManager scope: the
session's transaction is begun on entry, committed when the block finishes,
and rolled back when anything inside it raises. Storage errors leave the
scope as PersistenceFailure; every other exception (validation errors
included) propagates unchanged after the rollback.
"""

from typing import Any, Callable
import logging

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from configurator.services.async_error_handler import AsyncErrorHandler

logger = logging.getLogger(__name__)


class AsyncTransactionManager:
    """
    Async context manager owning one database transaction.

    Usage:
        async with AsyncTransactionManager(db, "create order"):
            ...  # all statements here commit or roll back together
    """

    def __init__(self, db: AsyncSession, operation_name: str = "transaction"):
        """
        Initialize transaction manager with database session.

        Args:
            db: Async database session; must not have a transaction in progress
            operation_name: Label used in logs and failure messages
        """
        self.db = db
        self.operation_name = operation_name

    async def __aenter__(self):
        """Begin the transaction."""
        try:
            await self.db.begin()
        except SQLAlchemyError as e:
            raise AsyncErrorHandler.to_persistence_failure(e, self.operation_name) from e
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Commit on success, roll back on any exception."""
        if exc_type is not None:
            await self.rollback()
            if isinstance(exc_val, SQLAlchemyError):
                raise AsyncErrorHandler.to_persistence_failure(exc_val, self.operation_name) from exc_val
            return False

        await self.commit()
        return False

    async def commit(self):
        """Commit the current transaction."""
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Error committing {self.operation_name}: {e}")
            await self.rollback()
            raise AsyncErrorHandler.to_persistence_failure(e, self.operation_name) from e

    async def rollback(self):
        """Rollback the current transaction."""
        try:
            await self.db.rollback()
        except SQLAlchemyError as e:
            logger.error(f"Error rolling back {self.operation_name}: {e}")
            raise AsyncErrorHandler.to_persistence_failure(e, self.operation_name) from e


async def with_transaction(db: AsyncSession, operation_name: str, operation: Callable, *args, **kwargs) -> Any:
    """
    Execute an operation within a transaction context.

    Args:
        db: Async database session
        operation_name: Label used in logs and failure messages
        operation: Async callable taking the session as first argument
        *args: Positional arguments for the operation
        **kwargs: Keyword arguments for the operation

    Returns:
        Operation result
    """
    async with AsyncTransactionManager(db, operation_name):
        return await operation(db, *args, **kwargs)
