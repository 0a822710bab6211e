"""
Error taxonomy for the order engine.

Three outcomes reach the caller of an order operation:

- ``OrderValidationError``: the ingredient combination (or dish/size) is
  not acceptable; the customer can correct it.
- ``PersistenceFailure``: the store could not begin or commit the
  transaction. Rollback guarantees no partial effect, so resubmitting is safe.
- A zero-row deletion, which is a result value and not an exception.

``AsyncErrorHandler`` classifies any of these (and raw driver errors) into
the status/detail/retryable triple an HTTP layer needs.
"""

import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

from sqlalchemy.exc import (
    SQLAlchemyError,
    IntegrityError,
    OperationalError,
    DisconnectionError,
    TimeoutError as SQLTimeoutError,
    DataError,
    DatabaseError
)
import asyncpg

from configurator.schemas.violation import OrderViolation

logger = logging.getLogger(__name__)


class AsyncDatabaseError(Exception):
    """Base exception for async database operations."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.message = message
        self.original_error = original_error
        super().__init__(self.message)


class PersistenceFailure(AsyncDatabaseError):
    """The order transaction could not be completed and was rolled back."""
    pass


class OrderValidationError(Exception):
    """Raised when a proposed order breaks a catalog or inventory rule."""

    def __init__(self, violation: OrderViolation):
        self.violation = violation
        super().__init__(violation.message)

    @property
    def kind(self):
        return self.violation.kind


class AsyncErrorHandler:
    """
    Classifies order-engine and database errors.

    Provides the status code, detail and retry-safety an outer layer
    should report for a failed operation.
    """

    # Mapping of SQLAlchemy errors to status codes and messages
    ERROR_MAPPINGS = {
        IntegrityError: {
            'status_code': HTTPStatus.CONFLICT,
            'detail': 'Data integrity constraint violation',
            'retryable': False
        },
        OperationalError: {
            'status_code': HTTPStatus.SERVICE_UNAVAILABLE,
            'detail': 'Database operation failed',
            'retryable': True
        },
        DisconnectionError: {
            'status_code': HTTPStatus.SERVICE_UNAVAILABLE,
            'detail': 'Database connection lost',
            'retryable': True
        },
        SQLTimeoutError: {
            'status_code': HTTPStatus.GATEWAY_TIMEOUT,
            'detail': 'Database operation timed out',
            'retryable': True
        },
        DataError: {
            'status_code': HTTPStatus.BAD_REQUEST,
            'detail': 'Invalid data format',
            'retryable': False
        },
        DatabaseError: {
            'status_code': HTTPStatus.INTERNAL_SERVER_ERROR,
            'detail': 'Database error occurred',
            'retryable': False
        }
    }

    @classmethod
    def classify_error(cls, error: Exception) -> Dict[str, Any]:
        """
        Classify an error and return response information.

        Args:
            error: The exception that occurred

        Returns:
            Dictionary with status_code, detail, and retryable flag
        """
        if isinstance(error, OrderValidationError):
            return {
                'status_code': HTTPStatus.BAD_REQUEST,
                'detail': error.violation.message,
                'retryable': False
            }

        if isinstance(error, PersistenceFailure):
            # Status and retry-safety follow the storage error that caused the rollback
            if error.original_error is not None:
                error_info = cls.classify_error(error.original_error)
                error_info['detail'] = error.message
                return error_info
            return {
                'status_code': HTTPStatus.SERVICE_UNAVAILABLE,
                'detail': error.message,
                'retryable': True
            }

        # SQLAlchemy keeps the DBAPI error on .orig; the asyncpg adapter chains the real one as its cause
        if isinstance(error, SQLAlchemyError):
            orig = getattr(error, 'orig', None)
            for candidate in (orig, getattr(orig, '__cause__', None)):
                if isinstance(candidate, asyncpg.PostgresError):
                    return cls._handle_postgres_error(candidate)

        for exc_type, mapping in cls.ERROR_MAPPINGS.items():
            if isinstance(error, exc_type):
                return mapping.copy()

        if isinstance(error, asyncpg.PostgresError):
            return cls._handle_postgres_error(error)

        # Default to internal server error
        return {
            'status_code': HTTPStatus.INTERNAL_SERVER_ERROR,
            'detail': 'An unexpected database error occurred',
            'retryable': False
        }

    @classmethod
    def _handle_postgres_error(cls, error: asyncpg.PostgresError) -> Dict[str, Any]:
        """
        Handle PostgreSQL-specific errors from asyncpg.

        Args:
            error: PostgreSQL error from asyncpg

        Returns:
            Dictionary with error classification
        """
        # SERIALIZABLE transactions lose races this way; the whole order rolled back
        if isinstance(error, (asyncpg.SerializationError, asyncpg.DeadlockDetectedError)):
            return {
                'status_code': HTTPStatus.SERVICE_UNAVAILABLE,
                'detail': 'Concurrent update conflict',
                'retryable': True
            }

        if isinstance(error, (asyncpg.ConnectionDoesNotExistError,
                              asyncpg.ConnectionFailureError)):
            return {
                'status_code': HTTPStatus.SERVICE_UNAVAILABLE,
                'detail': 'Database connection failed',
                'retryable': True
            }

        if isinstance(error, asyncpg.UniqueViolationError):
            return {
                'status_code': HTTPStatus.CONFLICT,
                'detail': 'Unique constraint violation',
                'retryable': False
            }

        if isinstance(error, asyncpg.ForeignKeyViolationError):
            return {
                'status_code': HTTPStatus.CONFLICT,
                'detail': 'Foreign key constraint violation',
                'retryable': False
            }

        if isinstance(error, asyncpg.CheckViolationError):
            return {
                'status_code': HTTPStatus.BAD_REQUEST,
                'detail': 'Data validation constraint violation',
                'retryable': False
            }

        return {
            'status_code': HTTPStatus.INTERNAL_SERVER_ERROR,
            'detail': f'PostgreSQL error: {error.sqlstate}',
            'retryable': False
        }

    @classmethod
    def to_persistence_failure(cls, error: SQLAlchemyError, operation_name: str) -> PersistenceFailure:
        """Wrap a storage error raised inside an order transaction."""
        error_info = cls.classify_error(error)

        if error_info['retryable']:
            logger.warning(f"Retryable error in {operation_name}: {error}")
        else:
            logger.error(f"Non-retryable error in {operation_name}: {error}")

        return PersistenceFailure(f"{operation_name} failed: {error_info['detail']}", original_error=error)

    @classmethod
    def is_retryable(cls, error: Exception) -> bool:
        """
        Check if a failed operation can be resubmitted by the caller.

        Args:
            error: The exception to check

        Returns:
            True if the error can be retried, False otherwise
        """
        error_info = cls.classify_error(error)
        return error_info.get('retryable', False)
