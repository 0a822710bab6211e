from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text, event
from typing import AsyncGenerator, Optional
import logging

from configurator.core.config import settings
from configurator.db.base_class import Base

logger = logging.getLogger(__name__)


def is_sqlite_url(url: str) -> bool:
    return url.startswith("sqlite")


def install_sqlite_transaction_hooks(engine: AsyncEngine) -> None:
    """
    Make every SQLite transaction take the write lock up front.

    The pysqlite driver defers BEGIN until the first write, which lets two
    order transactions read the same availability before either decrements it.
    Disabling the driver's own BEGIN and emitting BEGIN IMMEDIATE serializes
    writers at the start of the transaction instead.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_async_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Create the async engine used for order transactions."""
    async_db_url = database_url or settings.async_database_url
    if not async_db_url:
        raise ValueError("Async database URL is not configured")

    # Replace any escaped colons in the URL
    async_db_url = async_db_url.replace("\\x3a", ":")

    if is_sqlite_url(async_db_url):
        engine = create_async_engine(
            async_db_url,
            echo=settings.ASYNC_DB_ECHO,
            connect_args={"timeout": settings.SQLITE_BUSY_TIMEOUT},
        )
        install_sqlite_transaction_hooks(engine)
        return engine

    return create_async_engine(
        async_db_url,
        echo=settings.ASYNC_DB_ECHO,
        isolation_level=settings.ORDER_ISOLATION_LEVEL,
        pool_pre_ping=settings.ASYNC_DB_POOL_PRE_PING,
        pool_size=settings.ASYNC_DB_POOL_SIZE,
        max_overflow=settings.ASYNC_DB_MAX_OVERFLOW,
        pool_recycle=settings.ASYNC_DB_POOL_RECYCLE,
        pool_timeout=settings.ASYNC_DB_POOL_TIMEOUT,
        connect_args={
            "server_settings": {
                "application_name": "restaurant_configurator",
            },
        },
    )


class AsyncDatabaseManager:
    """
    Manages the async engine and session factory.

    Sessions handed out here never autocommit; order services drive
    begin/commit/rollback through AsyncTransactionManager.
    """

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = database_url or settings.async_database_url
        self.async_engine: Optional[AsyncEngine] = build_async_engine(self.database_url)
        self.async_session_factory = async_sessionmaker(
            bind=self.async_engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Keep objects accessible after commit
            autoflush=False,
        )
        logger.info(f"Async database engine initialized for {self.database_url.split('://', 1)[0]}")

    async def create_tables(self) -> None:
        """Create all tables known to the metadata (development and tests)."""
        import configurator.models  # noqa: F401

        async with self.async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        import configurator.models  # noqa: F401

        async with self.async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def get_async_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session and roll back anything left open on error.

        Yields:
            AsyncSession: Database session for async operations
        """
        async with self.async_session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Database error in session: {e}")
                raise

    async def test_connection(self) -> bool:
        try:
            async with self.async_session_factory() as session:
                await session.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection test failed: {e}")
            return False

    async def close(self) -> None:
        if self.async_engine:
            await self.async_engine.dispose()
            logger.info("Async database engine disposed successfully")
            self.async_engine = None


# Global async database manager instance, created on first use
_async_db_manager: Optional[AsyncDatabaseManager] = None


def get_async_db_manager(database_url: Optional[str] = None) -> AsyncDatabaseManager:
    """Return the process-wide manager, creating it for `database_url` (or settings) on first use."""
    global _async_db_manager
    if _async_db_manager is None:
        _async_db_manager = AsyncDatabaseManager(database_url)
    return _async_db_manager


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """Session dependency for callers embedding the engine (HTTP layer, scripts)."""
    async for session in get_async_db_manager().get_async_session():
        yield session


async def shutdown_async_database() -> None:
    global _async_db_manager
    if _async_db_manager is not None:
        await _async_db_manager.close()
        _async_db_manager = None
