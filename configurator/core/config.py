import os

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Application settings."""

    # Application
    PROJECT_NAME: str = "Restaurant Configurator"
    PROJECT_DESCRIPTION: str = "Order configuration and inventory engine for the restaurant"
    VERSION: str = "0.1.0"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_COLORS: bool = os.getenv("LOG_COLORS", "true").lower() == "true"

    # Database
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOCAL_DATABASE_URL: str = os.getenv("LOCAL_DATABASE_URL", "sqlite:///./restaurant.db")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    @property
    def database_url(self) -> str:
        """Get the configured database URL for the current environment."""
        if self.ENVIRONMENT == "development":
            return self.LOCAL_DATABASE_URL
        return self.DATABASE_URL

    # Async Database Configuration
    @property
    def async_database_url(self) -> str:
        """Get async database URL based on environment."""
        base_url = self.database_url

        # Swap sync driver prefixes for their async counterparts
        if base_url.startswith("postgresql://"):
            return base_url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif base_url.startswith("postgres://"):
            return base_url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif base_url.startswith("sqlite://"):
            return base_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
        else:
            return base_url

    # Async Connection Pool Configuration (ignored for SQLite)
    ASYNC_DB_POOL_SIZE: int = int(os.getenv("ASYNC_DB_POOL_SIZE", "10"))
    ASYNC_DB_MAX_OVERFLOW: int = int(os.getenv("ASYNC_DB_MAX_OVERFLOW", "20"))
    ASYNC_DB_POOL_RECYCLE: int = int(os.getenv("ASYNC_DB_POOL_RECYCLE", "3600"))  # 1 hour
    ASYNC_DB_POOL_PRE_PING: bool = os.getenv("ASYNC_DB_POOL_PRE_PING", "true").lower() == "true"
    ASYNC_DB_ECHO: bool = os.getenv("ASYNC_DB_ECHO", "false").lower() == "true"
    ASYNC_DB_POOL_TIMEOUT: int = int(os.getenv("ASYNC_DB_POOL_TIMEOUT", "30"))

    # Order transactions
    ORDER_ISOLATION_LEVEL: str = os.getenv("ORDER_ISOLATION_LEVEL", "SERIALIZABLE")
    SQLITE_BUSY_TIMEOUT: float = float(os.getenv("SQLITE_BUSY_TIMEOUT", "15"))  # seconds

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


settings = Settings()
