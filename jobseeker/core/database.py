"""
Database Configuration and Session Management

Async SQLAlchemy engine and session management. A ``DatabaseManager`` is
constructed explicitly by the caller and handed to the repositories; there
is no process-wide connection.
"""

from typing import AsyncGenerator, Optional
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
    AsyncEngine
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from sqlalchemy import event, text

from jobseeker.utils.logger import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # jobs.user_id must reference an existing user
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """Database connection and session management."""

    def __init__(self, database_url: str, echo: bool = False) -> None:
        """
        Initialize database manager.

        Args:
            database_url: SQLAlchemy async database URL
            echo: Echo SQL statements
        """
        self.database_url = database_url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def engine(self) -> AsyncEngine:
        """Get database engine."""
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call init_database() first.")
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get session factory."""
        if self._session_factory is None:
            raise RuntimeError("Database not initialized. Call init_database() first.")
        return self._session_factory

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    async def init_database(self) -> None:
        """Create the engine and check the connection."""
        engine_kwargs = {"echo": self.echo}

        # In-memory SQLite needs a single shared connection
        if self.is_sqlite and ":memory:" in self.database_url:
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}

        try:
            self._engine = create_async_engine(self.database_url, **engine_kwargs)
            if self.is_sqlite:
                event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
            self._session_factory = async_sessionmaker(
                bind=self._engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )

            async with self._engine.begin() as conn:
                await conn.execute(text("SELECT 1"))

            logger.info("Database connection initialized", url=self.database_url)

        except Exception as e:
            logger.error(f"Failed to initialize database: {e}")
            raise

    async def create_tables(self) -> None:
        """Create database tables."""
        # Register models on Base.metadata
        import jobseeker.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created successfully")

    async def close_connections(self) -> None:
        """Close database connections."""
        if self._engine:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for a database session.

        Yields:
            AsyncSession: Database session, rolled back on error
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise


async def init_db(database_url: str, echo: bool = False) -> DatabaseManager:
    """Create a database manager, connect, and create tables."""
    db_manager = DatabaseManager(database_url, echo=echo)
    await db_manager.init_database()
    await db_manager.create_tables()
    return db_manager
