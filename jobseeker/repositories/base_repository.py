"""
Base Repository Pattern Implementation

Provides abstract base repository with shared filtering and counting over
SQLAlchemy async sessions obtained from an injected DatabaseManager.
"""

from abc import ABC, abstractmethod
from typing import AsyncContextManager, TypeVar, Generic, Optional, Dict, Any, Type
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError

from jobseeker.core.database import DatabaseManager
from jobseeker.utils.logger import get_logger

ModelType = TypeVar("ModelType")

logger = get_logger(__name__)


class BaseRepository(Generic[ModelType], ABC):
    """Abstract base repository providing shared query helpers."""

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager

    @property
    @abstractmethod
    def model(self) -> Type[ModelType]:
        """Return the SQLAlchemy model class."""
        pass

    def get_session(self) -> AsyncContextManager[AsyncSession]:
        """Get a database session, rolled back if the block raises."""
        return self.db_manager.session()

    def _apply_filters(self, query, filters: Optional[Dict[str, Any]]):
        if filters:
            for field, value in filters.items():
                if value is None or not hasattr(self.model, field):
                    continue
                column = getattr(self.model, field)
                if isinstance(value, list):
                    query = query.where(column.in_(value))
                else:
                    query = query.where(column == value)
        return query

    async def count(self, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count entities with optional filters."""
        async with self.get_session() as session:
            try:
                query = self._apply_filters(select(func.count(self.model.id)), filters)
                result = await session.execute(query)
                return result.scalar() or 0

            except SQLAlchemyError as e:
                logger.error(f"Error counting {self.model.__name__}: {e}")
                return 0
