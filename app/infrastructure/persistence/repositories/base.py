"""Base repository: transactional session scope and generic lookups."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.infrastructure.exceptions import StorageException
from app.infrastructure.persistence.database import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository owning one committed transaction per operation.

    Each public operation opens a session from the shared factory, runs in
    session.begin() and commits before returning, so callers only see
    results that are durable. IntegrityError is re-raised for subclasses to
    map; every other driver or connection error becomes StorageException.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type[ModelType],
    ) -> None:
        self.session_factory = session_factory
        self.model = model

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        """Yield a session inside a transaction; commit on exit, roll back on error."""
        try:
            async with self.session_factory() as session:
                async with session.begin():
                    yield session
        except IntegrityError:
            raise
        except (SQLAlchemyError, OSError) as e:
            logger.exception("Primary store %s failed on %s", operation, self.model.__name__)
            raise StorageException(operation, str(e)) from e

    async def _get_by(self, session: AsyncSession, column: str, value: Any) -> ModelType | None:
        """Return the single row where column == value, or None."""
        result = await session.execute(
            select(self.model).where(getattr(self.model, column) == value)
        )
        return result.scalar_one_or_none()
