"""Store capability consumed by the catalog services.

Services never build engines or sessions themselves; they receive a
``CatalogStore`` and ask it for either a read session or an atomic unit.
Tests hand in a store bound to an in-memory SQLite database.
"""
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Protocol

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog.core.exceptions import ConstraintViolationError
from catalog.core.logging import get_logger

logger = get_logger("store")


class CatalogStore(Protocol):
    """Query and transaction capability."""

    def session(self) -> AsyncContextManager[AsyncSession]:
        """Session for reads; nothing is committed."""
        ...

    def transaction(self) -> AsyncContextManager[AsyncSession]:
        """Session inside one atomic unit: commit on success, rollback on error."""
        ...


class SqlAlchemyStore:
    """``CatalogStore`` backed by an SQLAlchemy async session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            yield session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                async with session.begin():
                    yield session
            except IntegrityError as exc:
                logger.warning("Transaction rolled back: constraint violated (%s)", exc.orig)
                raise ConstraintViolationError(
                    f"The store rejected the write: {exc.orig}"
                ) from exc
            except Exception as exc:
                logger.warning("Transaction rolled back: %s", type(exc).__name__)
                raise
