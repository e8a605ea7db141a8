"""Database connection and session management."""

import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and session factory for one application instance.

    The engine is created lazily on first use. The application lifespan creates
    a single handle at startup, stores it on ``app.state.database`` and calls
    :meth:`dispose` at shutdown. Nothing else creates engines.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            self._engine = create_async_engine(
                self.url,
                echo=self.echo,
                pool_pre_ping=True,
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_factory

    async def init_schema(self) -> bool:
        """Create any missing tables from the models.

        Existing tables are left untouched. Returns False when the database is
        unreachable so the API can still start and report through the health
        endpoints.
        """
        # Import here to avoid circular imports
        from market_report.models import Base

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(
                    lambda sync_conn: Base.metadata.create_all(sync_conn, checkfirst=True)
                )
        except SQLAlchemyError as e:
            logger.error(f"Failed to initialize database schema: {e}")
            return False

        logger.info("Database schema initialized from models")
        return True

    async def dispose(self) -> None:
        """Release all pooled connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session from the app's handle."""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
