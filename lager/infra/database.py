"""Async database access.

Provides:
- An explicitly constructed Database owning the async engine and session factory
- Transactional sessions (commit on success, rollback on any error)
- Schema creation and connectivity checks
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import make_url, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from lager.config import settings
from lager.infra.logging import get_logger
from lager.models import Base

logger = get_logger(__name__)


class Database:
    """Engine and session factory with a controlled lifetime.

    Constructed once at process start and handed to the components
    that need it. The engine connects lazily on first use.
    """

    def __init__(self, url: str | None = None, echo: bool | None = None) -> None:
        """Initialize the database component.

        Args:
            url: SQLAlchemy async URL (defaults to settings.database_url)
            echo: Log SQL statements (defaults to settings.debug)
        """
        self.url = url or settings.database_url
        self._engine = self._create_engine(self.url, settings.debug if echo is None else echo)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @staticmethod
    def _create_engine(url: str, echo: bool) -> AsyncEngine:
        if url.startswith("sqlite"):
            in_memory = make_url(url).database in (None, "", ":memory:")
            logger.info("Creating database engine", backend="sqlite", in_memory=in_memory)
            return create_async_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                # One shared connection, otherwise every session sees its own empty database
                poolclass=StaticPool if in_memory else None,
            )

        logger.info(
            "Creating database engine",
            backend="postgresql",
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_pool_max_overflow,
        )
        return create_async_engine(
            url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_pool_max_overflow,
            pool_pre_ping=True,
            pool_recycle=1800,
            echo=echo,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def dialect(self) -> str:
        """Dialect name of the underlying engine ("sqlite", "postgresql")."""
        return self._engine.dialect.name

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Open a session that commits on exit and rolls back on error.

        Example:
            async with database.session() as session:
                session.add(Category(name="Haushalt", slug="haushalt"))
        """
        session = self._session_factory()

        try:
            yield session
            await session.commit()

        except Exception as e:
            await session.rollback()
            # Driver errors at error level, domain errors at debug
            log = logger.error if isinstance(e, SQLAlchemyError) else logger.debug
            log("Database session rolled back", error=str(e), error_type=type(e).__name__)
            raise

        finally:
            await session.close()

    async def create_all(self) -> None:
        """Create all tables that do not exist yet."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured", tables=sorted(Base.metadata.tables))

    async def drop_all(self) -> None:
        """Drop all tables. Only used by tests and local resets."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def verify_connection(self) -> bool:
        """Verify database connectivity.

        Returns:
            True if connection successful, False otherwise
        """
        try:
            async with self.session() as session:
                await session.execute(text("SELECT 1"))
            logger.info("Database connection verified")
            return True
        except Exception as e:
            logger.error("Database connection failed", error=str(e))
            return False

    async def dispose(self) -> None:
        """Close the engine and all pooled connections."""
        logger.info("Closing database engine")
        await self._engine.dispose()
