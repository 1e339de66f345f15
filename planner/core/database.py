"""
Async Database Manager for the Daily Planner with SQLAlchemy
- Explicit store status instead of a nullable global handle
- Automatic database creation if missing (PostgreSQL)
- Table initialization on startup
"""
import logging
from importlib import import_module
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional
from sqlalchemy import text
import sqlalchemy
from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine
)
import asyncpg
from planner.constants.constants import StoreStatus
from planner.core.config import settings
from planner.models.base import Base
from planner.services.TaskStore import TaskStore

logger = logging.getLogger(__name__)


class StoreUnavailableError(RuntimeError):
    """Raised when a store-backed operation runs without a configured database."""

    def __init__(self, message: str = "Database not available"):
        super().__init__(message)


class DatabaseSessionManager:
    """Manages async database sessions with auto-creation and setup."""

    def __init__(self):
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    @property
    def status(self) -> StoreStatus:
        if self.session_factory is None:
            return StoreStatus.unconfigured
        return StoreStatus.available

    async def init(self, database_url: Optional[str] = None):
        """Initialize database connection with auto-creation fallback"""
        db_url = database_url or settings.DATABASE_URL
        if not db_url:
            logger.warning("DATABASE_URL is not set; store is unavailable")
            return

        try:
            self.engine = self._create_engine(db_url)

            try:
                async with self.engine.begin() as conn:
                    await self._setup_database(conn)
            except asyncpg.exceptions.InvalidCatalogNameError:
                if not await self._create_database(db_url):
                    raise
                async with self.engine.begin() as conn:
                    await self._setup_database(conn)

            self.session_factory = async_sessionmaker(
                bind=self.engine,
                expire_on_commit=False,
                autoflush=False
            )
            logger.info("Database ready (%s)", make_url(db_url).get_backend_name())

        except Exception as e:
            logger.error(f"Database initialization failed: {e}")
            await self.close()
            raise

    def _create_engine(self, db_url: str) -> AsyncEngine:
        """Build the engine; pool tuning only applies to PostgreSQL."""
        if make_url(db_url).get_backend_name() == "postgresql":
            return create_async_engine(
                db_url,
                pool_size=15,
                max_overflow=5,
                pool_timeout=30,
                pool_recycle=300,
                pool_pre_ping=True,
                echo=settings.DB_ECHO,
                connect_args={"prepared_statement_cache_size": 0}
            )
        return create_async_engine(db_url, echo=settings.DB_ECHO)

    async def _setup_database(self, conn):
        """Initialize database schema"""
        await conn.execute(text("SELECT 1"))
        for model in settings.DB_MODELS:
            import_module(model)

        await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Tables ready: {list(Base.metadata.tables.keys())}")

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Context manager for safe session handling"""
        if self.status is StoreStatus.unconfigured:
            raise StoreUnavailableError()
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def _create_database(self, db_url: str) -> bool:
        """Create the database if it does not exist"""
        try:
            url = make_url(db_url)
            db_name = url.database

            # Connect to the default database (usually 'postgres')
            default_url = url.set(database="postgres")
            engine = create_async_engine(default_url, isolation_level="AUTOCOMMIT")
            async with engine.connect() as conn:
                await conn.execute(text(f'CREATE DATABASE "{db_name}"'))
            await engine.dispose()
            logger.info(f"Database '{db_name}' created successfully.")
            return True
        except (asyncpg.exceptions.PostgresError, sqlalchemy.exc.SQLAlchemyError) as e:
            logger.error(f"Failed to create database: {e}")
            return False

    async def close(self):
        """Cleanup connection pool"""
        if self.engine:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None

# Initialize session manager
session_manager = DatabaseSessionManager()


async def aget_store() -> AsyncGenerator[TaskStore, None]:
    """
    FastAPI dependency for the persistence client.
    Raises StoreUnavailableError when no database is configured.
    Usage:
    @router.get("/")
    async def endpoint(store: TaskStore = Depends(aget_store)):
        ...
    """
    async with session_manager.get_session() as session:
        yield TaskStore(session)
