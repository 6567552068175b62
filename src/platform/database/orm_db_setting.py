"""
SQLAlchemy async engine and session management

- Database: owns one event-loop-aware engine and hands out sessions
- Base: declarative base shared by every model
- create_db_and_tables: schema bootstrap used by the app lifespan and tests

PostgreSQL (asyncpg) gets a tuned connection pool. SQLite (aiosqlite) keeps the
dialect default pool, turns foreign keys on and opens every transaction with
BEGIN IMMEDIATE so concurrent writers queue on the busy timeout instead of
failing on a lock upgrade.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


class Base(DeclarativeBase):
    pass


def _enable_sqlite_locking(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, 'connect')
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        # Hand transaction control to the 'begin' hook below
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()

    @event.listens_for(engine.sync_engine, 'begin')
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql('BEGIN IMMEDIATE')


class Database:
    """
    Engine and session factory for one database URL.

    The engine is rebuilt when the running event loop changes, which keeps
    pytest-asyncio's per-test loops from sharing pooled connections.
    """

    def __init__(self, *, url: Optional[str] = None, echo: bool = False) -> None:
        self._url = url or settings.DATABASE_URL_ASYNC
        self._echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_sqlite(self) -> bool:
        return self._url.startswith('sqlite')

    @property
    def engine(self) -> AsyncEngine:
        try:
            current_loop: Optional[asyncio.AbstractEventLoop] = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        if self._engine is None or (current_loop is not None and self._loop is not current_loop):
            if self._engine is not None:
                Logger.base.warning('🔄 [DB] Event loop changed, replacing engine')
                # Pooled connections belong to the old loop; drop them without awaiting a close
                self._engine.sync_engine.dispose(close=False)
            self._engine = self._create_engine()
            self._session_maker = None
            self._loop = current_loop
        return self._engine

    def _create_engine(self) -> AsyncEngine:
        if self.is_sqlite:
            engine = create_async_engine(self._url, echo=self._echo)
            _enable_sqlite_locking(engine)
            return engine

        return create_async_engine(
            self._url,
            echo=self._echo,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
        )

    def get_session_maker(self) -> async_sessionmaker[AsyncSession]:
        engine = self.engine
        if self._session_maker is None:
            self._session_maker = async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_maker

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session context; rolls back whatever is left uncommitted on exit."""
        async with self.get_session_maker()() as session:
            yield session

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_maker = None
            self._loop = None


async def create_db_and_tables(database: Database) -> None:
    """Create database tables if they don't exist"""
    # Models register themselves on Base.metadata when imported
    from src.service.booking.driven_adapter.model import (  # noqa: F401
        booking_model,
        inventory_item_model,
        member_model,
    )

    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info('🗄️ [DB] Schema ready')

