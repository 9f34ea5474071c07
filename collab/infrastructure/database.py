# collab/infrastructure/database.py
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class Database:
    """
    Owns the engine and hands out sessions.

    A session that leaves its block with an exception is rolled back before
    it is closed, so gateways only ever commit explicitly.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.engine = engine
        self.SessionLocal = session_factory or async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        self.logger = logger or logging.getLogger("CollabSync.Database")

    @property
    def url(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)

    async def create_tables(self) -> None:
        # model classes register themselves on Base.metadata at import time
        import collab.infrastructure.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        self.logger.warning(f"Dropped all tables in {self.url}")

    async def connect(self) -> None:
        await self.create_tables()
        self.logger.info(f"Database ready at {self.url}")

    async def disconnect(self) -> None:
        await self.engine.dispose()
        self.logger.info("Database connections closed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.SessionLocal() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise


def create_database(
    engine: AsyncEngine,
    session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    logger: Optional[logging.Logger] = None,
) -> Database:
    return Database(engine, session_factory, logger)
