# backend/utils/database.py
import logging
from datetime import datetime, timezone
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger("backend.database")

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Database:
    """
    Owns the async engine (and its connection pool) plus the session factory.
    Created once per app, connected at startup and disposed at shutdown.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self._sessionmaker: Optional[async_sessionmaker] = None

    async def connect(self, create_tables: bool = True) -> None:
        if self.engine is not None:
            return
        kwargs = {"echo": self.echo}
        if not self.url.startswith("sqlite"):
            kwargs["pool_pre_ping"] = True
        self.engine = create_async_engine(self.url, **kwargs)
        self._sessionmaker = async_sessionmaker(bind=self.engine, class_=AsyncSession, expire_on_commit=False)

        # fail fast if the store is unreachable
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception:
            await self.close()
            raise

        if create_tables:
            # models must be imported so their tables are registered on Base
            from backend.models import task, user  # noqa: F401

            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables ready.")

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("Database connections closed.")
        self.engine = None
        self._sessionmaker = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    def session(self) -> AsyncSession:
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected")
        return self._sessionmaker()


# Dependency for route injection
async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
