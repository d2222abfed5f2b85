"""
Async SQLAlchemy engine / session lifecycle.

The ``Database`` handle is built by the app factory, connected in the
application lifespan and disposed on shutdown.  Route handlers receive
per-request sessions through ``get_db_session``.
"""

from __future__ import annotations

import logging
from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from database.models import Base

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, url: str, *, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    async def connect(self, create_tables: bool = False) -> None:
        if self._engine is not None:
            return
        engine_kwargs = {"echo": self.echo, "pool_pre_ping": True}
        if self.url.startswith("postgresql"):
            engine_kwargs.update(pool_size=10, max_overflow=20, pool_recycle=3600)
        self._engine = create_async_engine(self.url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        if create_tables:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        logger.info("Database engine ready (%s)", self._engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    def session(self) -> AsyncSession:
        if self._session_factory is None:
            raise RuntimeError("Database is not connected")
        return self._session_factory()

    async def ping(self) -> bool:
        """Cheap liveness probe used by the health endpoint."""
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.warning("Database ping failed", exc_info=True)
            return False


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency function — use in FastAPI `Depends(get_db_session)`.

    Mutating routes commit before building their response; the commit
    here only closes out read-only requests.
    """
    database: Database = request.app.state.db
    async with database.session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
