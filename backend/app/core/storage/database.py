"""Database engine, session factory and declarative base."""

from pathlib import Path
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Database:
    """Owns the async engine and hands out sessions.

    One instance is created per application in the lifespan handler and
    stored on ``app.state.db``.
    """

    def __init__(self, url: str, echo: bool = False, engine: AsyncEngine | None = None):
        self.url = url
        self.engine = engine or create_async_engine(url, echo=echo)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def init_db(self) -> None:
        """Create all tables."""
        # Import models so they register on Base.metadata
        from app.models import database  # noqa: F401

        url = self.engine.url
        if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close_db(self) -> None:
        """Dispose of the connection pool."""
        await self.engine.dispose()

    def session(self) -> AsyncSession:
        """Open a new session."""
        return self.session_maker()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a session bound to the app's database."""
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
