"""Async engine, session factory and declarative base for the entity store."""
import asyncio
from contextlib import asynccontextmanager, nullcontext
from datetime import datetime, timezone

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp; SQLite drops tzinfo anyway."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def is_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_engine_for(database_url: str, echo: bool = False) -> AsyncEngine:
    if is_memory_sqlite(database_url):
        # in-memory SQLite: every session must see the same connection
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(database_url, echo=echo)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    # objects stay readable after commit; no lazy IO outside awaits
    return async_sessionmaker(engine, expire_on_commit=False)


def create_session_lock(database_url: str) -> asyncio.Lock | None:
    """Lock serializing sessions that share the single in-memory connection."""
    return asyncio.Lock() if is_memory_sqlite(database_url) else None


@asynccontextmanager
async def open_session(state):
    """One session per unit of work, exclusive while it holds a shared connection.

    `state` is the app state carrying `sessionmaker` and `db_lock`.
    """
    async with state.db_lock or nullcontext():
        async with state.sessionmaker() as db:
            yield db


async def get_db(request: Request):
    async with open_session(request.app.state) as db:
        yield db
