# src/backend/priorityparcel/db/session.py
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from priorityparcel.db.base import Base
from priorityparcel.repositories.base import Storage


def make_engine(url: str) -> AsyncEngine:
    return create_async_engine(url, pool_pre_ping=True)


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    # records are handed back to the route layer after the session closes
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    # import models so classes register to Base
    import priorityparcel.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def get_storage(request: Request) -> Storage:
    return request.app.state.storage
