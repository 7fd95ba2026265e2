from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from feedback_service.db.base import Base
from feedback_service.db import models  # noqa: F401


def make_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def make_sessionmaker(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_db(engine: AsyncEngine):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
