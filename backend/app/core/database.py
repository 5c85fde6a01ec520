# backend/app/core/database.py
"""
Moteur SQLAlchemy async + fabrique de sessions.

Une requête HTTP = une AsyncSession (injectée via get_db / DbDep).
"""
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.core.config import settings

engine = create_async_engine(settings.DATABASE_URL, pool_pre_ping=True, echo=settings.DEBUG)

SessionLocal = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncIterator[AsyncSession]:
    async with SessionLocal() as session:
        yield session


ASYNC_DRIVERS = ("+asyncpg", "+aiosqlite")


def sync_database_url(url: str) -> str:
    """URL équivalente en driver synchrone (Alembic)."""
    for driver in ASYNC_DRIVERS:
        url = url.replace(driver, "")
    return url
