"""Async SQLAlchemy engine, session factory and the get_db dependency."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings

engine = create_async_engine(settings.DATABASE_URL, echo=False, pool_pre_ping=True)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db():
    async with async_session() as session:
        yield session


async def init_models() -> None:
    """Create any missing tables. Alembic owns schema changes in production."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
