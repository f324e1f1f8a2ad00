"""
Database Connection Module
Configures async SQLAlchemy engine and session factory.
"""

import logging

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from bizpulse.config import settings
from bizpulse.database.base import Base

# Disable SQLAlchemy engine query logging
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

async_engine = create_async_engine(
    settings.database_url,
    echo=False,
    future=True,
    pool_pre_ping=True,
)

# Analytics only reads, so sessions never need to flush
async_session_factory = async_sessionmaker(
    bind=async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def init_db() -> None:
    """
    Create all tables.

    Note:
        In production, use Alembic migrations instead.
        Used by the demo seeding script and local development.
    """
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """
    Close database connections.
    Call this during application shutdown.
    """
    await async_engine.dispose()
