"""Database configuration and dependencies."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .settings import settings

# Global engine variables (lazy initialization)
async_engine = None
AsyncSessionLocal = None


def get_async_engine():
    """Get or create async engine."""
    global async_engine
    if async_engine is None:
        async_engine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DEBUG,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    return async_engine


def get_async_session_local():
    """Get or create async session factory."""
    global AsyncSessionLocal
    if AsyncSessionLocal is None:
        AsyncSessionLocal = async_sessionmaker(
            get_async_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return AsyncSessionLocal


async def init_models():
    """Create all tables known to the model registry."""
    from app.models import Base

    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    session_local = get_async_session_local()
    async with session_local() as session:
        try:
            yield session
        finally:
            await session.close()


async def dispose_engine():
    """Dispose the engine connection pool."""
    if async_engine is not None:
        await async_engine.dispose()


def reset_engines():
    """Reset all engines and session factories for testing."""
    global async_engine, AsyncSessionLocal
    async_engine = None
    AsyncSessionLocal = None
