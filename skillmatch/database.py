"""Database configuration and session management."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import settings
from .models.base import Base


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine for the given URL.

    Pool sizing only applies to server databases; SQLite gets the
    dialect's default pool.
    """
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=echo)
    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
    )


# Create async engine
engine: AsyncEngine = build_engine(settings.database_url, echo=settings.debug)

# Create async session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
    autocommit=False,
)


def get_engine() -> AsyncEngine:
    """FastAPI dependency returning the application engine."""
    return engine


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency to get database session.

    Yields:
        AsyncSession: Database session

    Example:
        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            result = await db.execute(select(Item))
            return result.scalars().all()
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Initialize database tables.

    Creates all tables defined in the models if they don't exist.
    Should be called during application startup.
    """
    async with (bind or engine).begin() as conn:
        # Import all models to ensure they are registered
        from .models import (  # noqa: F401
            Personnel,
            PersonnelSkill,
            Project,
            ProjectRequiredSkill,
            Skill,
        )

        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections.

    Disposes the engine and closes all connections.
    Should be called during application shutdown.
    """
    await engine.dispose()
