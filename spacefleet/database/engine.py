from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from spacefleet.config import settings

engine = create_async_engine(
    settings.database_url,
    pool_pre_ping=True,
    pool_recycle=3600,
    echo=settings.environment == "development",
)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_schema() -> None:
    """Create all tables registered on ``Base.metadata`` that do not exist yet."""
    from spacefleet.database.base import Base
    import spacefleet.models  # noqa: F401  (populate metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
