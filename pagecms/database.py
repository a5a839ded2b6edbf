import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from pagecms.config import Settings, settings

logger = logging.getLogger(__name__)


def engine_options(config: Settings) -> dict:
    """Pool settings per environment; SQLite keeps the driver defaults."""
    if config.database_url.startswith("sqlite"):
        return {"echo": config.debug}
    if config.environment == "production":
        return {"pool_size": 20, "max_overflow": 50, "pool_timeout": 60, "pool_recycle": 1800}
    return {"echo": config.debug, "pool_size": 10, "max_overflow": 20, "pool_timeout": 30}


def create_engine(config: Settings = settings) -> AsyncEngine:
    return create_async_engine(config.database_url, **engine_options(config))


engine = create_engine()

# Lifecycle operations read relationships after commit, so instances must not expire.
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db():
    """Request-scoped session; a failed request leaves nothing uncommitted behind."""
    async with AsyncSessionLocal() as db:
        try:
            yield db
        except Exception as e:
            logger.debug(f"Rolling back page session after {type(e).__name__}")
            await db.rollback()
            raise
