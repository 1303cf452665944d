import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from pizzahub.config import settings

logger = logging.getLogger(__name__)

engine_kwargs = {"echo": settings.SQL_ECHO, "future": True}
if settings.DATABASE_URL.startswith("sqlite"):
    # соединения aiosqlite привязаны к event loop, в котором открыты
    engine_kwargs["poolclass"] = NullPool

# Асинхронный движок
engine = create_async_engine(settings.DATABASE_URL, **engine_kwargs)

# Фабрика сессий
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# Зависимость для FastAPI
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Использовать в Depends(get_async_session)
    Пример: async def endpoint(db: AsyncSession = Depends(get_async_session))
    """
    async with AsyncSessionLocal() as session:
        yield session


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Транзакционная область: commit только если блок завершился без ошибок,
    иначе rollback и исключение пробрасывается дальше.
    """
    try:
        yield session
        await session.commit()
    except Exception:
        logger.debug("Rolling back transaction")
        await session.rollback()
        raise
