import logging

from pizzahub.config import settings
from pizzahub.crud.menu_item import seed_menu
from pizzahub.crud.user import ensure_admin
from pizzahub.db.base import Base
from pizzahub.db.session import engine, AsyncSessionLocal

# модели должны быть импортированы до create_all
import pizzahub.models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def init_db() -> None:
    """
    Создаёт таблицы и начальные данные: админа и меню.
    Вызывается один раз при старте приложения.
    """
    await create_tables()

    async with AsyncSessionLocal() as session:
        await ensure_admin(
            session,
            name=settings.ADMIN_NAME,
            email=settings.ADMIN_EMAIL,
            phone=settings.ADMIN_PHONE,
            password=settings.ADMIN_PASSWORD,
        )
        if settings.SEED_MENU:
            await seed_menu(session)

    logger.info("Database initialized")
