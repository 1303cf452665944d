import logging
import sys
from typing import Dict

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./pizzahub.db"
    SQL_ECHO: bool = False

    # Секрет подписи токенов: при компрометации недействительны все сессии
    JWT_SECRET: str = "pizzahub-dev-secret-change-me"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_HOURS: int = 24
    BCRYPT_ROUNDS: int = 10

    ADMIN_NAME: str = "Admin"
    ADMIN_EMAIL: str = "admin@pizzahub.ru"
    ADMIN_PHONE: str = "+79991234567"
    ADMIN_PASSWORD: str = "admin123"

    SEED_MENU: bool = True
    # Доплаты за опции заказа, в минорных единицах валюты
    ORDER_EXTRAS: Dict[str, int] = {"extra_cheese": 150, "extra_meat": 200}
    DUPLICATE_ORDER_WINDOW_SECONDS: int = 30

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()


def setup_logging(level: str | None = None) -> None:
    """
    Настраивает корневой логгер приложения.
    Вызывается один раз при старте (lifespan).
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if not settings.SQL_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
