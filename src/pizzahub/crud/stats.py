import logging

from sqlalchemy import select, func, desc
from sqlalchemy.ext.asyncio import AsyncSession

from pizzahub.models import MenuItem, Order, OrderItem, OrderStatusEnum, User
from pizzahub.schemas.stats import PopularItem, StatsRead

logger = logging.getLogger(__name__)


async def count_users(db: AsyncSession) -> int:
    return int(await db.scalar(select(func.count(User.id))) or 0)


async def count_orders(db: AsyncSession) -> int:
    return int(await db.scalar(select(func.count(Order.id))) or 0)


async def total_revenue(db: AsyncSession) -> int:
    """
    Выручка по всем заказам, кроме отменённых.
    """
    stmt = select(func.sum(Order.total)).where(Order.status != OrderStatusEnum.cancelled)
    return int(await db.scalar(stmt) or 0)


async def get_top_menu_items(db: AsyncSession, limit: int = 5) -> list[PopularItem]:
    """
    Топ самых популярных пицц по количеству проданных порций.
    """
    stmt = (
        select(
            MenuItem.name.label("name"),
            func.sum(OrderItem.quantity).label("total_sold"),
        )
        .join(MenuItem, MenuItem.id == OrderItem.menu_item_id)
        .group_by(MenuItem.id, MenuItem.name)
        .order_by(desc("total_sold"), MenuItem.id)
        .limit(limit)
    )

    result = await db.execute(stmt)
    return [
        PopularItem(name=row.name, total_sold=int(row.total_sold or 0))
        for row in result.all()
    ]


async def get_stats(db: AsyncSession) -> StatsRead:
    """
    Сводка для админ-панели: четыре независимых чтения,
    ответ собирается после завершения всех.
    """
    # одна AsyncSession не допускает параллельных запросов, поэтому по очереди
    users = await count_users(db)
    orders = await count_orders(db)
    revenue = await total_revenue(db)
    popular = await get_top_menu_items(db, limit=5)

    return StatsRead(
        total_users=users,
        total_orders=orders,
        total_revenue=revenue,
        popular_items=popular,
    )
