import hashlib
import json
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pizzahub.config import settings
from pizzahub.core.errors import EmptyCartError, ServerError, ValidationError
from pizzahub.crud.menu_item import get_menu_items_by_ids
from pizzahub.db.session import transaction
from pizzahub.models import MenuItem, Order, OrderItem
from pizzahub.schemas.order import OrderCreate, OrderItemRead, OrderLineCreate, OrderRead

logger = logging.getLogger(__name__)


def merge_lines(lines: List[OrderLineCreate]) -> Dict[int, int]:
    """
    Сворачивает позиции в {menu_item_id: quantity}, сохраняя порядок.
    Повторы одной позиции складываются.
    """
    quantities: Dict[int, int] = {}
    for line in lines:
        quantities[line.id] = quantities.get(line.id, 0) + line.quantity
    return quantities


def price_extras(extras: List[str]) -> int:
    """
    Доплата за опции по серверному прайсу ORDER_EXTRAS.
    Каждая опция учитывается один раз.
    """
    surcharge = 0
    for extra in dict.fromkeys(extras):
        if extra not in settings.ORDER_EXTRAS:
            raise ValidationError(f"Unknown extra: {extra}")
        surcharge += settings.ORDER_EXTRAS[extra]
    return surcharge


def order_fingerprint(
    user_id: int,
    quantities: Dict[int, int],
    order_in: OrderCreate,
    now: Optional[datetime] = None,
) -> str:
    """
    Ключ идемпотентности для запроса без заголовка Idempotency-Key:
    одинаковый заказ в пределах окна DUPLICATE_ORDER_WINDOW_SECONDS
    даёт одинаковый ключ.
    """
    now = now or datetime.now(timezone.utc)
    window = max(settings.DUPLICATE_ORDER_WINDOW_SECONDS, 1)
    payload = {
        "user_id": user_id,
        "lines": sorted(quantities.items()),
        "address": order_in.address,
        "phone": order_in.phone,
        "comment": order_in.comment,
        "delivery_time": order_in.delivery_time,
        "extras": sorted(set(order_in.extras)),
        "bucket": int(now.timestamp()) // window,
    }
    digest = hashlib.sha256(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()
    return f"auto:{digest}"


async def get_order_by_key(db: AsyncSession, user_id: int, key: str) -> Optional[Order]:
    result = await db.execute(
        select(Order).where(Order.user_id == user_id, Order.idempotency_key == key)
    )
    return result.scalars().first()


def _order_line(order_id: int, item: MenuItem, quantity: int) -> OrderItem:
    # цена фиксируется на момент заказа
    return OrderItem(order_id=order_id, menu_item_id=item.id, quantity=quantity, price=item.price)


async def place_order(
    db: AsyncSession,
    user_id: int,
    order_in: OrderCreate,
    idempotency_key: Optional[str] = None,
    now: Optional[datetime] = None,
) -> tuple[Order, bool]:
    """
    Оформляет заказ. Возвращает (заказ, created).

    Сумма пересчитывается по актуальным ценам меню, присланный клиентом
    total только сверяется. Шапка заказа и все позиции пишутся в одной
    транзакции. Повтор с тем же ключом идемпотентности возвращает уже
    созданный заказ (created=False).
    """
    if not order_in.items:
        raise EmptyCartError()
    if not order_in.address:
        raise ValidationError("Delivery address is required")
    if not order_in.phone:
        raise ValidationError("Phone is required")

    quantities = merge_lines(order_in.items)
    menu = await get_menu_items_by_ids(db, quantities)

    missing = [item_id for item_id in quantities if item_id not in menu]
    if missing:
        raise ValidationError(f"Unknown menu items: {missing}")
    unavailable = [menu[item_id].name for item_id in quantities if not menu[item_id].is_available]
    if unavailable:
        raise ValidationError(f"Menu items are not available: {', '.join(unavailable)}")

    surcharge = price_extras(order_in.extras)
    total = sum(menu[item_id].price * qty for item_id, qty in quantities.items()) + surcharge

    if order_in.total is not None and order_in.total != total:
        logger.warning(
            f"Client total {order_in.total} differs from server total {total} "
            f"for user_id={user_id}, using server total"
        )

    key = idempotency_key or order_fingerprint(user_id, quantities, order_in, now)
    existing = await get_order_by_key(db, user_id, key)
    if existing:
        logger.info(f"Duplicate order submit for user_id={user_id}, returning order #{existing.id}")
        return existing, False

    try:
        async with transaction(db):
            order = Order(
                user_id=user_id,
                total=total,
                surcharge=surcharge,
                address=order_in.address,
                phone=order_in.phone,
                comment=order_in.comment,
                delivery_time=order_in.delivery_time,
                idempotency_key=key,
            )
            db.add(order)
            await db.flush()

            for item_id, qty in quantities.items():
                db.add(_order_line(order.id, menu[item_id], qty))
            await db.flush()
    except IntegrityError:
        # параллельный запрос с тем же ключом успел закоммитить заказ
        existing = await get_order_by_key(db, user_id, key)
        if existing:
            logger.info(f"Concurrent duplicate order for user_id={user_id}, returning order #{existing.id}")
            return existing, False
        logger.exception(f"Failed to create order for user_id={user_id}")
        raise ServerError("Failed to create order")
    except SQLAlchemyError:
        logger.exception(f"Failed to create order for user_id={user_id}")
        raise ServerError("Failed to create order")

    await db.refresh(order)
    logger.info(f"Order #{order.id} created for user_id={user_id}, total={order.total}")
    return order, True


async def list_orders(db: AsyncSession, user_id: int) -> List[OrderRead]:
    """
    Заказы пользователя, новые первыми, каждый со всеми позициями.
    Один join-запрос, строки группируются по id заказа.
    """
    stmt = (
        select(
            Order.id,
            Order.total,
            Order.surcharge,
            Order.status,
            Order.address,
            Order.phone,
            Order.comment,
            Order.delivery_time,
            Order.created_at,
            OrderItem.menu_item_id,
            OrderItem.quantity,
            OrderItem.price,
            MenuItem.name.label("menu_item_name"),
        )
        .outerjoin(OrderItem, OrderItem.order_id == Order.id)
        .outerjoin(MenuItem, MenuItem.id == OrderItem.menu_item_id)
        .where(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.id.desc(), OrderItem.id)
    )
    result = await db.execute(stmt)

    orders: Dict[int, OrderRead] = {}
    for row in result.all():
        order = orders.get(row.id)
        if order is None:
            order = OrderRead(
                id=row.id,
                total=row.total,
                surcharge=row.surcharge,
                status=getattr(row.status, "value", row.status),
                address=row.address,
                phone=row.phone,
                comment=row.comment,
                delivery_time=row.delivery_time,
                created_at=row.created_at,
                items=[],
            )
            orders[row.id] = order

        if row.menu_item_id is not None:
            order.items.append(
                OrderItemRead(
                    menu_item_id=row.menu_item_id,
                    menu_item_name=row.menu_item_name,
                    quantity=row.quantity,
                    price=row.price,
                )
            )

    return list(orders.values())
