import logging
from typing import Dict, Iterable, List, Optional

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from pizzahub.models import MenuItem, CategoryEnum

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"

SEED_MENU = [
    ("Margherita", "Tomato sauce, mozzarella, basil", 450, CategoryEnum.vegetarian, "images/margarita.png"),
    ("Pepperoni", "Tomato sauce, mozzarella, pepperoni", 520, CategoryEnum.meat, "images/peperoni-600x600.jpg"),
    ("Hawaiian", "Tomato sauce, mozzarella, ham, pineapple", 550, CategoryEnum.meat, "images/hawaiian.jpeg"),
    ("Four Cheese", "Mozzarella, parmesan, gorgonzola, cheddar", 580, CategoryEnum.vegetarian, "images/four-cheese.jpg"),
    ("Mexican", "Tomato sauce, mozzarella, beef, jalapeno", 620, CategoryEnum.spicy, "images/mexican.jpg"),
    ("Vegetarian", "Tomato sauce, mozzarella, mushrooms, peppers, olives", 480, CategoryEnum.vegetarian, "images/vegetarian.png"),
    ("Carbonara", "Cream sauce, mozzarella, bacon, parmesan", 590, CategoryEnum.meat, "images/carbonara.jpg"),
    ("Diablo", "Tomato sauce, mozzarella, pepperoni, jalapeno, hot pepper", 650, CategoryEnum.spicy, "images/diablo.jpeg"),
]


async def list_menu_items(db: AsyncSession, category: Optional[str] = None) -> List[MenuItem]:
    """
    Возвращает меню в порядке добавления.
    category=None или "all": всё меню, включая недоступные позиции;
    иначе точное совпадение по категории.
    """
    stmt = select(MenuItem).order_by(MenuItem.id)
    if category and category != ALL_CATEGORIES:
        stmt = stmt.where(MenuItem.category == category)

    result = await db.execute(stmt)
    items = result.scalars().all()
    logger.debug(f"Menu request: category={category!r}, found={len(items)}")
    return items


async def get_menu_items_by_ids(db: AsyncSession, ids: Iterable[int]) -> Dict[int, MenuItem]:
    ids = set(ids)
    if not ids:
        return {}
    result = await db.execute(select(MenuItem).where(MenuItem.id.in_(ids)))
    return {item.id: item for item in result.scalars().all()}


async def seed_menu(db: AsyncSession) -> int:
    """
    Заполняет меню начальными пиццами, только если таблица пуста:
    на существующие позиции ссылаются order_items.
    """
    count = await db.scalar(select(func.count(MenuItem.id)))
    if count:
        return 0

    for name, description, price, category, image in SEED_MENU:
        db.add(
            MenuItem(
                name=name,
                description=description,
                price=price,
                category=category.value,
                image=image,
                is_available=True,
            )
        )
    await db.commit()
    logger.info(f"Menu seeded with {len(SEED_MENU)} pizzas")
    return len(SEED_MENU)
