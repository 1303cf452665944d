from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping

DEFAULT_CURRENCY = "₸"


@dataclass(frozen=True)
class MenuCardView:
    id: int
    name: str
    description: str
    price: int
    price_label: str
    image: str
    category: str
    is_available: bool


def format_price(amount: int, currency: str | None = None) -> str:
    return f"{amount} {currency or DEFAULT_CURRENCY}"


def _field(item: Any, name: str, default=None):
    if isinstance(item, Mapping):
        return item.get(name, default)
    return getattr(item, name, default)


def catalog_view(items: Iterable[Any], currency: str | None = None) -> List[MenuCardView]:
    """
    Карточки меню для отображения. Чистая функция: принимает позиции
    (dict из API или объекты) и ничего не знает о способе отрисовки.
    """
    return [
        MenuCardView(
            id=_field(item, "id"),
            name=_field(item, "name"),
            description=_field(item, "description", ""),
            price=_field(item, "price"),
            price_label=format_price(_field(item, "price"), currency),
            image=_field(item, "image", ""),
            category=_field(item, "category", ""),
            is_available=bool(_field(item, "is_available", True)),
        )
        for item in items
    ]
