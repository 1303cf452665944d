import json
import logging
from dataclasses import dataclass, asdict
from typing import Any, Iterator, List, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass
class CartLine:
    item_id: int
    name: str
    price: int  # снимок цены на момент добавления
    quantity: int = 1

    @property
    def line_total(self) -> int:
        return self.price * self.quantity

    def to_payload(self) -> dict:
        # формат позиции, который ожидает POST /api/orders
        return {"id": self.item_id, "name": self.name, "price": self.price, "quantity": self.quantity}


class Cart:
    """
    Корзина на стороне клиента. Сервер цены при добавлении не проверяет:
    итоговая сумма пересчитывается при оформлении заказа.
    """

    def __init__(self, lines: Optional[List[CartLine]] = None):
        self.lines: List[CartLine] = list(lines or [])

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def _find(self, item_id: int) -> Optional[CartLine]:
        for line in self.lines:
            if line.item_id == item_id:
                return line
        return None

    def add(self, item: Any) -> CartLine:
        """
        Добавляет позицию меню: увеличивает количество, если она уже есть,
        иначе новая строка с quantity=1. Принимает объект или dict с id/name/price.
        """
        if isinstance(item, Mapping):
            item_id, name, price = item["id"], item["name"], item["price"]
        else:
            item_id, name, price = item.id, item.name, item.price

        line = self._find(item_id)
        if line:
            line.quantity += 1
            return line

        line = CartLine(item_id=item_id, name=name, price=price, quantity=1)
        self.lines.append(line)
        return line

    def remove(self, item_id: int) -> None:
        self.lines = [line for line in self.lines if line.item_id != item_id]

    def change_quantity(self, item_id: int, delta: int) -> None:
        line = self._find(item_id)
        if not line:
            return
        line.quantity += delta
        if line.quantity <= 0:
            self.remove(item_id)

    def clear(self) -> None:
        self.lines = []

    def subtotal(self) -> int:
        return sum(line.line_total for line in self.lines)

    def count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def is_empty(self) -> bool:
        return not self.lines

    def to_payload(self) -> List[dict]:
        return [line.to_payload() for line in self.lines]

    def to_json(self) -> str:
        return json.dumps([asdict(line) for line in self.lines], ensure_ascii=False)

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "Cart":
        """
        Восстанавливает корзину из строки хранилища.
        Повреждённые данные дают пустую корзину.
        """
        if not raw:
            return cls()
        try:
            data = json.loads(raw)
            lines = [
                CartLine(
                    item_id=int(entry["item_id"]),
                    name=str(entry["name"]),
                    price=int(entry["price"]),
                    quantity=int(entry["quantity"]),
                )
                for entry in data
            ]
        except (json.JSONDecodeError, TypeError, KeyError, ValueError) as e:
            logger.warning(f"Stored cart is malformed, starting empty: {e}")
            return cls()
        return cls([line for line in lines if line.quantity > 0])
