from dataclasses import dataclass, field
from typing import Dict, List, Optional

from pizzahub.client.cart import Cart
from pizzahub.client.views import format_price
# прайс опций, который показывает клиент; сумму к оплате считает сервер
DEFAULT_EXTRA_PRICES = {"extra_cheese": 150, "extra_meat": 200}

INGREDIENT_REMOVALS = {
    "mayonnaise": "Remove mayonnaise",
    "onion": "Remove onion",
    "tomato": "Remove tomato",
    "olives": "Remove olives",
}

EXTRA_LABELS = {
    "extra_cheese": "Add extra cheese",
    "extra_meat": "Add extra meat",
}


@dataclass(frozen=True)
class OrderSummary:
    subtotal: int
    extras_total: int
    total: int


def order_summary(cart: Cart, extras: List[str], prices: Optional[Dict[str, int]] = None) -> OrderSummary:
    """
    Итог в окне оформления: сумма корзины плюс доплаты за опции.
    Это только предпросмотр, окончательную сумму считает сервер.
    """
    prices = DEFAULT_EXTRA_PRICES if prices is None else prices
    extras_total = sum(prices.get(extra, 0) for extra in dict.fromkeys(extras))
    subtotal = cart.subtotal()
    return OrderSummary(subtotal=subtotal, extras_total=extras_total, total=subtotal + extras_total)


@dataclass
class CheckoutForm:
    city: str
    address: str
    phone: str
    comment: str = ""
    scheduled_time: Optional[str] = None  # None: доставка как можно скорее
    remove_ingredients: List[str] = field(default_factory=list)
    extras: List[str] = field(default_factory=list)

    def validate(self) -> None:
        missing = [name for name in ("city", "address", "phone") if not getattr(self, name).strip()]
        if missing:
            raise ValueError(f"Please fill in: {', '.join(missing)}")

    def full_address(self) -> str:
        return f"{self.city.strip()}, {self.address.strip()}"

    def full_comment(self, prices: Optional[Dict[str, int]] = None) -> str:
        """
        Комментарий к заказу: текст пользователя, время доставки
        и выбранные опции ингредиентов, каждое с новой строки.
        """
        prices = DEFAULT_EXTRA_PRICES if prices is None else prices
        parts = [self.comment.strip()] if self.comment.strip() else []

        if self.scheduled_time:
            parts.append(f"Delivery time: {self.scheduled_time}")

        options = [INGREDIENT_REMOVALS[key] for key in self.remove_ingredients if key in INGREDIENT_REMOVALS]
        for extra in dict.fromkeys(self.extras):
            label = EXTRA_LABELS.get(extra, extra)
            options.append(f"{label} (+{format_price(prices.get(extra, 0))})")
        if options:
            parts.append("Ingredients: " + ", ".join(options))

        return "\n".join(parts)

    def to_payload(self, cart: Cart, prices: Optional[Dict[str, int]] = None) -> dict:
        """
        Тело запроса POST /api/orders.
        """
        self.validate()
        summary = order_summary(cart, self.extras, prices)
        return {
            "items": cart.to_payload(),
            "total": summary.total,
            "address": self.full_address(),
            "phone": self.phone.strip(),
            "comment": self.full_comment(prices),
            "delivery_time": self.scheduled_time or None,
            "extras": list(dict.fromkeys(self.extras)),
        }
