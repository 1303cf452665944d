"""
Клиентская часть витрины: корзина, состояние сессии и HTTP-клиент API.
"""

from .api import ApiError, StorefrontClient
from .cart import Cart, CartLine
from .checkout import CheckoutForm, OrderSummary, order_summary
from .state import AppState
from .storage import JsonFileStore, KeyValueStore, MemoryStore
from .views import MenuCardView, catalog_view

__all__ = [
    "ApiError",
    "StorefrontClient",
    "Cart",
    "CartLine",
    "CheckoutForm",
    "OrderSummary",
    "order_summary",
    "AppState",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "MenuCardView",
    "catalog_view",
]
