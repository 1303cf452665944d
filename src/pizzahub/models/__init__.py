from .user import User, RoleEnum, Capability
from .menu_item import MenuItem, CategoryEnum
from .order import Order, OrderStatusEnum
from .order_item import OrderItem

__all__ = [
    "User",
    "RoleEnum",
    "Capability",
    "MenuItem",
    "CategoryEnum",
    "Order",
    "OrderStatusEnum",
    "OrderItem",
]
