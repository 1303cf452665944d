from typing import List

from pydantic import BaseModel, Field


class PopularItem(BaseModel):
    name: str
    total_sold: int


class StatsRead(BaseModel):
    # ключи ответа как у веб-клиента админ-панели
    total_users: int = Field(..., serialization_alias="totalUsers")
    total_orders: int = Field(..., serialization_alias="totalOrders")
    total_revenue: int = Field(..., serialization_alias="totalRevenue")
    popular_items: List[PopularItem] = Field(..., serialization_alias="popularPizzas")
