from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class OrderItemRead(BaseModel):
    menu_item_id: int
    menu_item_name: Optional[str] = None
    quantity: int
    price: int

    class Config:
        from_attributes = True


class OrderRead(BaseModel):
    id: int
    total: int
    surcharge: int = 0
    status: str
    address: str
    phone: str
    comment: Optional[str] = None
    delivery_time: Optional[str] = None
    created_at: datetime
    items: List[OrderItemRead] = []

    class Config:
        from_attributes = True


class OrderLineCreate(BaseModel):
    # "id": так позиция корзины приходит от клиента
    id: int = Field(..., description="ID позиции меню")
    quantity: int = Field(..., ge=1)
    # снимок цены на клиенте, сервер его не использует
    price: Optional[int] = None
    name: Optional[str] = None


class OrderCreate(BaseModel):
    items: Optional[List[OrderLineCreate]] = None
    total: Optional[int] = Field(None, description="Сумма, посчитанная клиентом (только для сверки)")
    # обязательность адреса и телефона проверяется при оформлении,
    # после проверки на пустую корзину
    address: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    comment: Optional[str] = Field(None, max_length=2000)
    delivery_time: Optional[str] = Field(None, max_length=64)
    extras: List[str] = []

    @field_validator("address", "phone")
    @classmethod
    def strip_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return v.strip() or None


class OrderCreateResponse(BaseModel):
    message: str
    order_id: int = Field(..., serialization_alias="orderId")
    total: int
