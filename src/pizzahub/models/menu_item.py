import enum
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, func
from sqlalchemy.orm import relationship
from ..db.base import Base


class CategoryEnum(str, enum.Enum):
    vegetarian = "vegetarian"
    meat = "meat"
    spicy = "spicy"


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(128), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Integer, nullable=False)  # цена в минорных единицах
    category = Column(String(64), nullable=False, index=True)  # vegetarian, meat, spicy
    image = Column(String(255), nullable=False, default="")
    is_available = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # связь с OrderItem
    order_items = relationship("OrderItem", back_populates="menu_item")
