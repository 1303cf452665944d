import enum
from sqlalchemy import Column, Integer, String, DateTime, func, Enum
from sqlalchemy.orm import relationship
from ..db.base import Base


class RoleEnum(str, enum.Enum):
    customer = "customer"
    admin = "admin"


class Capability(str, enum.Enum):
    place_orders = "place_orders"
    view_stats = "view_stats"


ROLE_CAPABILITIES = {
    RoleEnum.customer: frozenset({Capability.place_orders}),
    RoleEnum.admin: frozenset({Capability.place_orders, Capability.view_stats}),
}


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(32), nullable=False)
    password_hash = Column(String(128), nullable=False)
    role = Column(Enum(RoleEnum, name="user_role"), nullable=False, default=RoleEnum.customer)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # связь с заказами
    orders = relationship("Order", back_populates="user")

    def can(self, capability: Capability) -> bool:
        return capability in ROLE_CAPABILITIES.get(RoleEnum(self.role), frozenset())
