from typing import List, Optional

from fastapi import APIRouter, Depends, Header, Response
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from pizzahub.api.deps import bearer_scheme, get_current_claims
from pizzahub.core.errors import EmptyCartError
from pizzahub.core.security import TokenClaims, verify_token
from pizzahub.crud.order import list_orders, place_order
from pizzahub.db.session import get_async_session
from pizzahub.schemas.order import OrderCreate, OrderCreateResponse, OrderRead

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=OrderCreateResponse, status_code=201)
async def create_order_endpoint(
    order_in: OrderCreate,
    response: Response,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    idempotency_key: Optional[str] = Header(None, alias="Idempotency-Key", max_length=128),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Оформление заказа.
    Пустая корзина отклоняется до проверки токена.
    Повтор с тем же ключом возвращает существующий заказ со статусом 200.
    """
    if not order_in.items:
        raise EmptyCartError()

    claims = verify_token(credentials.credentials if credentials else None)
    order, created = await place_order(db, claims.user_id, order_in, idempotency_key=idempotency_key)
    if not created:
        response.status_code = 200

    return OrderCreateResponse(
        message="Order created successfully" if created else "Order already placed",
        order_id=order.id,
        total=order.total,
    )


@router.get("", response_model=List[OrderRead])
async def list_orders_endpoint(
    claims: TokenClaims = Depends(get_current_claims),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Заказы текущего пользователя, новые первыми.
    """
    return await list_orders(db, claims.user_id)
