from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from pizzahub.crud.menu_item import list_menu_items
from pizzahub.db.session import get_async_session
from pizzahub.schemas.menu_item import MenuItemRead

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/pizzas", response_model=List[MenuItemRead])
async def list_pizzas(
    category: Optional[str] = Query(None, description="Категория: vegetarian, meat, spicy или all"),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Меню пиццерии, опционально отфильтрованное по категории.
    """
    return await list_menu_items(db, category)
