import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pizzahub.api.deps import require_capability
from pizzahub.crud.stats import get_stats
from pizzahub.db.session import get_async_session
from pizzahub.models import Capability, User
from pizzahub.schemas.stats import StatsRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["stats"])


@router.get("/stats", response_model=StatsRead)
async def get_stats_endpoint(
    user: User = Depends(require_capability(Capability.view_stats)),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Статистика для админ-панели: пользователи, заказы, выручка, топ-5 пицц.
    """
    logger.info(f"Stats requested by user id={user.id}")
    return await get_stats(db)
