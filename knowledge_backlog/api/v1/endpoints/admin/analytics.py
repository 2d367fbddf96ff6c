"""
Admin Analytics endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from knowledge_backlog.core.database import get_db
from knowledge_backlog.core.security import Identity
from knowledge_backlog.modules.auth.dependencies import get_current_admin
from knowledge_backlog.services.stats_service import stats_service
from knowledge_backlog.schemas.admin import StatsWindow, AdminStatsResponse, StatusBreakdown

router = APIRouter()


@router.post("/stats", response_model=AdminStatsResponse)
async def get_stats(
    window: Optional[StatsWindow] = None,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """
    Backlog statistics for a reporting window.

    start_date defaults to the epoch and end_date to now; both ends are
    inclusive. Totals and the status breakdown cover the whole backlog.
    """
    window = window or StatsWindow()

    stats = await stats_service.get_stats(db, window.start_date, window.end_date)
    user_stats = await stats_service.get_user_stats(db, window.start_date, window.end_date)

    return AdminStatsResponse(
        **stats.model_dump(),
        status_breakdown=StatusBreakdown(
            Backlog=stats.backlog_count,
            Documented=stats.documented_count,
        ),
        user_stats=user_stats,
    )
