"""
Statistics Service - windowed counts over the backlog

Windows are inclusive at both ends (SQL BETWEEN). A missing start means the
epoch, a missing end means now.

get_stats mixes scopes: total_articles and the per-status
counts describe the whole backlog, while articles_added and status_changes
only count rows inside the window.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, case
from datetime import datetime
from typing import Optional, Dict, Tuple
import logging

from knowledge_backlog.models.article import Article, ArticleStatus
from knowledge_backlog.schemas.admin import StatsResponse, UserStats
from knowledge_backlog.schemas.user import UserSummaryResponse
from knowledge_backlog.utils.time_utils import EPOCH, utcnow, to_utc_naive

logger = logging.getLogger(__name__)

# Bucket for articles created without a display name
UNKNOWN_AUTHOR = "unknown"


def resolve_window(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None
) -> Tuple[datetime, datetime]:
    """Fill in window defaults and normalise to naive UTC"""
    return to_utc_naive(start) or EPOCH, to_utc_naive(end) or utcnow()


def _count_if(condition):
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


class StatsService:
    """Read-only aggregation queries"""

    async def get_stats(
        self,
        db: AsyncSession,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> StatsResponse:
        """Backlog totals plus activity inside the window"""
        start, end = resolve_window(start, end)

        result = await db.execute(
            select(
                func.count(Article.id).label("total_articles"),
                _count_if(Article.added.between(start, end)).label("articles_added"),
                _count_if(Article.modified_at.between(start, end)).label("status_changes"),
                _count_if(Article.status == ArticleStatus.BACKLOG).label("backlog_count"),
                _count_if(Article.status == ArticleStatus.DOCUMENTED).label("documented_count"),
            )
        )
        row = result.one()

        return StatsResponse(**{key: int(value or 0) for key, value in row._mapping.items()})

    async def get_user_stats(
        self,
        db: AsyncSession,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> Dict[str, UserStats]:
        """
        Per-author activity for articles added inside the window.

        status_changes counts those articles whose last modification also
        falls inside the window.
        """
        start, end = resolve_window(start, end)

        result = await db.execute(
            select(
                Article.author_name,
                func.count(Article.id).label("articles_added"),
                _count_if(Article.modified_at.between(start, end)).label("status_changes"),
            )
            .where(Article.added.between(start, end))
            .group_by(Article.author_name)
        )

        user_stats: Dict[str, UserStats] = {}
        for author_name, articles_added, status_changes in result.all():
            key = author_name or UNKNOWN_AUTHOR
            existing = user_stats.get(key, UserStats())
            user_stats[key] = UserStats(
                articles_added=existing.articles_added + int(articles_added or 0),
                status_changes=existing.status_changes + int(status_changes or 0),
            )
        return user_stats

    async def get_user_summary(self, db: AsyncSession, username: str) -> UserSummaryResponse:
        """
        One user's contribution: articles they added (with status changes on
        them) and the articles they moved to Documented.
        """
        user_stats = await self.get_user_stats(db)
        own = user_stats.get(username, UserStats())

        documented_count = await db.scalar(
            select(func.count(Article.id)).where(
                Article.modified_by_name == username,
                Article.status == ArticleStatus.DOCUMENTED,
            )
        )

        return UserSummaryResponse(
            articles_added=own.articles_added,
            status_changes=own.status_changes,
            documented_count=documented_count or 0,
        )


stats_service = StatsService()
