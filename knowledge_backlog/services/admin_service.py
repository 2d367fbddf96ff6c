"""
Admin maintenance operations
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete
from typing import Dict
import logging

from knowledge_backlog.models.article import Article
from knowledge_backlog.models.tag import Tag, article_tags

logger = logging.getLogger(__name__)


class AdminService:

    async def clear_database(self, db: AsyncSession) -> Dict[str, int]:
        """
        Delete every article, tag and article-tag link in one transaction.

        The allowlist is kept.

        Returns:
            Deleted row counts keyed by links_deleted, articles_deleted,
            tags_deleted
        """
        try:
            # Links first so the counts are not swallowed by the cascade
            links = await db.execute(delete(article_tags))
            articles = await db.execute(delete(Article))
            tags = await db.execute(delete(Tag))
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.error(f"Clearing the database failed: {e}")
            raise

        counts = {
            "links_deleted": links.rowcount,
            "articles_deleted": articles.rowcount,
            "tags_deleted": tags.rowcount,
        }
        logger.warning(f"Database cleared: {counts}")
        return counts


admin_service = AdminService()
