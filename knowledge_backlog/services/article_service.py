"""
Article Service - Business logic for the knowledge backlog

Handles:
- Article CRUD with tags attached on every read
- Partial updates with modification attribution

Caller identity is always passed in explicitly (see core.security.Identity);
nothing here reads request state.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, insert, update, delete
from sqlalchemy.orm import selectinload
from datetime import datetime
from typing import Optional, List, Dict, Any
import logging

from knowledge_backlog.core.exceptions import ValidationError, EmptyUpdateError
from knowledge_backlog.core.security import Identity
from knowledge_backlog.models.article import Article, ArticleStatus
from knowledge_backlog.schemas.article import ArticleCreate
from knowledge_backlog.utils.time_utils import utcnow, to_utc_naive

logger = logging.getLogger(__name__)


# Columns an update may touch; id, added and the author columns are fixed at creation
UPDATABLE_FIELDS = {
    "title",
    "description",
    "status",
    "knowledge_article_id",
    "modified_by",
    "modified_by_name",
    "modified_at",
}


class ArticleService:
    """Service for managing backlog articles"""

    def _with_tags(self):
        # populate_existing: tag links are written with Core statements, so
        # collections already in the identity map may be stale
        return (
            select(Article)
            .options(selectinload(Article.tags))
            .execution_options(populate_existing=True)
        )

    async def list_articles(self, db: AsyncSession) -> List[Article]:
        """All articles, newest first, each with its tags ordered by name"""
        result = await db.execute(
            self._with_tags().order_by(Article.added.desc(), Article.id.desc())
        )
        return list(result.scalars().all())

    async def get_article(self, db: AsyncSession, article_id: int) -> Optional[Article]:
        """Get article with tags by ID, None when it does not exist"""
        result = await db.execute(self._with_tags().where(Article.id == article_id))
        return result.scalar_one_or_none()

    async def add_article(
        self,
        db: AsyncSession,
        article_data: ArticleCreate,
        identity: Identity,
        article_id: Optional[int] = None,
        added: Optional[datetime] = None,
    ) -> Article:
        """
        Insert a new article attributed to ``identity``.

        Tags are not touched; assign them afterwards with
        TagService.set_article_tags.

        Args:
            db: Database session
            article_data: Title, description and status
            identity: Creator
            article_id: Explicit id, generated by the database when None.
                A duplicate id raises IntegrityError.
            added: Creation time, defaults to now

        Returns:
            The stored article (with an empty tag list)
        """
        values: Dict[str, Any] = {
            "title": article_data.title,
            "description": article_data.description,
            "status": ArticleStatus(getattr(article_data.status, "value", article_data.status)),
            "added": to_utc_naive(added) or utcnow(),
            "author": identity.raw,
            "author_name": identity.username,
        }
        if article_id is not None:
            values["id"] = article_id

        try:
            result = await db.execute(insert(Article.__table__).values(**values))
            new_id = result.inserted_primary_key[0]
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(f"Article {new_id} added by {identity.username}")
        return await self.get_article(db, new_id)

    async def update_article(
        self,
        db: AsyncSession,
        article_id: int,
        updates: Dict[str, Any],
        identity: Optional[Identity] = None,
    ) -> Optional[Article]:
        """
        Apply a partial update.

        Keys whose value is None are skipped, not nulled. When ``identity``
        is given the change is attributed to it (modified_by,
        modified_by_name, modified_at).

        Raises:
            EmptyUpdateError: nothing left to apply
            ValidationError: a key is not an updatable column

        Returns:
            The re-read article, or None if no article has that id
        """
        values = {key: value for key, value in updates.items() if value is not None}
        if not values:
            raise EmptyUpdateError()

        unknown = sorted(set(values) - UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot update field(s): {', '.join(unknown)}")

        if "status" in values:
            values["status"] = ArticleStatus(getattr(values["status"], "value", values["status"]))
        if "modified_at" in values:
            values["modified_at"] = to_utc_naive(values["modified_at"])

        if identity is not None:
            values.update(
                modified_by=identity.raw,
                modified_by_name=identity.username,
                modified_at=utcnow(),
            )

        try:
            result = await db.execute(
                update(Article).where(Article.id == article_id).values(**values)
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        if result.rowcount == 0:
            return None

        logger.info(f"Article {article_id} updated: {sorted(values)}")
        return await self.get_article(db, article_id)

    async def delete_article(self, db: AsyncSession, article_id: int) -> bool:
        """Delete an article (its tag links cascade). False if it did not exist."""
        try:
            result = await db.execute(delete(Article).where(Article.id == article_id))
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        deleted = result.rowcount > 0
        if deleted:
            logger.info(f"Article {article_id} deleted")
        return deleted


article_service = ArticleService()
