"""
Tag Service - tag identity and article tag assignment

Handles:
- Get-or-create of tags by exact name
- Atomic replacement of an article's tag set
- Tag listings
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, insert
from typing import Optional, List
import logging

from knowledge_backlog.core.exceptions import ValidationError
from knowledge_backlog.models.tag import Tag, article_tags
from knowledge_backlog.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


class TagService:
    """Service for tags and article-tag links"""

    async def _resolve_tag(self, db: AsyncSession, name: str) -> Tag:
        """Look up or insert a tag inside the caller's transaction (flush, no commit)"""
        if not isinstance(name, str) or not name:
            raise ValidationError("Tag name is required", field="name")

        result = await db.execute(select(Tag).where(Tag.name == name))
        tag = result.scalar_one_or_none()
        if tag:
            return tag

        new_tag = Tag(name=name, created_at=utcnow())
        db.add(new_tag)
        await db.flush()

        # Return the stored row rather than the object we built
        result = await db.execute(select(Tag).where(Tag.id == new_tag.id))
        tag = result.scalar_one()
        logger.info(f"Created tag '{tag.name}' (id={tag.id})")
        return tag

    async def get_or_create_tag(self, db: AsyncSession, name: str) -> Tag:
        """
        Get a tag by exact name, creating it when missing.

        An existing tag is returned untouched. Two concurrent calls for the
        same new name can both miss the lookup; the loser gets the
        IntegrityError from the unique constraint.
        """
        try:
            tag = await self._resolve_tag(db, name)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        return tag

    async def list_tags(self, db: AsyncSession) -> List[Tag]:
        """All tags ordered by name"""
        result = await db.execute(select(Tag).order_by(Tag.name.asc()))
        return list(result.scalars().all())

    async def get_article_tags(self, db: AsyncSession, article_id: int) -> List[Tag]:
        """Tags linked to one article, ordered by name"""
        result = await db.execute(
            select(Tag)
            .join(article_tags, Tag.id == article_tags.c.tag_id)
            .where(article_tags.c.article_id == article_id)
            .order_by(Tag.name.asc())
        )
        return list(result.scalars().all())

    async def set_article_tags(
        self,
        db: AsyncSession,
        article_id: int,
        tag_names: Optional[List[str]]
    ) -> None:
        """
        Replace the full tag set of an article in one transaction.

        Existing links are removed, then each name (in input order) is
        resolved or created and linked. Any failure rolls everything back,
        including tags created during the attempt, so the previous tag set
        stays in place. Names are not deduplicated: a repeated name violates
        the link primary key and fails the whole call.

        The rollback expires every ORM instance held by the session; callers
        should keep plain ids and re-read articles after a failure.

        Args:
            db: Database session
            article_id: Article whose tags are replaced
            tag_names: New tag names; None or [] clears the tags
        """
        tag_names = tag_names or []
        try:
            await db.execute(
                delete(article_tags).where(article_tags.c.article_id == article_id)
            )

            for name in tag_names:
                tag = await self._resolve_tag(db, name)
                await db.execute(
                    insert(article_tags).values(article_id=article_id, tag_id=tag.id)
                )

            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.warning(
                f"Tag replacement for article {article_id} rolled back: {type(e).__name__}: {e}"
            )
            raise

        logger.info(f"Article {article_id} tagged with {tag_names}")


tag_service = TagService()
