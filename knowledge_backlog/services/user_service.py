"""
Authorized User Service - the allowlist of callers allowed to use the backlog

Usernames are compared in normalised form: lower-case, trimmed, with any
``DOMAIN\\`` or ``DOMAIN/`` prefix removed.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from typing import Optional, List, Iterable
import logging

from knowledge_backlog.core.exceptions import ValidationError, DuplicateUserError
from knowledge_backlog.core.security import extract_username
from knowledge_backlog.models.authorized_user import AuthorizedUser
from knowledge_backlog.utils.time_utils import utcnow

logger = logging.getLogger(__name__)


def normalize_username(value: Optional[str]) -> str:
    if not value:
        return ""
    return extract_username(value.strip().lower()).strip()


class AuthorizedUserService:
    """Service for the persisted allowlist"""

    async def list_users(self, db: AsyncSession) -> List[str]:
        """All allowlisted usernames, alphabetically"""
        result = await db.execute(
            select(AuthorizedUser.username).order_by(AuthorizedUser.username.asc())
        )
        return list(result.scalars().all())

    async def is_authorized(self, db: AsyncSession, username: str) -> bool:
        name = normalize_username(username)
        if not name:
            return False
        found = await db.scalar(
            select(AuthorizedUser.id).where(AuthorizedUser.username == name)
        )
        return found is not None

    async def add_user(
        self,
        db: AsyncSession,
        username: str,
        added_by: Optional[str] = None
    ) -> str:
        """
        Add a username to the allowlist.

        Returns:
            The normalised username that was stored

        Raises:
            ValidationError: username is empty after normalisation
            DuplicateUserError: username is already allowlisted
        """
        name = normalize_username(username)
        if not name:
            raise ValidationError("Username is required", field="username")

        if await self.is_authorized(db, name):
            raise DuplicateUserError(name)

        try:
            db.add(AuthorizedUser(username=name, added_by=added_by, created_at=utcnow()))
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(f"User '{name}' authorized by {added_by or 'configuration'}")
        return name

    async def remove_user(self, db: AsyncSession, username: str) -> bool:
        """Remove a username. False if it was not allowlisted."""
        name = normalize_username(username)
        try:
            result = await db.execute(
                delete(AuthorizedUser).where(AuthorizedUser.username == name)
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        removed = result.rowcount > 0
        if removed:
            logger.info(f"User '{name}' removed from allowlist")
        return removed

    async def seed_users(self, db: AsyncSession, usernames: Iterable[str]) -> int:
        """
        Insert configured usernames that are not allowlisted yet.

        Existing rows are left alone, so this is safe to run on every start.

        Returns:
            Number of rows inserted
        """
        existing = set(await self.list_users(db))
        inserted = 0

        try:
            for username in usernames:
                name = normalize_username(username)
                if not name or name in existing:
                    continue
                db.add(AuthorizedUser(username=name, created_at=utcnow()))
                existing.add(name)
                inserted += 1
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        if inserted:
            logger.info(f"Seeded {inserted} authorized user(s) from configuration")
        return inserted


authorized_user_service = AuthorizedUserService()
