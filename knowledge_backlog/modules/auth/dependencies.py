from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from knowledge_backlog.core.database import get_db
from knowledge_backlog.core.exceptions import AuthenticationError, AuthorizationError
from knowledge_backlog.core.logging_config import logger
from knowledge_backlog.core.security import Identity, identity_from_request
from knowledge_backlog.services.user_service import authorized_user_service


def get_current_identity(request: Request) -> Optional[Identity]:
    """Caller identity from the trusted header, None when absent"""
    return identity_from_request(request)


def get_required_identity(
    identity: Optional[Identity] = Depends(get_current_identity)
) -> Identity:
    """Caller identity, 401 when the header is missing"""
    if identity is None:
        logger.log_auth_event("identity", success=False, reason="missing identity header")
        raise AuthenticationError()
    return identity


async def get_authorized_identity(
    identity: Identity = Depends(get_required_identity),
    db: AsyncSession = Depends(get_db)
) -> Identity:
    """
    Caller identity that is on the allowlist.

    Usage:
        @router.get("")
        async def list_articles(identity: Identity = Depends(get_authorized_identity)):
            ...
    """
    if not await authorized_user_service.is_authorized(db, identity.username):
        logger.log_auth_event(
            "authorize", success=False, username=identity.username, reason="not allowlisted"
        )
        raise AuthorizationError()
    return identity


async def get_current_admin(
    identity: Identity = Depends(get_required_identity)
) -> Identity:
    """Caller listed in ADMIN_USERS"""
    if not identity.is_admin:
        logger.log_auth_event(
            "admin", success=False, username=identity.username, reason="not an admin"
        )
        raise AuthorizationError("Admin access required")
    return identity
