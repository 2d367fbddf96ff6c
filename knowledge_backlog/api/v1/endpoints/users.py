"""
Caller Endpoints

Endpoints:
- GET /auth/user - Who the backend thinks the caller is
- GET /user/stats - The caller's own contribution to the backlog
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from knowledge_backlog.core.database import get_db
from knowledge_backlog.core.security import Identity
from knowledge_backlog.modules.auth.dependencies import get_current_identity, get_authorized_identity
from knowledge_backlog.services.stats_service import stats_service
from knowledge_backlog.services.user_service import authorized_user_service
from knowledge_backlog.schemas.user import CurrentUserResponse, UserSummaryResponse

router = APIRouter(tags=["Users"])


@router.get("/auth/user", response_model=CurrentUserResponse)
async def get_current_user(
    identity: Optional[Identity] = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
):
    """
    Describe the caller.

    Never fails: an anonymous caller gets empty names and all flags false.
    """
    if identity is None:
        return CurrentUserResponse(
            user="",
            username="",
            is_authenticated=False,
            is_authorized=False,
            is_admin=False,
        )

    return CurrentUserResponse(
        user=identity.raw,
        username=identity.username,
        is_authenticated=True,
        is_authorized=await authorized_user_service.is_authorized(db, identity.username),
        is_admin=identity.is_admin,
    )


@router.get("/user/stats", response_model=UserSummaryResponse)
async def get_my_stats(
    identity: Identity = Depends(get_authorized_identity),
    db: AsyncSession = Depends(get_db)
):
    """Articles the caller added, status changes on them and articles they documented"""
    return await stats_service.get_user_summary(db, identity.username)
