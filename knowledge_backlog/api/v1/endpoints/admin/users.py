"""
Admin allowlist management.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_backlog.core.database import get_db
from knowledge_backlog.core.exceptions import UserNotFoundError
from knowledge_backlog.core.logging_config import logger
from knowledge_backlog.core.security import Identity
from knowledge_backlog.modules.auth.dependencies import get_current_admin
from knowledge_backlog.services.user_service import authorized_user_service
from knowledge_backlog.schemas.admin import AuthorizedUserCreate, AuthorizedUserListResponse

router = APIRouter()


@router.get("", response_model=AuthorizedUserListResponse)
async def list_authorized_users(
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    return AuthorizedUserListResponse(users=await authorized_user_service.list_users(db))


@router.post("", response_model=AuthorizedUserListResponse, status_code=status.HTTP_201_CREATED)
async def add_authorized_user(
    request: AuthorizedUserCreate,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """Add a username to the allowlist (stored lower-case without a domain)"""
    username = await authorized_user_service.add_user(
        db, request.username, added_by=current_admin.username
    )
    logger.info(f"[Admin] {current_admin.username} authorized {username}")

    return AuthorizedUserListResponse(
        users=await authorized_user_service.list_users(db),
        message=f"User {username} added successfully",
    )


@router.delete("/{username}", response_model=AuthorizedUserListResponse)
async def remove_authorized_user(
    username: str,
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    if not await authorized_user_service.remove_user(db, username):
        raise UserNotFoundError(username)
    logger.info(f"[Admin] {current_admin.username} removed {username}")

    return AuthorizedUserListResponse(
        users=await authorized_user_service.list_users(db),
        message=f"User {username} removed successfully",
    )
