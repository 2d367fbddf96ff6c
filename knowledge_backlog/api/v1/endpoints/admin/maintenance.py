"""
Admin maintenance endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_backlog.core.database import get_db
from knowledge_backlog.core.logging_config import logger
from knowledge_backlog.core.security import Identity
from knowledge_backlog.modules.auth.dependencies import get_current_admin
from knowledge_backlog.services.admin_service import admin_service
from knowledge_backlog.schemas.admin import ClearDatabaseResponse

router = APIRouter()


@router.post("/clear-database", response_model=ClearDatabaseResponse)
async def clear_database(
    db: AsyncSession = Depends(get_db),
    current_admin: Identity = Depends(get_current_admin)
):
    """Delete all articles, tags and tag links. The allowlist is kept."""
    counts = await admin_service.clear_database(db)
    logger.warning(f"[Admin] Database cleared by {current_admin.username}")

    return ClearDatabaseResponse(message="Database cleared successfully", **counts)
