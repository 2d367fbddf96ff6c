"""
Tag API Endpoints
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from knowledge_backlog.core.database import get_db
from knowledge_backlog.core.security import Identity
from knowledge_backlog.modules.auth.dependencies import get_authorized_identity
from knowledge_backlog.services.tag_service import tag_service
from knowledge_backlog.schemas.article import TagResponse

router = APIRouter(prefix="/tags", tags=["Tags"])


@router.get("", response_model=List[TagResponse])
async def list_tags(
    identity: Identity = Depends(get_authorized_identity),
    db: AsyncSession = Depends(get_db)
):
    """All tags ordered by name"""
    return await tag_service.list_tags(db)
