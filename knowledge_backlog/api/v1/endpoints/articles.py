"""
Article API Endpoints - the knowledge backlog itself

Endpoints:
- GET /articles - List all articles with tags, newest first
- GET /articles/{article_id} - Get one article with tags
- GET /articles/{article_id}/tags - Get the tags of one article
- POST /articles - Submit a new article
- PATCH /articles/{article_id} - Change an article's status
- PUT /articles/{article_id} - Replace title, description, status and tags
- DELETE /articles/{article_id} - Delete an article

All endpoints require an allowlisted caller.
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from knowledge_backlog.core.database import get_db
from knowledge_backlog.core.exceptions import ArticleNotFoundError
from knowledge_backlog.core.logging_config import logger
from knowledge_backlog.core.security import Identity
from knowledge_backlog.modules.auth.dependencies import get_authorized_identity
from knowledge_backlog.services.article_service import article_service
from knowledge_backlog.services.tag_service import tag_service
from knowledge_backlog.schemas.article import (
    ArticleCreate,
    ArticleReplace,
    ArticleStatusUpdate,
    ArticleResponse,
    TagResponse,
    clean_tag_names,
)

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.get("", response_model=List[ArticleResponse])
async def list_articles(
    identity: Identity = Depends(get_authorized_identity),
    db: AsyncSession = Depends(get_db)
):
    """List every article, newest first, each with its tags"""
    return await article_service.list_articles(db)


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: int,
    identity: Identity = Depends(get_authorized_identity),
    db: AsyncSession = Depends(get_db)
):
    article = await article_service.get_article(db, article_id)
    if not article:
        raise ArticleNotFoundError(article_id)
    return article


@router.get("/{article_id}/tags", response_model=List[TagResponse])
async def get_article_tags(
    article_id: int,
    identity: Identity = Depends(get_authorized_identity),
    db: AsyncSession = Depends(get_db)
):
    """Tags of one article ordered by name (empty for an unknown article)"""
    return await tag_service.get_article_tags(db, article_id)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    request: ArticleCreate,
    identity: Identity = Depends(get_authorized_identity),
    db: AsyncSession = Depends(get_db)
):
    """
    Submit a new article attributed to the caller.

    Tag names are trimmed and deduplicated; unknown tags are created.
    """
    article = await article_service.add_article(db, request, identity)

    if request.tags is not None:
        await tag_service.set_article_tags(db, article.id, clean_tag_names(request.tags))
        article = await article_service.get_article(db, article.id)

    return article


@router.patch("/{article_id}", response_model=ArticleResponse)
async def update_article_status(
    article_id: int,
    request: ArticleStatusUpdate,
    identity: Identity = Depends(get_authorized_identity),
    db: AsyncSession = Depends(get_db)
):
    """
    Move an article between Backlog and Documented.

    knowledge_article_id is recorded when supplied; when omitted the
    previously recorded reference is kept.
    """
    article = await article_service.update_article(
        db,
        article_id,
        {
            "status": request.status,
            "knowledge_article_id": request.knowledge_article_id or None,
        },
        identity=identity,
    )
    if not article:
        raise ArticleNotFoundError(article_id)

    logger.info(f"Article {article_id} moved to {request.status.value} by {identity.username}")
    return article


@router.put("/{article_id}", response_model=ArticleResponse)
async def replace_article(
    article_id: int,
    request: ArticleReplace,
    identity: Identity = Depends(get_authorized_identity),
    db: AsyncSession = Depends(get_db)
):
    """
    Replace title, description and status.

    Tags are replaced only when the request carries a tags list.
    """
    article = await article_service.update_article(
        db,
        article_id,
        {
            "title": request.title,
            "description": request.description,
            "status": request.status,
        },
        identity=identity,
    )
    if not article:
        raise ArticleNotFoundError(article_id)

    if request.tags is not None:
        await tag_service.set_article_tags(db, article_id, clean_tag_names(request.tags))
        article = await article_service.get_article(db, article_id)

    return article


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: int,
    identity: Identity = Depends(get_authorized_identity),
    db: AsyncSession = Depends(get_db)
):
    if not await article_service.delete_article(db, article_id):
        raise ArticleNotFoundError(article_id)

    logger.info(f"Article {article_id} deleted by {identity.username}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
