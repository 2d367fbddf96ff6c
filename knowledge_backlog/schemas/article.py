"""
Article and Tag Schemas - Request/Response models for the backlog API
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime

from knowledge_backlog.models.article import ArticleStatus


# ============== Tag Schemas ==============

class TagResponse(BaseModel):
    """Schema for tag response"""
    id: int
    name: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ============== Article Schemas ==============

class ArticleCreate(BaseModel):
    """Schema for submitting a new article"""
    title: str = Field(..., max_length=500, description="Article title")
    description: str = Field(..., description="What needs documenting")
    status: ArticleStatus = Field(..., description="Backlog or Documented")
    tags: Optional[List[str]] = Field(None, description="Tag names, created on first use")

    @field_validator('title', 'description')
    @classmethod
    def not_blank(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("must not be empty")
        return v


class ArticleReplace(ArticleCreate):
    """Schema for replacing an article's content, status and tags"""
    pass


class ArticleStatusUpdate(BaseModel):
    """Schema for a status transition"""
    status: ArticleStatus
    knowledge_article_id: Optional[str] = Field(
        None,
        max_length=255,
        description="External knowledge-base reference, kept when omitted"
    )


class ArticleResponse(BaseModel):
    """Schema for article response"""
    id: int
    title: str
    description: str
    status: ArticleStatus
    added: datetime
    author: Optional[str] = None
    author_name: Optional[str] = None
    modified_by: Optional[str] = None
    modified_by_name: Optional[str] = None
    modified_at: Optional[datetime] = None
    knowledge_article_id: Optional[str] = None
    tags: List[TagResponse] = []

    model_config = ConfigDict(from_attributes=True)


def clean_tag_names(names: Optional[List[str]]) -> List[str]:
    """
    Strip tag names, drop blanks and duplicates (first occurrence wins).

    Tag-set replacement fails on a repeated name, so the API layer
    cleans the list before handing it over.
    """
    cleaned: List[str] = []
    for name in names or []:
        name = name.strip()
        if name and name not in cleaned:
            cleaned.append(name)
    return cleaned
