from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
from datetime import datetime


# ==================== Statistics Schemas ====================

class StatsWindow(BaseModel):
    """Optional reporting window; start defaults to the epoch, end to now"""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class UserStats(BaseModel):
    """Per-author activity inside the window"""
    articles_added: int = 0
    status_changes: int = 0


class StatusBreakdown(BaseModel):
    Backlog: int = 0
    Documented: int = 0


class StatsResponse(BaseModel):
    """
    Backlog statistics.

    total_articles, backlog_count and documented_count describe the whole
    backlog; articles_added and status_changes only count the window.
    """
    total_articles: int = 0
    articles_added: int = 0
    status_changes: int = 0
    backlog_count: int = 0
    documented_count: int = 0


class AdminStatsResponse(StatsResponse):
    status_breakdown: StatusBreakdown
    user_stats: Dict[str, UserStats]


# ==================== Allowlist Schemas ====================

class AuthorizedUserCreate(BaseModel):
    username: str = Field(..., max_length=255)

    @field_validator('username')
    @classmethod
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("Username is required")
        return v


class AuthorizedUserListResponse(BaseModel):
    users: List[str]
    message: Optional[str] = None


# ==================== Maintenance Schemas ====================

class ClearDatabaseResponse(BaseModel):
    message: str
    articles_deleted: int
    tags_deleted: int
    links_deleted: int
