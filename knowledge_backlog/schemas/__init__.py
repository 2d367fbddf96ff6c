# Pydantic schemas
from knowledge_backlog.schemas.article import (
    ArticleStatus,
    TagResponse,
    ArticleCreate,
    ArticleReplace,
    ArticleStatusUpdate,
    ArticleResponse,
    clean_tag_names,
)
from knowledge_backlog.schemas.admin import (
    StatsWindow,
    UserStats,
    StatusBreakdown,
    StatsResponse,
    AdminStatsResponse,
    AuthorizedUserCreate,
    AuthorizedUserListResponse,
    ClearDatabaseResponse,
)
from knowledge_backlog.schemas.user import CurrentUserResponse, UserSummaryResponse

__all__ = [
    "ArticleStatus",
    "TagResponse",
    "ArticleCreate",
    "ArticleReplace",
    "ArticleStatusUpdate",
    "ArticleResponse",
    "clean_tag_names",
    "StatsWindow",
    "UserStats",
    "StatusBreakdown",
    "StatsResponse",
    "AdminStatsResponse",
    "AuthorizedUserCreate",
    "AuthorizedUserListResponse",
    "ClearDatabaseResponse",
    "CurrentUserResponse",
    "UserSummaryResponse",
]
