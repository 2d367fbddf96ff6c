from knowledge_backlog.services.tag_service import TagService, tag_service
from knowledge_backlog.services.article_service import ArticleService, article_service
from knowledge_backlog.services.stats_service import StatsService, stats_service
from knowledge_backlog.services.user_service import AuthorizedUserService, authorized_user_service
from knowledge_backlog.services.admin_service import AdminService, admin_service

__all__ = [
    "TagService",
    "tag_service",
    "ArticleService",
    "article_service",
    "StatsService",
    "stats_service",
    "AuthorizedUserService",
    "authorized_user_service",
    "AdminService",
    "admin_service",
]
