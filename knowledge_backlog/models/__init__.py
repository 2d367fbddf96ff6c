# Re-export all models for convenient imports
from knowledge_backlog.models.tag import Tag, article_tags
from knowledge_backlog.models.article import Article, ArticleStatus
from knowledge_backlog.models.authorized_user import AuthorizedUser

__all__ = [
    # Articles
    "Article",
    "ArticleStatus",
    # Tags
    "Tag",
    "article_tags",
    # Allowlist
    "AuthorizedUser",
]
