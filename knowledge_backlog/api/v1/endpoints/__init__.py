# API endpoints
from . import articles, tags, users

__all__ = ["articles", "tags", "users"]
