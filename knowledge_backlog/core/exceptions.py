"""
Custom Exceptions for Knowledge Backlog
=======================================

Services raise these for validation and authorization problems. Storage
errors (sqlalchemy.exc.SQLAlchemyError) are not wrapped: they propagate
unchanged and the API layer turns them into a generic 500.

A missing row is not an exception inside the services: lookups return
None / False and the endpoints raise the matching NotFound error.

Usage:
    from knowledge_backlog.core.exceptions import ArticleNotFoundError

    article = await article_service.get_article(db, article_id)
    if not article:
        raise ArticleNotFoundError(article_id)
"""

from typing import Optional, Any, Dict


class BacklogError(Exception):
    """Base exception for all Knowledge Backlog errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(BacklogError):
    """No caller identity was supplied"""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="AUTH_REQUIRED")


class AuthorizationError(BacklogError):
    """Caller is not allowed to perform this action"""

    status_code = 403

    def __init__(self, message: str = "You have no permission!"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(BacklogError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            f"{resource_type} not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": str(resource_id)}
        )


class ArticleNotFoundError(ResourceNotFoundError):
    """Article not found"""

    def __init__(self, article_id: int):
        super().__init__("Article", article_id)


class UserNotFoundError(ResourceNotFoundError):
    """Username is not in the authorized list"""

    def __init__(self, username: str):
        super().__init__("User", username)
        self.message = "User not found in authorized list"


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(BacklogError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class EmptyUpdateError(ValidationError):
    """An update carried no fields to apply"""

    def __init__(self, message: str = "No fields to update"):
        super().__init__(message)
        self.code = "EMPTY_UPDATE"


class DuplicateUserError(ValidationError):
    """Username is already in the authorized list"""

    def __init__(self, username: str):
        super().__init__("User is already authorized", field="username")
        self.code = "DUPLICATE_USER"
        self.details["username"] = username


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: BacklogError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "detail": error.message,
        "error": error.to_dict()
    }
