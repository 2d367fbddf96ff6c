from pydantic import BaseModel


class CurrentUserResponse(BaseModel):
    """What the backend knows about the caller"""
    user: str
    username: str
    is_authenticated: bool
    is_authorized: bool
    is_admin: bool


class UserSummaryResponse(BaseModel):
    """Caller's own contribution to the backlog"""
    articles_added: int = 0
    status_changes: int = 0
    documented_count: int = 0
