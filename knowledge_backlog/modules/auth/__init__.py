# Authentication module

from knowledge_backlog.modules.auth.dependencies import (
    get_current_identity,
    get_required_identity,
    get_authorized_identity,
    get_current_admin,
)

__all__ = [
    "get_current_identity",
    "get_required_identity",
    "get_authorized_identity",
    "get_current_admin",
]
