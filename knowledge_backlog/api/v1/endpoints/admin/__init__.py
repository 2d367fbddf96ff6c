"""
Admin API endpoints for the Knowledge Backlog.
All endpoints require the caller to be listed in ADMIN_USERS.
"""
from fastapi import APIRouter

from knowledge_backlog.api.v1.endpoints.admin import analytics, users, maintenance

admin_router = APIRouter(prefix="/admin", tags=["Admin"])

# Include all admin sub-routers
admin_router.include_router(analytics.router, tags=["Admin Analytics"])
admin_router.include_router(users.router, prefix="/users", tags=["Admin Users"])
admin_router.include_router(maintenance.router, tags=["Admin Maintenance"])
