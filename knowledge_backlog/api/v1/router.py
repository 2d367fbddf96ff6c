from fastapi import APIRouter
from knowledge_backlog.api.v1.endpoints import articles, tags, users
from knowledge_backlog.api.v1.endpoints.admin import admin_router

api_router = APIRouter()

api_router.include_router(articles.router)
api_router.include_router(tags.router)
api_router.include_router(users.router)

# Admin endpoints
api_router.include_router(admin_router)
