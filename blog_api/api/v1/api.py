"""API v1 router aggregator."""

from fastapi import APIRouter

from blog_api.api.v1.endpoints import auth, users, categories, posts, comments

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(categories.router)
api_router.include_router(posts.router)
api_router.include_router(comments.router)

__all__ = ["api_router"]
