"""
API v1 router that aggregates all endpoint routers.
Routes under /users/me and /attendance resolve the current user per request.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    health,
    users,
    attendance,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
