"""
API v1 router - aggregates all endpoint modules.
"""

from fastapi import APIRouter

from accounts.api.v1.endpoints import health, users

api_router = APIRouter(prefix="/v1")

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
