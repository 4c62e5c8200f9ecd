"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter

from authsvc.api.routes import auth, health

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(health.router)
