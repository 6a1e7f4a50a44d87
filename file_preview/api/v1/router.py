"""
Main router for API v1
"""

from fastapi import APIRouter

from .endpoints import info, preview

api_router = APIRouter()

api_router.include_router(preview.router)
api_router.include_router(info.router)
