"""API route registration."""

from fastapi import APIRouter

from assetadmin.api.routes import assets, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(assets.router, prefix="/assets", tags=["assets"])
