"""Main API router aggregation."""

from fastapi import APIRouter

from nextflix_api.api.movies import router as movies_router

# Mounted under the configured API prefix by the application factory
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(movies_router)
