"""
Central API router that aggregates all route modules.
"""

from fastapi import APIRouter
from rezervasyon.api.routes import trips, reservations

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(trips.router)
api_router.include_router(reservations.router)
