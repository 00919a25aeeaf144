"""
Main API router.
"""

from fastapi import APIRouter
from app.api import subscriptions, renewals, parsing, settings

api_router = APIRouter()

api_router.include_router(subscriptions.router)
api_router.include_router(renewals.router)
api_router.include_router(parsing.router)
api_router.include_router(settings.router)
