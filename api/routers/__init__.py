"""
Router package for the Coach Strength API.

This package contains all API routers organized by domain:
- health: Health check endpoints
- athletes: Per-athlete 1RM resolution, suggestions, records and analysis
- one_rm: Reference rules and 1RM estimation
"""

from api.routers.health import router as health_router
from api.routers.athletes import router as athletes_one_rm_router
from api.routers.one_rm import router as one_rm_router

__all__ = [
    "health_router",
    "athletes_one_rm_router",
    "one_rm_router",
]
