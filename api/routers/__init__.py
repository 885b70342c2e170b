"""
Router package for the training engine API.

This package contains all API routers organized by domain:
- health: Liveness endpoint
- sessions: Session lifecycle (start, log sets, complete, abandon, delete)
- progress: Personal records, streaks, previous performance, previews
"""

from api.routers.health import router as health_router
from api.routers.sessions import router as sessions_router
from api.routers.progress import router as progress_router

__all__ = [
    "health_router",
    "sessions_router",
    "progress_router",
]
