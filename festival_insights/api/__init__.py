"""
Backend API package initialization.

This package contains FastAPI router modules for the Festival Insights backend:
- correlations: Cross-signal analyzers, the full insights report and the
  data-quality view
"""

from fastapi import APIRouter

# Import router modules
from festival_insights.api.correlations import router as correlations_router

# Create main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(correlations_router)  # correlations router has its own prefix

# Export all routers for selective imports
__all__ = [
    "api_router",
    "correlations_router",
]
