"""
API routers package.
"""

from api.routers.runs import router as runs_router
from api.routers.threads import router as threads_router

__all__ = ["runs_router", "threads_router"]
