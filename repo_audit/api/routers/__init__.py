"""API routers."""

from .analyze import router as analyze_router
from .chat import router as chat_router
from .health import router as health_router
from .repositories import router as repositories_router

__all__ = [
    "analyze_router",
    "chat_router",
    "health_router",
    "repositories_router",
]
