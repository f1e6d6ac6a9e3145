"""API routers."""

from .chat import router as chat_router
from .health import router as health_router
from .index import router as index_router
from .prompts import router as prompts_router
from .search import router as search_router

__all__ = [
    "chat_router",
    "health_router",
    "index_router",
    "prompts_router",
    "search_router",
]
