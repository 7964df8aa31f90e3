from .health import router as health_router
from .news import router as news_router

__all__ = [
    "health_router",
    "news_router",
]
