from .analysis import router as analysis_router
from .documents import router as documents_router
from .health import router as health_router

__all__ = ["analysis_router", "documents_router", "health_router"]
