from fastapi import APIRouter
from app.api.endpoints import analysis_router, documents_router, health_router

router = APIRouter(prefix="/api/v1")

router.include_router(health_router, prefix="/health", tags=["health"])
router.include_router(analysis_router, prefix="/analysis", tags=["analysis"])
router.include_router(documents_router, prefix="/documents", tags=["documents"])
