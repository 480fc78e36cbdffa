"""
Service dependencies.
"""

from fastapi import Request

from app.services.change_review.analyzer import ChangeAnalysisService
from app.services.quality import DocumentQualityService


def get_analysis_service(request: Request) -> ChangeAnalysisService:
    """Get the change analysis service built at startup."""
    return request.app.state.analysis_service


def get_quality_service(request: Request) -> DocumentQualityService:
    """Get the document quality service built at startup."""
    return request.app.state.quality_service
