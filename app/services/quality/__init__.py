"""
Document quality scoring.
"""

from app.services.quality.scorer import combine
from app.services.quality.service import DocumentQualityService

__all__ = ["combine", "DocumentQualityService"]
