"""
Schema and DTO package.
"""

from app.schemas.change_request import ChangeDescription, StructuredFields
from app.schemas.classification import (
    CategorySuggestion,
    ClassificationResult,
    SuggestionSource,
)
from app.schemas.quality import (
    DocumentQualityReport,
    DocumentQualityRequest,
    QualityBreakdown,
    QualityRating,
)
from app.schemas.report import AnalysisReport, AnalysisRequest, ExtractedFields
from app.schemas.requirement import (
    AssertionKind,
    RequirementAssertion,
    RequirementDecision,
    TieBreak,
)
from app.schemas.risk import RiskLevel, RiskProfile

__all__ = [
    "ChangeDescription",
    "StructuredFields",
    "CategorySuggestion",
    "ClassificationResult",
    "SuggestionSource",
    "DocumentQualityReport",
    "DocumentQualityRequest",
    "QualityBreakdown",
    "QualityRating",
    "AnalysisReport",
    "AnalysisRequest",
    "ExtractedFields",
    "AssertionKind",
    "RequirementAssertion",
    "RequirementDecision",
    "TieBreak",
    "RiskLevel",
    "RiskProfile",
]
