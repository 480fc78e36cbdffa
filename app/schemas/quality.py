"""
Document quality schemas.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field, computed_field

from app.schemas.base import ApiModel

Score = float

QUALITY_WEIGHTS: Dict[str, float] = {
    "grammar": 0.25,
    "style": 0.35,
    "technical": 0.25,
    "compliance": 0.15,
}
DEFAULT_COMPLIANCE_SCORE = 80.0


class QualityRating(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    SATISFACTORY = "Satisfactory"
    NEEDS_IMPROVEMENT = "Needs Improvement"
    POOR = "Poor"


def rating_for(score: float) -> QualityRating:
    """Map an overall score to its five-level rating."""
    if score >= 90:
        return QualityRating.EXCELLENT
    if score >= 80:
        return QualityRating.GOOD
    if score >= 70:
        return QualityRating.SATISFACTORY
    if score >= 60:
        return QualityRating.NEEDS_IMPROVEMENT
    return QualityRating.POOR


class QualityBreakdown(ApiModel):
    """
    Sub-scores on a 0-100 scale.

    ``overall`` and ``rating`` are derived and never assigned.
    """

    grammar: Score = Field(ge=0, le=100)
    style: Score = Field(ge=0, le=100)
    technical: Score = Field(ge=0, le=100)
    compliance: Score = Field(default=DEFAULT_COMPLIANCE_SCORE, ge=0, le=100)
    clarity: Optional[Score] = Field(default=None, ge=0, le=100)

    @computed_field(alias="overall")
    @property
    def overall(self) -> float:
        total = sum(getattr(self, name) * weight for name, weight in QUALITY_WEIGHTS.items())
        return max(0.0, min(100.0, total))

    @computed_field(alias="rating")
    @property
    def rating(self) -> QualityRating:
        return rating_for(self.overall)


class QualityIssue(ApiModel):
    type: str
    description: str
    context: str
    suggestion: str
    severity: str
    start: int
    length: int


class DocumentMetadata(ApiModel):
    word_count: int
    character_count: int
    sentence_count: int
    paragraph_count: int
    readability_score: float
    readability_level: str


class DocumentQualityRequest(ApiModel):
    text: str = Field(description="Plain document text.")
    document_type: str = Field(default="General", description="Document type label.")


class DocumentQualityReport(ApiModel):
    metadata: DocumentMetadata
    quality: QualityBreakdown
    grammar_issues: List[QualityIssue] = Field(default_factory=list)
    style_issues: List[QualityIssue] = Field(default_factory=list)
    technical_terms: List[str] = Field(default_factory=list)
    has_proper_structure: bool = False
    explanation: str = ""
    degraded: bool = False
    degraded_reason: Optional[str] = None
