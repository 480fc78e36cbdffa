"""
Analysis report schemas.
"""

import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import Field, computed_field

from app.schemas.base import ApiModel
from app.schemas.change_request import StructuredFields
from app.schemas.classification import ClassificationResult
from app.schemas.requirement import RequirementDecision
from app.schemas.risk import RiskProfile


class ExtractedFields(ApiModel):
    location: str
    systems: str
    equipment: str
    proposed_solution: str


class ReviewFlags(ApiModel):
    """Review checklist answers derived from the category and text."""

    project_design_review: str = Field(description="Yes / No / N/A")
    major_modification_evaluation: str = Field(description="Yes / No / N/A")
    safety_in_design_strategy: str = Field(description="Yes / No / N/A")
    preliminary_safety_classification: str = Field(description="SC / SS / GS")
    approval_designators: str


class DecisionTreeResult(ApiModel):
    """Outcome of walking the structured-record decision tree."""

    required: bool
    reason: str
    category: int = Field(ge=1, le=5)


class AnalysisRequest(ApiModel):
    text: str = Field(description="Free-text description of the change.")
    structured_fields: Optional[StructuredFields] = None


class AnalysisReport(ApiModel):
    """Assembled result of one analysis request."""

    report_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    extracted_fields: ExtractedFields
    classification: ClassificationResult
    requirement: RequirementDecision
    risk_profile: RiskProfile
    review_flags: ReviewFlags
    decision_tree: Optional[DecisionTreeResult] = None
    suggested_actions: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    degraded: bool = False
    degraded_reason: Optional[str] = None

    @computed_field(alias="category")
    @property
    def category(self) -> int:
        return self.classification.category

    @computed_field(alias="confidence")
    @property
    def confidence(self) -> float:
        return self.classification.confidence

    @computed_field(alias="requirementRequired")
    @property
    def requirement_required(self) -> bool:
        return self.requirement.required

    @computed_field(alias="requirementJustification")
    @property
    def requirement_justification(self) -> List[str]:
        return list(self.requirement.justification)
