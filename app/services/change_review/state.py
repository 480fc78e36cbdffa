"""
Agent state model for the change review graph.

Pure graph state, no service-layer imports.
"""

from sqlmodel import SQLModel, Field
from typing import Optional, List, Annotated, Dict
import operator

from app.schemas.change_request import StructuredFields
from app.schemas.classification import CategorySuggestion, ClassificationResult
from app.schemas.report import ExtractedFields
from app.schemas.requirement import RequirementDecision
from app.schemas.risk import RiskProfile


class AgentState(SQLModel):
    """
    State of one change review run.

    Used by LangGraph to manage workflow state, not a database table.
    """

    text: str = Field(description="Raw change description text.")
    structured_fields: Optional[StructuredFields] = Field(
        default=None, description="Optional pre-structured record."
    )
    extracted_fields: Optional[ExtractedFields] = Field(
        default=None, description="Fields pulled from the text."
    )
    signals: Dict[str, bool] = Field(
        default_factory=dict, description="Signal name to detected flag."
    )
    suggestion: Optional[CategorySuggestion] = Field(
        default=None, description="Similarity suggestion, when available."
    )
    reasoning_text: Optional[str] = Field(
        default=None, description="Free-text output of the reasoning service."
    )
    reasoning_degraded: bool = Field(
        default=False, description="Reasoning was configured but failed."
    )
    degraded_reason: Optional[str] = Field(
        default=None, description="Why the reasoning step fell back."
    )
    classification: Optional[ClassificationResult] = None
    requirement: Optional[RequirementDecision] = None
    risk_profile: Optional[RiskProfile] = None
    warnings: Annotated[List[str], operator.add] = Field(
        default_factory=list, description="Non-fatal issues raised by nodes."
    )
