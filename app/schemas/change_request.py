"""
Change description input schemas.
"""

from typing import Optional

from pydantic import Field

from app.schemas.base import ApiModel


class StructuredFields(ApiModel):
    """Optional pre-structured record supplied alongside the free text."""

    problem_statement: Optional[str] = Field(
        default=None, description="Description of the problem being solved."
    )
    proposed_solution: Optional[str] = Field(
        default=None, description="Proposed solution text."
    )
    safety_classification: Optional[str] = Field(
        default=None,
        description="Safety classification (e.g. SAFETY-CLASS, SAFETY-SIGNIFICANT).",
    )
    hazard_category: Optional[str] = Field(
        default=None, description="Facility hazard category."
    )
    is_physical_change: bool = False
    requires_new_procedures: bool = False
    requires_software_change: bool = False
    is_temporary: bool = False
    is_identical_replacement: bool = False
    requires_multiple_documents: bool = False
    is_single_discipline: bool = True
    requires_hoisting_rigging: bool = False
    facility_change_package_applicable: bool = Field(
        default=False,
        description="Non-physical change handled by the facilities change package process.",
    )
    is_design_outside_da: bool = Field(
        default=False,
        alias="isDesignOutsideDA",
        description="Design is performed outside the design authority's group.",
    )
    revisions_outside_da: bool = Field(
        default=False,
        alias="revisionsOutsideDA",
        description="Revisions are implemented outside the design authority's group.",
    )


class ChangeDescription(ApiModel):
    """Raw change text plus the optional structured record."""

    text: str = Field(description="Free-text description of the change.")
    structured_fields: Optional[StructuredFields] = Field(
        default=None, description="Optional pre-structured record."
    )
