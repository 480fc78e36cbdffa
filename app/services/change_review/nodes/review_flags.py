"""Review checklist answers and the structured-record decision tree."""

from typing import Dict, Optional

from app.schemas.change_request import StructuredFields
from app.schemas.report import DecisionTreeResult, ReviewFlags
from app.services.change_review.patterns import PatternLibrary

YES, NO, NOT_APPLICABLE = "Yes", "No", "N/A"


def preliminary_safety_classification(
    signals: Dict[str, bool],
    patterns: PatternLibrary,
    declared: Optional[str] = None,
) -> str:
    """SC / SS / GS from the declared classification, else from signals."""
    rules = patterns.safety_classification
    if declared and declared.strip():
        rule = rules.rule_for(declared)
        return rule.labels[-1] if rule.labels else rules.default
    for signal, label in rules.derived.items():
        if signals.get(signal):
            return label
    return rules.default


def derive_review_flags(
    text: str,
    category: int,
    signals: Dict[str, bool],
    patterns: PatternLibrary,
    structured: Optional[StructuredFields] = None,
) -> ReviewFlags:
    safety = signals.get("safety_significant", False)
    critical = signals.get("critical_safety", False)

    if category == 1 or critical:
        design_review = YES
    elif category == 5:
        design_review = NO
    else:
        design_review = NOT_APPLICABLE

    if category == 1 or (category == 2 and safety):
        major_evaluation = YES
    elif category == 5:
        major_evaluation = NOT_APPLICABLE
    else:
        major_evaluation = NO

    if safety:
        safety_in_design = YES
    elif category in (4, 5):
        safety_in_design = NOT_APPLICABLE
    else:
        safety_in_design = NO

    designators = [
        rule.label
        for rule in patterns.approval_designators
        if rule.applies(text, category, signals)
    ]

    return ReviewFlags(
        project_design_review=design_review,
        major_modification_evaluation=major_evaluation,
        safety_in_design_strategy=safety_in_design,
        preliminary_safety_classification=preliminary_safety_classification(
            signals, patterns, structured.safety_classification if structured else None
        ),
        approval_designators=", ".join(designators) or patterns.default_designator,
    )


def design_type(fields: StructuredFields, patterns: PatternLibrary) -> int:
    """Design category implied by the structured record."""
    if fields.is_temporary:
        return 4
    if fields.is_identical_replacement:
        return 5
    problem = fields.problem_statement or ""
    solution = fields.proposed_solution or ""
    for rule in patterns.design_type_rules:
        if rule.matches(problem, solution):
            return rule.category
    return 2


def evaluate_decision_tree(
    fields: StructuredFields, patterns: PatternLibrary
) -> DecisionTreeResult:
    """
    Walk the structured-record screening questions in order; the first
    question that applies decides.
    """
    category = design_type(fields, patterns)

    if fields.is_temporary:
        return DecisionTreeResult(
            required=False, reason="All changes are temporary", category=4
        )
    if not fields.is_physical_change:
        if fields.facility_change_package_applicable:
            return DecisionTreeResult(
                required=False,
                reason="Use TFC-ENG-DESIGN-C-67 - Facilities Change Package Process",
                category=2,
            )
        if fields.requires_new_procedures:
            return DecisionTreeResult(
                required=True,
                reason="Non-physical change requiring new or revised technical procedures",
                category=2,
            )
        return DecisionTreeResult(
            required=False,
            reason="Non-physical change - MT may not be required",
            category=2,
        )
    if fields.is_identical_replacement:
        return DecisionTreeResult(
            required=False, reason="Identical replacement - Design Type V", category=5
        )

    screening = (
        (fields.is_design_outside_da, "Design being performed outside DA's group"),
        (fields.requires_new_procedures, "New or revised technical procedures/training/maintenance manual required"),
        (fields.requires_multiple_documents, "Multiple design documents required"),
        (not fields.is_single_discipline, "Multi-discipline design required"),
        (fields.revisions_outside_da, "Revisions implemented outside DA's group"),
        (fields.requires_software_change, "Software changes required"),
        (fields.requires_hoisting_rigging, "Hoisting and/or rigging required"),
    )
    for applies, reason in screening:
        if applies:
            return DecisionTreeResult(required=True, reason=reason, category=category)

    return DecisionTreeResult(
        required=False,
        reason="Possibly exempt based on decision tree criteria",
        category=category,
    )
