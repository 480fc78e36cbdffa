"""Keyword-only substitutes used when the reasoning service fails."""

from typing import Dict

from app.schemas.classification import ClassificationResult, SuggestionSource
from app.schemas.requirement import (
    AssertionKind,
    RequirementAssertion,
    RequirementDecision,
)
from app.services.change_review.nodes.signals import (
    DEFAULT_CATEGORY,
    indicated_category_signal,
)
from app.services.change_review.patterns import PatternLibrary

MANUAL_REVIEW_FACTOR = "Automated analysis unavailable; manual review required"


def fallback_classification(
    signals: Dict[str, bool], patterns: PatternLibrary, confidence: float
) -> ClassificationResult:
    """Category from category-indicator signals alone (default category 2)."""
    rule = indicated_category_signal(signals, patterns)
    category = rule.category if rule else DEFAULT_CATEGORY
    text = patterns.fallback
    notes = [text.reason_prefix]
    if rule and rule.fallback_note:
        notes.append(rule.fallback_note)
    notes.append(text.reason_suffix)

    factors = [rule.description] if rule and rule.description else []
    return ClassificationResult(
        category=category,
        category_name=patterns.policy(category).name,
        confidence=confidence,
        reasoning=" ".join(notes),
        key_factors=factors + [MANUAL_REVIEW_FACTOR],
        agrees_with_suggestion=True,
        source=SuggestionSource.KEYWORD_FALLBACK,
    )


def fallback_requirement(patterns: PatternLibrary) -> RequirementDecision:
    """Conservative decision: review is always required."""
    return RequirementDecision(
        required=True,
        justification=[
            patterns.fallback.reason_prefix,
            patterns.fallback.reason_suffix,
            patterns.compliance_rationale,
        ],
        basis=RequirementAssertion(kind=AssertionKind.INFERRED, required=True),
    )
