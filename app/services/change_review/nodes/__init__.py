"""
Nodes for the change review graph.
"""

from app.services.change_review.nodes.extraction import extract_fields
from app.services.change_review.nodes.signals import detect_signals
from app.services.change_review.nodes.reasoning import (
    reason_about_change,
    suggest_category,
)
from app.services.change_review.nodes.classification import classify_change
from app.services.change_review.nodes.requirement import (
    decide_requirement,
    require_manual_review,
)
from app.services.change_review.nodes.risk import assess_risk

__all__ = [
    "extract_fields",
    "detect_signals",
    "reason_about_change",
    "suggest_category",
    "classify_change",
    "decide_requirement",
    "require_manual_review",
    "assess_risk",
]
