"""
Pattern library for the modification review engine.
"""

from app.services.change_review.patterns.loader import (
    load_patterns,
    build_pattern_library,
    get_pattern_library,
    get_risk_priority,
    keyword_regex,
)
from app.services.change_review.patterns.priority import highest_risk_level
from app.services.change_review.patterns.types import PatternLibrary, SignalRule

__all__ = [
    "load_patterns",
    "build_pattern_library",
    "get_pattern_library",
    "get_risk_priority",
    "keyword_regex",
    "highest_risk_level",
    "PatternLibrary",
    "SignalRule",
]
