"""
Pattern-based document quality scoring.

Pure functions: issue detection, readability, sub-scores and the weighted
combination into a QualityBreakdown.
"""

import re
from statistics import mean
from typing import Iterable, List, Optional, Sequence

import textstat

from app.schemas.quality import (
    DEFAULT_COMPLIANCE_SCORE,
    DocumentMetadata,
    QualityBreakdown,
    QualityIssue,
)
from app.services.change_review.patterns import PatternLibrary
from app.services.change_review.patterns.types import TextPattern

_PARAGRAPH_BREAK = re.compile(r"\r?\n\s*\r?\n")

CONTEXT_CHARS = 50
CONSISTENCY_SCORE = 80.0
DEFAULT_TECHNICAL_ACCURACY = 75.0
STRUCTURED_SCORE, UNSTRUCTURED_SCORE = 85.0, 60.0

READABILITY_LEVELS = (
    (90, "Very Easy"),
    (80, "Easy"),
    (70, "Fairly Easy"),
    (60, "Standard"),
    (50, "Fairly Difficult"),
    (30, "Difficult"),
)

EXPLANATIONS = {
    "Excellent": "Excellent document quality with minimal issues. Ready for professional use.",
    "Good": "Good document quality with minor improvements needed.",
    "Satisfactory": "Satisfactory document quality. Some improvements would enhance readability.",
    "Needs Improvement": "Document needs improvement in several areas before professional use.",
    "Poor": "Significant improvements required across multiple quality dimensions.",
}


def clamp_score(value: float) -> float:
    return max(0.0, min(100.0, value))


def combine(
    grammar: float,
    style: float,
    technical: float,
    compliance: Optional[float] = None,
    clarity: Optional[float] = None,
) -> QualityBreakdown:
    """Weighted combination; compliance defaults when it was not evaluated."""
    return QualityBreakdown(
        grammar=clamp_score(grammar),
        style=clamp_score(style),
        technical=clamp_score(technical),
        compliance=clamp_score(
            DEFAULT_COMPLIANCE_SCORE if compliance is None else compliance
        ),
        clarity=None if clarity is None else clamp_score(clarity),
    )


def style_score(clarity: float, consistency: float, concision: float, professionalism: float) -> float:
    return mean([clarity, consistency, concision, professionalism])


def technical_score(accuracy: float, terminology: float, structure: float) -> float:
    return mean([accuracy, terminology, structure])


def grammar_score(issue_count: int) -> float:
    return max(0.0, 100.0 - 5.0 * issue_count)


# ---------------------------------------------------------------------------
# Issues
# ---------------------------------------------------------------------------


def issue_context(text: str, start: int, length: int) -> str:
    begin = max(0, start - CONTEXT_CHARS)
    end = min(len(text), start + length + CONTEXT_CHARS)
    context = text[begin:end]
    if begin > 0:
        context = "..." + context
    if end < len(text):
        context += "..."
    return context


def find_issues(text: str, patterns: Sequence[TextPattern]) -> List[QualityIssue]:
    issues = []
    for pattern in patterns:
        for match in pattern.regex.finditer(text):
            issues.append(
                QualityIssue(
                    type=pattern.name,
                    description=pattern.description,
                    context=issue_context(text, match.start(), len(match.group(0))),
                    suggestion=pattern.suggestion,
                    severity=pattern.severity,
                    start=match.start(),
                    length=len(match.group(0)),
                )
            )
    return sorted(issues, key=lambda issue: issue.start)


def _count(issues: Iterable[QualityIssue], *types: str) -> int:
    return sum(1 for issue in issues if issue.type in types)


# ---------------------------------------------------------------------------
# Readability
# ---------------------------------------------------------------------------


def readability_score(text: str) -> float:
    """Flesch reading ease clamped to [0, 100]; 0 for blank text."""
    if not text or not text.strip():
        return 0.0
    return clamp_score(textstat.flesch_reading_ease(text))


def readability_level(score: float) -> str:
    for threshold, level in READABILITY_LEVELS:
        if score >= threshold:
            return level
    return "Very Difficult"


def document_metadata(text: str) -> DocumentMetadata:
    score = readability_score(text)
    return DocumentMetadata(
        word_count=textstat.lexicon_count(text, removepunct=True),
        character_count=len(text),
        sentence_count=textstat.sentence_count(text) if text.strip() else 0,
        paragraph_count=len([p for p in _PARAGRAPH_BREAK.split(text) if p.strip()]),
        readability_score=score,
        readability_level=readability_level(score),
    )


# ---------------------------------------------------------------------------
# Sub-scores
# ---------------------------------------------------------------------------


def clarity_score(readability: float, passive_count: int) -> float:
    return clamp_score(50.0 + readability / 2 - 2.0 * passive_count)


def concision_score(style_issues: Sequence[QualityIssue]) -> float:
    return clamp_score(100.0 - 5.0 * _count(style_issues, "wordy_phrases", "redundant_phrases"))


def professionalism_score(grammar_issues: Sequence[QualityIssue], word_count: int) -> float:
    if not word_count:
        return 0.0
    per_hundred = 100.0 * len(grammar_issues) / word_count
    return clamp_score(100.0 - 10.0 * per_hundred)


def identify_technical_terms(text: str, patterns: PatternLibrary) -> List[str]:
    found = []
    for rule in patterns.quality.terms:
        if rule.matches(text) and rule.value not in found:
            found.append(rule.value)
    return found


def terminology_score(terms: Sequence[str]) -> float:
    return clamp_score(60.0 + 5.0 * len(terms))


def has_proper_structure(text: str, patterns: PatternLibrary) -> bool:
    """At least two section markers, e.g. Purpose and Scope."""
    markers = patterns.quality.structure_markers
    return sum(1 for marker in markers if marker.matches(text)) >= 2
