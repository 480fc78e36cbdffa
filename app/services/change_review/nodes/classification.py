"""Category classification node for change review."""

import re
from typing import Dict, List, Optional

from langgraph.runtime import Runtime

from app.core.logging import get_logger
from app.schemas.classification import (
    CategorySuggestion,
    ClassificationResult,
    SuggestionSource,
)
from app.services.change_review.context import Ctx
from app.services.change_review.nodes.fallback import fallback_classification
from app.services.change_review.nodes.signals import DEFAULT_CATEGORY, keyword_suggestion
from app.services.change_review.nodes.utils import unique
from app.services.change_review.patterns import PatternLibrary
from app.services.change_review.state import AgentState

logger = get_logger(__name__)

UNPARSEABLE_REASONING = "Fallback to similarity-based classification"
GENERIC_KEY_FACTOR = "General engineering change with no distinguishing indicators"

_KEY_FACTORS_BLOCK = re.compile(
    r"key\s+factors\s*:\s*\n(?P<body>(?:\s*[-*•].*\n?)+)", re.IGNORECASE
)
_REASONING_LINE = re.compile(r"^\s*reasoning\s*:\s*(?P<body>.+)", re.IGNORECASE | re.MULTILINE | re.DOTALL)


def find_category_token(reasoning: str, patterns: PatternLibrary) -> Optional[int]:
    """Explicit category token, checked from Category V down to Category I."""
    for token in patterns.category_tokens:
        if token.regex.search(reasoning):
            return token.category
    return None


def parse_confidence(reasoning: str, patterns: PatternLibrary) -> float:
    """Stated confidence in [0, 1]; values above 1 are read as percentages."""
    for pattern in patterns.confidence_patterns:
        match = pattern.search(reasoning)
        if not match:
            continue
        value = float(match.group(1))
        if value > 1:
            value /= 100
        return clamp_confidence(value)
    return 0.0


def parse_key_factors(reasoning: str) -> List[str]:
    match = _KEY_FACTORS_BLOCK.search(reasoning)
    if not match:
        return []
    factors = []
    for line in match.group("body").splitlines():
        factor = line.strip().lstrip("-*•").strip()
        if factor:
            factors.append(factor)
    return factors


def parse_explanation(reasoning: str) -> str:
    match = _REASONING_LINE.search(reasoning)
    return (match.group("body") if match else reasoning).strip()


def clamp_confidence(value: float) -> float:
    return max(0.0, min(1.0, value))


def _signal_factors(signals: Dict[str, bool], patterns: PatternLibrary) -> List[str]:
    return [
        rule.description
        for rule in patterns.signals
        if signals.get(rule.name) and rule.description
    ]


def classify(
    patterns: PatternLibrary,
    signals: Dict[str, bool],
    suggestion: Optional[CategorySuggestion] = None,
    reasoning: Optional[str] = None,
    neutral_confidence: float = 0.5,
) -> ClassificationResult:
    """
    Choose the category.

    Precedence: explicit category token in the reasoning text, then the
    suggested category, then category 2.
    """
    signal_factors = _signal_factors(signals, patterns)
    token = find_category_token(reasoning, patterns) if reasoning else None

    if token is not None:
        derived = parse_confidence(reasoning, patterns)
        confidence = max(suggestion.confidence if suggestion else 0.0, derived)
        category = token
        explanation = parse_explanation(reasoning)
        factors = parse_key_factors(reasoning) + signal_factors
        agrees = suggestion is None or suggestion.category == token
        source = SuggestionSource.EXTERNAL_REASONING
    elif suggestion is not None:
        category = suggestion.category
        confidence = suggestion.confidence
        factors = signal_factors
        agrees = True
        source = suggestion.source
        explanation = (
            UNPARSEABLE_REASONING
            if reasoning
            else f"Category suggested by {suggestion.source.value.replace('_', ' ')}"
        )
    else:
        category = DEFAULT_CATEGORY
        confidence = neutral_confidence
        factors = signal_factors
        agrees = True
        source = SuggestionSource.KEYWORD_FALLBACK
        explanation = UNPARSEABLE_REASONING if reasoning else "Default category applied"

    return ClassificationResult(
        category=category,
        category_name=patterns.policy(category).name,
        confidence=clamp_confidence(confidence),
        reasoning=explanation,
        key_factors=unique(factors) or [GENERIC_KEY_FACTOR],
        agrees_with_suggestion=agrees,
        source=source,
    )


def classify_change(state: AgentState, runtime: Runtime[Ctx]) -> dict:
    """Classify the change, using keyword rules when reasoning failed."""
    ctx = runtime.context
    neutral = ctx.settings.FALLBACK_CONFIDENCE

    if state.reasoning_degraded:
        result = fallback_classification(state.signals, ctx.patterns, neutral)
    else:
        suggestion = state.suggestion or keyword_suggestion(
            state.signals, ctx.patterns, neutral
        )
        result = classify(
            ctx.patterns,
            state.signals,
            suggestion=suggestion,
            reasoning=state.reasoning_text,
            neutral_confidence=neutral,
        )

    logger.info(
        "Classified as category %d (%s) confidence=%.2f source=%s",
        result.category,
        result.category_name,
        result.confidence,
        result.source.value,
    )
    return {"classification": result}
