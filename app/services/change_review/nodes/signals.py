"""Signal detection node for change review."""

from typing import Dict, Optional

from langgraph.runtime import Runtime

from app.core.logging import get_logger
from app.schemas.change_request import StructuredFields
from app.schemas.classification import CategorySuggestion, SuggestionSource
from app.services.change_review.context import Ctx
from app.services.change_review.nodes.utils import review_text
from app.services.change_review.patterns import PatternLibrary, SignalRule
from app.services.change_review.state import AgentState

logger = get_logger(__name__)

DEFAULT_CATEGORY = 2


def detect_change_signals(
    text: str, structured: Optional[StructuredFields], patterns: PatternLibrary
) -> Dict[str, bool]:
    """
    Evaluate every signal in the library.

    A signal is set when one of its keywords appears as a whole word, or when
    its structured flag is set on the record.
    """
    corpus = review_text(text, structured)
    signals = {}
    for rule in patterns.signals:
        active = rule.regex.search(corpus) is not None
        if rule.structured_flag and structured is not None:
            active = active or bool(getattr(structured, rule.structured_flag, False))
        signals[rule.name] = active
    return signals


def indicated_category_signal(
    signals: Dict[str, bool], patterns: PatternLibrary
) -> Optional[SignalRule]:
    """First active category indicator in precedence order."""
    for rule in patterns.category_signals:
        if signals.get(rule.name):
            return rule
    return None


def keyword_suggestion(
    signals: Dict[str, bool], patterns: PatternLibrary, confidence: float
) -> CategorySuggestion:
    rule = indicated_category_signal(signals, patterns)
    return CategorySuggestion(
        category=rule.category if rule else DEFAULT_CATEGORY,
        confidence=confidence,
        source=SuggestionSource.KEYWORD_FALLBACK,
    )


def detect_signals(state: AgentState, runtime: Runtime[Ctx]) -> dict:
    """Detect safety, scope and category-indicator signals."""
    signals = detect_change_signals(
        state.text, state.structured_fields, runtime.context.patterns
    )
    logger.debug(
        "Active signals: %s", [name for name, active in signals.items() if active]
    )
    return {"signals": signals}
