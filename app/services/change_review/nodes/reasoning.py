"""External reasoning and similarity nodes for change review."""

from typing import List

from langgraph.runtime import Runtime

from app.core.logging import get_logger
from app.schemas.classification import CategorySuggestion
from app.services.change_review.context import Ctx
from app.services.change_review.state import AgentState
from app.services.errors import MalformedReasoningError
from app.services.fallback import attempt

logger = get_logger(__name__)


def validate_reasoning_text(value) -> str:
    """Reject responses that are not a non-blank string."""
    if not isinstance(value, str):
        raise MalformedReasoningError(
            f"Expected text response, got {type(value).__name__}"
        )
    if not value.strip():
        raise MalformedReasoningError("Empty reasoning response")
    return value


def top_suggestion(suggestions: List[CategorySuggestion]) -> CategorySuggestion:
    if not suggestions:
        raise ValueError("No category suggestions returned")
    return max(suggestions, key=lambda s: s.confidence)


async def reason_about_change(state: AgentState, runtime: Runtime[Ctx]) -> dict:
    """Ask the reasoning service for a free-text analysis.

    A missing client is not a failure; a configured client that errors,
    times out or returns malformed output marks the run degraded.
    """
    ctx = runtime.context
    if ctx.reasoning is None:
        logger.debug("No reasoning client configured, skipping.")
        return {}

    outcome = await attempt(
        lambda: ctx.reasoning.reason(state.text),
        label="Reasoning service",
        timeout=ctx.settings.REASONING_TIMEOUT_SECS,
        attempts=ctx.settings.REASONING_MAX_ATTEMPTS,
        validate=validate_reasoning_text,
    )
    if outcome.degraded:
        return {"reasoning_degraded": True, "degraded_reason": outcome.reason}
    return {"reasoning_text": outcome.value}


async def suggest_category(state: AgentState, runtime: Runtime[Ctx]) -> dict:
    """Fetch the similarity-based category suggestion, if a client is configured."""
    ctx = runtime.context
    if ctx.similarity is None:
        return {}

    outcome = await attempt(
        lambda: ctx.similarity.suggest_categories(state.text),
        label="Similarity service",
        timeout=ctx.settings.REASONING_TIMEOUT_SECS,
        validate=top_suggestion,
    )
    if outcome.degraded:
        return {"warnings": [f"Similarity suggestion unavailable: {outcome.reason}"]}
    return {"suggestion": outcome.value}
