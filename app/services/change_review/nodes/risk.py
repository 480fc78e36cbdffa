"""Risk assessment node for change review."""

from typing import Optional

from langgraph.runtime import Runtime

from app.core.logging import get_logger
from app.schemas.change_request import StructuredFields
from app.schemas.risk import RiskLevel, RiskProfile
from app.services.change_review.context import Ctx
from app.services.change_review.patterns import PatternLibrary
from app.services.change_review.state import AgentState

logger = get_logger(__name__)


def assess(
    patterns: PatternLibrary,
    safety_classification: Optional[str],
    structured: Optional[StructuredFields] = None,
) -> RiskProfile:
    """
    Map the safety classification and structured flags to risk levels.

    One factor and mitigation is recorded per evaluated dimension, in
    safety, environmental, operational order.
    """
    factors, mitigations = [], []
    levels = {}

    if safety_classification and safety_classification.strip():
        rule = patterns.safety_classification.rule_for(safety_classification)
        levels["safety"] = rule.level
        factors.append(rule.factor)
        mitigations.append(rule.mitigation)

    for dimension, rule in patterns.risk_dimensions.items():
        if structured is None:
            break
        if any(getattr(structured, flag, False) for flag in rule.flags):
            levels[dimension] = rule.level
            factors.append(rule.factor)
            mitigations.append(rule.mitigation)

    return RiskProfile(
        safety=RiskLevel(levels.get("safety", RiskLevel.UNSET.value)),
        environmental=RiskLevel(levels.get("environmental", RiskLevel.UNSET.value)),
        operational=RiskLevel(levels.get("operational", RiskLevel.UNSET.value)),
        risk_factors=factors,
        mitigations=mitigations,
        risk_priority=patterns.risk_priority,
    )


def assess_risk(state: AgentState, runtime: Runtime[Ctx]) -> dict:
    structured = state.structured_fields
    profile = assess(
        runtime.context.patterns,
        structured.safety_classification if structured else None,
        structured,
    )
    logger.info("Overall risk: %s", profile.overall.value)
    return {"risk_profile": profile}
