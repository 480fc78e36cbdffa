"""Review requirement node for change review."""

from typing import Dict, List, Optional, Tuple

from langgraph.runtime import Runtime

from app.core.logging import get_logger
from app.schemas.requirement import (
    AssertionKind,
    RequirementAssertion,
    RequirementDecision,
    TieBreak,
)
from app.services.change_review.context import Ctx
from app.services.change_review.nodes.fallback import fallback_requirement
from app.services.change_review.nodes.utils import unique
from app.services.change_review.patterns import PatternLibrary
from app.services.change_review.state import AgentState

logger = get_logger(__name__)

Span = Tuple[int, int, str]


def _spans(patterns, text: str) -> List[Span]:
    return sorted(
        (m.start(), m.end(), m.group(0)) for p in patterns for m in p.finditer(text)
    )


def find_requirement_assertion(
    reasoning: str,
    patterns: PatternLibrary,
    tie_break: TieBreak = TieBreak.FIRST_MENTION,
) -> Optional[RequirementAssertion]:
    """
    Look for an explicit "required" / "not required" statement.

    A "required" match lying inside a "not required" match is discarded.
    When both outcomes remain, ``tie_break`` decides; ``IGNORE`` treats the
    text as having no explicit assertion.
    """
    negative = _spans(patterns.not_required_assertions, reasoning)
    positive = [
        span
        for span in _spans(patterns.required_assertions, reasoning)
        if not any(s <= span[0] and span[1] <= e for s, e, _ in negative)
    ]
    if not positive and not negative:
        return None

    if positive and negative:
        logger.warning(
            "Reasoning asserts both outcomes (%r, %r); applying %s tie-break",
            positive[0][2],
            negative[0][2],
            tie_break.value,
        )
        if tie_break is TieBreak.IGNORE:
            return None
        if tie_break is TieBreak.CONSERVATIVE:
            chosen, required = positive[0], True
        else:
            # Same start position favours required
            required = positive[0][0] <= negative[0][0]
            chosen = positive[0] if required else negative[0]
    elif positive:
        chosen, required = positive[0], True
    else:
        chosen, required = negative[0], False

    return RequirementAssertion(
        kind=AssertionKind.EXPLICIT, required=required, evidence=chosen[2].strip()
    )


def decide(
    patterns: PatternLibrary,
    category: int,
    signals: Dict[str, bool],
    reasoning: Optional[str] = None,
    tie_break: TieBreak = TieBreak.FIRST_MENTION,
) -> RequirementDecision:
    """Decide whether formal review is required and justify it."""
    assertion = (
        find_requirement_assertion(reasoning, patterns, tie_break) if reasoning else None
    )
    if assertion is not None:
        closing = (
            patterns.compliance_rationale
            if assertion.required
            else patterns.local_procedures_caveat
        )
        return RequirementDecision(
            required=assertion.required,
            justification=unique(
                [f'External analysis states "{assertion.evidence}"', closing]
            ),
            basis=assertion,
        )

    policy = patterns.policy(category)
    required = policy.is_required(signals)
    if required:
        lines = list(policy.required_reasons)
        for rule in patterns.signals:
            if signals.get(rule.name) and rule.justifies(category):
                lines.extend(rule.justification)
        lines.append(patterns.compliance_rationale)
    else:
        lines = [*policy.not_required_caveats, patterns.local_procedures_caveat]

    return RequirementDecision(
        required=required,
        justification=unique(lines),
        basis=RequirementAssertion(kind=AssertionKind.INFERRED, required=required),
    )


def decide_requirement(state: AgentState, runtime: Runtime[Ctx]) -> dict:
    """Apply explicit assertions, then the category policy table."""
    ctx = runtime.context
    decision = decide(
        ctx.patterns,
        state.classification.category,
        state.signals,
        reasoning=state.reasoning_text,
        tie_break=ctx.settings.REQUIREMENT_TIE_BREAK,
    )
    logger.info(
        "Review required=%s basis=%s", decision.required, decision.basis.kind.value
    )
    return {"requirement": decision}


def require_manual_review(state: AgentState, runtime: Runtime[Ctx]) -> dict:
    """Degraded path: manual review is mandatory."""
    logger.warning("Requiring manual review: %s", state.degraded_reason)
    return {"requirement": fallback_requirement(runtime.context.patterns)}
