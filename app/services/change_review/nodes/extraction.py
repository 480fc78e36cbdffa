"""Field extraction node for change review."""

from typing import Optional

from langgraph.runtime import Runtime

from app.core.logging import get_logger
from app.schemas.change_request import StructuredFields
from app.schemas.report import ExtractedFields
from app.services.change_review.context import Ctx
from app.services.change_review.nodes.utils import join_or_sentinel
from app.services.change_review.patterns import PatternLibrary
from app.services.change_review.state import AgentState

logger = get_logger(__name__)


def extract_location(text: str, patterns: PatternLibrary) -> str:
    """First matching template wins; keyword locations are the fallback."""
    rules = patterns.location
    for template in rules.templates:
        match = template.regex.search(text)
        if match:
            location = template.render(match)
            for qualifier in rules.qualifiers:
                if qualifier.matches(text):
                    location += qualifier.value
            return location
    for rule in rules.keywords:
        if rule.matches(text):
            return rule.value
    return rules.sentinel


def extract_systems(text: str, patterns: PatternLibrary) -> str:
    rules = patterns.systems
    found = [rule.value for rule in rules.keywords if rule.matches(text)]
    for template in rules.templates:
        found.extend(template.render(m) for m in template.regex.finditer(text))
    return join_or_sentinel(found, rules.sentinel)


def extract_equipment(text: str, patterns: PatternLibrary) -> str:
    rules = patterns.equipment
    found = []
    for template in rules.templates:
        found.extend(template.render(m) for m in template.regex.finditer(text))
    return join_or_sentinel(found, rules.sentinel)


def extract_proposed_solution(
    text: str, structured: Optional[StructuredFields], patterns: PatternLibrary
) -> str:
    if structured is not None and (structured.proposed_solution or "").strip():
        return structured.proposed_solution.strip()

    rules = patterns.proposed_solution
    for template in rules.templates:
        match = template.regex.search(text)
        if match and template.render(match):
            return template.render(match)
    for rule in rules.keywords:
        if rule.matches(text):
            return rule.value
    return rules.sentinel


def extract_change_fields(
    text: str, structured: Optional[StructuredFields], patterns: PatternLibrary
) -> ExtractedFields:
    """Extract every field; unmatched fields carry their sentinel."""
    return ExtractedFields(
        location=extract_location(text, patterns),
        systems=extract_systems(text, patterns),
        equipment=extract_equipment(text, patterns),
        proposed_solution=extract_proposed_solution(text, structured, patterns),
    )


def extract_fields(state: AgentState, runtime: Runtime[Ctx]) -> dict:
    """Pull location, systems, equipment and proposed solution from the text."""
    fields = extract_change_fields(
        state.text, state.structured_fields, runtime.context.patterns
    )
    logger.debug("Extracted fields: %s", fields.model_dump())
    return {"extracted_fields": fields}
