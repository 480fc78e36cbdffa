"""Shared utilities for change review nodes."""

from typing import Iterable, List, Optional

from app.schemas.change_request import StructuredFields


def unique(items: Iterable[str]) -> List[str]:
    """De-duplicate preserving first-seen order."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def join_or_sentinel(items: Iterable[str], sentinel: str) -> str:
    values = unique(item for item in items if item)
    return ", ".join(values) if values else sentinel


def review_text(text: str, structured: Optional[StructuredFields]) -> str:
    """Raw text plus any prose carried in the structured record."""
    if structured is None:
        return text
    parts = [text, structured.problem_statement, structured.proposed_solution]
    return "\n".join(part for part in parts if part)
