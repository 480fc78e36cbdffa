"""
Review requirement schemas.
"""

from enum import Enum
from typing import List, Optional

from pydantic import Field

from app.schemas.base import ApiModel


class TieBreak(str, Enum):
    """Resolution when reasoning asserts both outcomes."""

    FIRST_MENTION = "first_mention"
    CONSERVATIVE = "conservative"
    IGNORE = "ignore"


class AssertionKind(str, Enum):
    EXPLICIT = "explicit"
    INFERRED = "inferred"


class RequirementAssertion(ApiModel):
    """
    Basis of a requirement decision.

    ``explicit`` when the reasoning text states the outcome outright,
    ``inferred`` when it was derived from category policy and signals.
    """

    kind: AssertionKind
    required: bool
    evidence: Optional[str] = Field(
        default=None, description="Matched assertion text for explicit decisions."
    )


class RequirementDecision(ApiModel):
    required: bool
    justification: List[str] = Field(min_length=1)
    basis: RequirementAssertion
