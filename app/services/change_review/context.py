"""
LangGraph Runtime Context for change review.

Defines the context schema for dependency injection into LangGraph nodes.
"""

from dataclasses import dataclass
from typing import Optional

from app.core.config import Settings
from app.integrations.reasoning import ReasoningClient, SimilarityClient
from app.services.change_review.patterns import PatternLibrary


@dataclass(frozen=True)
class Ctx:
    """Runtime context for LangGraph nodes.

    Attributes:
        patterns: Shared read-only pattern library.
        settings: Timeouts, attempts and decision behaviour.
        reasoning: External reasoning client, or None when not configured.
        similarity: Similarity suggestion client, or None when not configured.
    """

    patterns: PatternLibrary
    settings: Settings
    reasoning: Optional[ReasoningClient] = None
    similarity: Optional[SimilarityClient] = None
