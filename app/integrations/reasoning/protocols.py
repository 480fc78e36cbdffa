"""
Contracts for the external services the engine consumes.
"""

from typing import List, Protocol, runtime_checkable

from app.schemas.classification import CategorySuggestion


@runtime_checkable
class ReasoningClient(Protocol):
    async def reason(self, text: str) -> str:
        """Return a free-text analysis of the change description."""
        ...


@runtime_checkable
class SimilarityClient(Protocol):
    async def suggest_categories(self, text: str) -> List[CategorySuggestion]:
        """Return category suggestions ranked by confidence, highest first."""
        ...
