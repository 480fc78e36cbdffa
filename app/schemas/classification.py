"""
Classification schemas.
"""

from enum import Enum
from typing import Annotated, List

from pydantic import Field

from app.schemas.base import ApiModel

Category = Annotated[int, Field(ge=1, le=5)]
Confidence = Annotated[float, Field(ge=0.0, le=1.0)]


class SuggestionSource(str, Enum):
    """Where a category suggestion came from."""

    SIMILARITY = "similarity"
    EXTERNAL_REASONING = "external_reasoning"
    KEYWORD_FALLBACK = "keyword_fallback"


class CategorySuggestion(ApiModel):
    category: Category
    confidence: Confidence
    source: SuggestionSource


class ClassificationResult(ApiModel):
    """Chosen category with its confidence and explanation."""

    category: Category
    category_name: str = ""
    confidence: Confidence
    reasoning: str
    key_factors: List[str] = Field(min_length=1)
    agrees_with_suggestion: bool
    source: SuggestionSource
