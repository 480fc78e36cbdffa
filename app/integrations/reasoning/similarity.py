"""
Embedding similarity client.

Embeds the change text together with one prototype description per category
in a single batched call and ranks categories by cosine similarity.
"""

from typing import Dict, List, Sequence

import numpy as np
from langchain_core.embeddings import Embeddings

from app.core.logging import get_logger
from app.schemas.classification import CategorySuggestion, SuggestionSource

logger = get_logger(__name__)


def cosine_similarities(
    query: Sequence[float], vectors: Sequence[Sequence[float]]
) -> np.ndarray:
    """Cosine similarity of the query against each row; 0 where a norm is 0."""
    q = np.asarray(query, dtype=float)
    m = np.asarray(vectors, dtype=float).reshape(len(vectors), -1)
    if m.shape[1] != q.shape[0]:
        raise ValueError(f"Vector length mismatch: {q.shape[0]} != {m.shape[1]}")
    dots = m @ q
    norms = np.linalg.norm(m, axis=1) * np.linalg.norm(q)
    return np.divide(dots, norms, out=np.zeros_like(dots), where=norms != 0)


class EmbeddingSimilarityClient:
    def __init__(self, embeddings: Embeddings, prototypes: Dict[int, str]):
        if not prototypes:
            raise ValueError("At least one category prototype is required")
        self._embeddings = embeddings
        self._categories = list(prototypes)
        self._prototype_texts = [prototypes[c] for c in self._categories]

    async def suggest_categories(self, text: str) -> List[CategorySuggestion]:
        vectors = await self._embeddings.aembed_documents(
            [text, *self._prototype_texts]
        )
        if len(vectors) != len(self._categories) + 1:
            raise ValueError(
                f"Expected {len(self._categories) + 1} embeddings, got {len(vectors)}"
            )
        scores = np.clip(cosine_similarities(vectors[0], vectors[1:]), 0.0, 1.0)

        suggestions = [
            CategorySuggestion(
                category=category,
                confidence=float(score),
                source=SuggestionSource.SIMILARITY,
            )
            for category, score in zip(self._categories, scores)
        ]
        suggestions.sort(key=lambda s: s.confidence, reverse=True)
        logger.debug(
            "Similarity ranking: %s",
            ", ".join(f"{s.category}={s.confidence:.3f}" for s in suggestions),
        )
        return suggestions
