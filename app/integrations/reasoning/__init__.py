from .protocols import ReasoningClient, SimilarityClient
from .client import LLMReasoningClient
from .similarity import EmbeddingSimilarityClient, cosine_similarities

__all__ = [
    "ReasoningClient",
    "SimilarityClient",
    "LLMReasoningClient",
    "EmbeddingSimilarityClient",
    "cosine_similarities",
]
