"""
LLM and embedding client construction.

Kept apart from config.py so configuration parsing does not create
external clients. Both builders return None when no API key is configured.
"""

from typing import Optional

from langchain_openai import ChatOpenAI, OpenAIEmbeddings

from app.core.config import Settings, settings as default_settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def build_llm(settings: Settings = default_settings) -> Optional[ChatOpenAI]:
    """Build the chat model used for change reasoning and document review."""
    if settings.OPENAI_API_KEY is None:
        logger.info("OPENAI_API_KEY not set; external reasoning disabled.")
        return None
    return ChatOpenAI(
        api_key=settings.OPENAI_API_KEY,
        model=settings.LLM_MODEL,
        temperature=0,
        max_completion_tokens=1000,
        max_retries=0,
    )


def build_embeddings(settings: Settings = default_settings) -> Optional[OpenAIEmbeddings]:
    """Build the embedding model behind similarity suggestions."""
    if settings.OPENAI_API_KEY is None or not settings.SIMILARITY_ENABLED:
        return None
    return OpenAIEmbeddings(
        api_key=settings.OPENAI_API_KEY,
        model=settings.EMBEDDING_MODEL,
        max_retries=0,
    )
