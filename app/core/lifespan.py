from contextlib import asynccontextmanager
from fastapi import FastAPI

from app.core.config import settings
from app.core.llm import build_embeddings, build_llm
from app.core.logging import get_logger, setup_logging
from app.integrations.reasoning import EmbeddingSimilarityClient, LLMReasoningClient
from app.services.change_review.analyzer import ChangeAnalysisService
from app.services.change_review.patterns import get_pattern_library
from app.services.quality import DocumentQualityService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan function for the FastAPI application.
    Builds the shared pattern library and services once at startup.
    """
    # 1. Logging
    setup_logging(settings.LOG_LEVEL)

    # 2. Immutable pattern library
    patterns = get_pattern_library(settings.PATTERN_LIBRARY_PATH)

    # 3. External clients (None when not configured)
    llm = build_llm(settings)
    embeddings = build_embeddings(settings)
    reasoning = LLMReasoningClient(llm) if llm is not None else None
    similarity = (
        EmbeddingSimilarityClient(embeddings, patterns.category_prototypes)
        if embeddings is not None
        else None
    )

    # 4. Services
    app.state.analysis_service = ChangeAnalysisService(
        patterns, reasoning=reasoning, similarity=similarity, settings=settings
    )
    app.state.quality_service = DocumentQualityService(
        patterns, llm=llm, settings=settings
    )
    logger.info(
        "%s ready (reasoning=%s, similarity=%s)",
        settings.PROJECT_NAME,
        reasoning is not None,
        similarity is not None,
    )

    yield
