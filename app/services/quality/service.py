"""
Document quality service.

Pattern-based grammar, style and structure checks, plus an optional LLM
review for technical accuracy and compliance. When the review fails the
report is built from the pattern checks alone and marked degraded.
"""

from typing import List, Optional

from langchain_core.language_models import BaseChatModel
from sqlmodel import SQLModel, Field

from app.core.config import Settings, settings as default_settings
from app.core.logging import get_logger
from app.schemas.quality import DocumentQualityReport
from app.services.change_review.patterns import PatternLibrary
from app.services.change_review.prompts import DOCUMENT_REVIEW_PROMPT
from app.services.errors import EmptyDocumentError
from app.services.fallback import attempt
from app.services.quality import scorer

logger = get_logger(__name__)


class TechnicalReviewOutput(SQLModel):
    """Structured output from the LLM document review."""

    technical_accuracy: float = Field(
        default=scorer.DEFAULT_TECHNICAL_ACCURACY, ge=0, le=100
    )
    compliance_score: float = Field(default=80.0, ge=0, le=100)
    identified_standards: List[str] = Field(default_factory=list)
    issues: List[str] = Field(default_factory=list)


class DocumentQualityService:
    def __init__(
        self,
        patterns: PatternLibrary,
        llm: Optional[BaseChatModel] = None,
        settings: Settings = default_settings,
    ):
        self.patterns = patterns
        self.settings = settings
        self._review_chain = (
            DOCUMENT_REVIEW_PROMPT | llm.with_structured_output(TechnicalReviewOutput)
            if llm is not None
            else None
        )

    async def _review(self, text: str, document_type: str):
        async def call():
            result = await self._review_chain.ainvoke(
                {"document": text, "document_type": document_type}
            )
            if isinstance(result, dict):
                result = TechnicalReviewOutput(**result)
            return result

        return await attempt(
            call,
            label="Document review",
            timeout=self.settings.REASONING_TIMEOUT_SECS,
            attempts=self.settings.REASONING_MAX_ATTEMPTS,
        )

    async def analyze(self, text: Optional[str], document_type: str = "General") -> DocumentQualityReport:
        """
        Score a document.

        Raises:
            EmptyDocumentError: If the text is missing or blank.
        """
        if text is None or not text.strip():
            raise EmptyDocumentError("Document text is required")

        quality = self.patterns.quality
        metadata = scorer.document_metadata(text)
        grammar_issues = scorer.find_issues(text, quality.grammar)
        style_issues = scorer.find_issues(text, quality.style)
        terms = scorer.identify_technical_terms(text, self.patterns)
        structured = scorer.has_proper_structure(text, self.patterns)

        clarity = scorer.clarity_score(
            metadata.readability_score,
            sum(1 for issue in style_issues if issue.type == "passive_voice"),
        )
        style = scorer.style_score(
            clarity,
            scorer.CONSISTENCY_SCORE,
            scorer.concision_score(style_issues),
            scorer.professionalism_score(grammar_issues, metadata.word_count),
        )

        accuracy, compliance = scorer.DEFAULT_TECHNICAL_ACCURACY, None
        degraded, degraded_reason = False, None
        if self._review_chain is not None:
            outcome = await self._review(text, document_type)
            if outcome.degraded:
                degraded, degraded_reason = True, outcome.reason
            else:
                accuracy = outcome.value.technical_accuracy
                compliance = outcome.value.compliance_score

        breakdown = scorer.combine(
            grammar=scorer.grammar_score(len(grammar_issues)),
            style=style,
            technical=scorer.technical_score(
                accuracy,
                scorer.terminology_score(terms),
                scorer.STRUCTURED_SCORE if structured else scorer.UNSTRUCTURED_SCORE,
            ),
            compliance=compliance,
            clarity=clarity,
        )
        logger.info(
            "Document quality %.1f (%s), %d grammar / %d style issues",
            breakdown.overall,
            breakdown.rating.value,
            len(grammar_issues),
            len(style_issues),
        )
        return DocumentQualityReport(
            metadata=metadata,
            quality=breakdown,
            grammar_issues=grammar_issues,
            style_issues=style_issues,
            technical_terms=terms,
            has_proper_structure=structured,
            explanation=scorer.EXPLANATIONS[breakdown.rating.value],
            degraded=degraded,
            degraded_reason=degraded_reason,
        )
