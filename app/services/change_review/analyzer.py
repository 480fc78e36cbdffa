"""
Change analysis service.

Validates the request, runs the change review graph and assembles the
immutable AnalysisReport.
"""

from typing import Optional

from app.core.config import Settings, settings as default_settings
from app.core.logging import get_logger
from app.integrations.reasoning import ReasoningClient, SimilarityClient
from app.schemas.change_request import ChangeDescription, StructuredFields
from app.schemas.report import AnalysisReport
from app.services.change_review.context import Ctx
from app.services.change_review.graph import change_review_graph
from app.services.change_review.nodes.review_flags import (
    derive_review_flags,
    evaluate_decision_tree,
)
from app.services.change_review.patterns import PatternLibrary
from app.services.errors import InvalidChangeDescriptionError

logger = get_logger(__name__)


def validate_change_description(
    text: Optional[str], structured: Optional[StructuredFields] = None
) -> ChangeDescription:
    if text is None or not text.strip():
        raise InvalidChangeDescriptionError("Change description text is required")
    return ChangeDescription(text=text.strip(), structured_fields=structured)


class ChangeAnalysisService:
    def __init__(
        self,
        patterns: PatternLibrary,
        reasoning: Optional[ReasoningClient] = None,
        similarity: Optional[SimilarityClient] = None,
        settings: Settings = default_settings,
    ):
        self.context = Ctx(
            patterns=patterns,
            settings=settings,
            reasoning=reasoning,
            similarity=similarity,
        )

    async def analyze(
        self, text: Optional[str], structured: Optional[StructuredFields] = None
    ) -> AnalysisReport:
        """
        Analyze one change description.

        Raises:
            InvalidChangeDescriptionError: If the text is missing or blank.
        """
        description = validate_change_description(text, structured)

        result = await change_review_graph.ainvoke(
            {
                "text": description.text,
                "structured_fields": description.structured_fields,
            },
            context=self.context,
        )
        return self._build_report(description, result)

    def _build_report(self, description: ChangeDescription, result: dict) -> AnalysisReport:
        patterns = self.context.patterns
        classification = result["classification"]
        requirement = result["requirement"]
        degraded = bool(result.get("reasoning_degraded"))

        if degraded:
            actions = list(patterns.fallback.suggested_actions)
        elif requirement.required:
            actions = list(patterns.suggested_actions_required)
        else:
            actions = list(patterns.suggested_actions_not_required)

        structured = description.structured_fields
        report = AnalysisReport(
            extracted_fields=result["extracted_fields"],
            classification=classification,
            requirement=requirement,
            risk_profile=result["risk_profile"],
            review_flags=derive_review_flags(
                description.text,
                classification.category,
                result.get("signals") or {},
                patterns,
                structured,
            ),
            decision_tree=evaluate_decision_tree(structured, patterns) if structured else None,
            suggested_actions=actions,
            warnings=list(result.get("warnings") or []),
            degraded=degraded,
            degraded_reason=result.get("degraded_reason") if degraded else None,
        )
        logger.info(
            "Report %s: category=%d required=%s risk=%s degraded=%s",
            report.report_id,
            report.category,
            report.requirement_required,
            report.risk_profile.overall.value,
            report.degraded,
        )
        return report
