"""
Tests for document quality scoring
==================================
Weighted combination, ratings, pattern checks and the optional LLM review.
"""

import pytest

from app.schemas.quality import QualityRating, rating_for
from app.services.errors import EmptyDocumentError
from app.services.quality import scorer
from app.services.quality.service import DocumentQualityService, TechnicalReviewOutput

from tests.fakes import FakeReviewLLM

DOCUMENT = """Purpose

This procedure describes the inspection of the reactor coolant pump.

Scope

The maintenance team performs the inspection in order to verify compliance with the design requirement.
"""


class TestCombine:
    """Tests for the weighted combination."""

    def test_weighted_overall(self):
        breakdown = scorer.combine(grammar=90, style=80, technical=70, compliance=80)
        assert breakdown.overall == pytest.approx(80.0)
        assert breakdown.rating is QualityRating.GOOD

    def test_compliance_defaults_when_not_evaluated(self):
        breakdown = scorer.combine(grammar=100, style=100, technical=100)
        assert breakdown.compliance == 80.0
        assert breakdown.overall == pytest.approx(97.0)

    def test_sub_scores_clamped(self):
        breakdown = scorer.combine(grammar=130, style=-5, technical=50, compliance=50)
        assert breakdown.grammar == 100.0
        assert breakdown.style == 0.0
        assert 0.0 <= breakdown.overall <= 100.0

    @pytest.mark.parametrize(
        "score, rating",
        [
            (100, QualityRating.EXCELLENT),
            (90, QualityRating.EXCELLENT),
            (89.99, QualityRating.GOOD),
            (80, QualityRating.GOOD),
            (70, QualityRating.SATISFACTORY),
            (60, QualityRating.NEEDS_IMPROVEMENT),
            (59.9, QualityRating.POOR),
            (0, QualityRating.POOR),
        ],
    )
    def test_rating_boundaries(self, score, rating):
        assert rating_for(score) is rating


class TestPatternChecks:
    """Tests for grammar, style and readability helpers."""

    def test_grammar_score(self):
        assert scorer.grammar_score(0) == 100.0
        assert scorer.grammar_score(3) == 85.0
        assert scorer.grammar_score(40) == 0.0

    def test_repeated_word_issue(self, patterns):
        text = "Close the the valve before venting."
        issues = scorer.find_issues(text, patterns.quality.grammar)
        repeated = [i for i in issues if i.type == "repeated_words"]
        assert len(repeated) == 1
        assert repeated[0].start == text.index("the the")
        assert "the the" in repeated[0].context

    def test_issue_context_marks_truncation(self):
        text = "x" * 200
        context = scorer.issue_context(text, 100, 5)
        assert context.startswith("...") and context.endswith("...")

    def test_readability_of_blank_text(self):
        assert scorer.readability_score("") == 0.0
        assert scorer.readability_score("  \n ") == 0.0

    def test_readability_clamped(self):
        """Short plain sentences score above 100 on the raw Flesch scale."""
        assert scorer.readability_score("The cat sat on the mat.") == 100.0

    @pytest.mark.parametrize(
        "score, level",
        [(95, "Very Easy"), (65, "Standard"), (35, "Difficult"), (10, "Very Difficult")],
    )
    def test_readability_levels(self, score, level):
        assert scorer.readability_level(score) == level

    def test_metadata_counts(self):
        metadata = scorer.document_metadata(DOCUMENT)
        assert metadata.paragraph_count == 4
        assert metadata.word_count == 27
        assert metadata.sentence_count == 2
        assert 0.0 <= metadata.readability_score <= 100.0

    def test_terms_and_structure(self, patterns):
        terms = scorer.identify_technical_terms(DOCUMENT, patterns)
        assert "reactor" in terms and "inspection" in terms
        assert scorer.has_proper_structure(DOCUMENT, patterns) is True
        assert scorer.has_proper_structure("Just one line.", patterns) is False

    def test_terms_compiled_once_per_library(self, patterns):
        """Terms and markers are compiled when the library is built."""
        rules = patterns.quality.terms
        assert all(rule.regex.pattern.startswith(r"\b") for rule in rules)
        assert [m.value for m in patterns.quality.structure_markers][:2] == [
            "purpose",
            "scope",
        ]
        assert scorer.identify_technical_terms("Reactor shutdown", patterns) == [
            "reactor",
            "shutdown",
        ]


class TestDocumentQualityService:
    """Tests for the end-to-end quality report."""

    async def test_without_llm_not_degraded(self, patterns, test_settings):
        report = await DocumentQualityService(patterns, settings=test_settings).analyze(DOCUMENT)
        assert report.degraded is False
        assert report.quality.compliance == 80.0
        assert report.has_proper_structure is True
        assert report.explanation == scorer.EXPLANATIONS[report.quality.rating.value]

    async def test_review_failure_degrades(self, patterns, test_settings):
        llm = FakeReviewLLM(error=ConnectionError("no route to host"))
        service = DocumentQualityService(patterns, llm=llm, settings=test_settings)
        report = await service.analyze(DOCUMENT)
        assert report.degraded is True
        assert "ConnectionError" in report.degraded_reason
        assert report.quality.compliance == 80.0

    async def test_review_scores_used(self, patterns, test_settings):
        llm = FakeReviewLLM(result={"technical_accuracy": 90, "compliance_score": 95})
        service = DocumentQualityService(patterns, llm=llm, settings=test_settings)
        report = await service.analyze(DOCUMENT, document_type="Procedure")
        assert report.degraded is False
        assert report.quality.compliance == 95.0

    async def test_structured_output_object_accepted(self, patterns, test_settings):
        llm = FakeReviewLLM(result=TechnicalReviewOutput(compliance_score=70))
        service = DocumentQualityService(patterns, llm=llm, settings=test_settings)
        report = await service.analyze(DOCUMENT)
        assert report.quality.compliance == 70.0

    @pytest.mark.parametrize("text", [None, "", "  \n "])
    async def test_empty_document_rejected(self, patterns, test_settings, text):
        with pytest.raises(EmptyDocumentError):
            await DocumentQualityService(patterns, settings=test_settings).analyze(text)
