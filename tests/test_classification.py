"""
Tests for category classification
=================================
Token precedence, confidence handling and fallback explanations.
"""

import pytest

from app.schemas.classification import CategorySuggestion, SuggestionSource
from app.services.change_review.nodes.classification import (
    GENERIC_KEY_FACTOR,
    UNPARSEABLE_REASONING,
    classify,
    find_category_token,
    parse_confidence,
    parse_key_factors,
)


def similarity(category, confidence):
    return CategorySuggestion(
        category=category, confidence=confidence, source=SuggestionSource.SIMILARITY
    )


REASONING = """Category: Category III
MT Required: Yes
Confidence: 0.9
Key Factors:
- Different manufacturer
- Changed mounting footprint
Reasoning: The replacement differs in form and fit."""


class TestCategoryTokens:
    """Tests for explicit category tokens."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Category V", 5),
            ("this is a Type IV change", 4),
            ("Category: III", 3),
            ("category ii", 2),
            ("Category I (New Design)", 1),
            ("Category 5", 5),
        ],
    )
    def test_tokens(self, patterns, text, expected):
        assert find_category_token(text, patterns) == expected

    def test_higher_roman_numeral_checked_first(self, patterns):
        """Category V is found even when Category I also appears."""
        assert find_category_token("Not Category I; this is Category V", patterns) == 5

    def test_partial_tokens_ignored(self, patterns):
        assert find_category_token("Category Iron and typeset", patterns) is None

    def test_seismic_category_is_a_structure_class(self, patterns):
        """Seismic Category I names a structure class, not a design category."""
        assert find_category_token("Anchor to Seismic Category I wall", patterns) is None
        text = "Seismic Category I piping is affected; this is a Category IV change."
        assert find_category_token(text, patterns) == 4


class TestConfidenceParsing:
    """Tests for reasoning-derived confidence."""

    def test_decimal(self, patterns):
        assert parse_confidence("Confidence: 0.85", patterns) == pytest.approx(0.85)

    def test_percentage(self, patterns):
        assert parse_confidence("about 85% confidence", patterns) == pytest.approx(0.85)

    def test_out_of_range_clamped(self, patterns):
        assert parse_confidence("confidence level: 150", patterns) == 1.0

    def test_absent(self, patterns):
        assert parse_confidence("no number here", patterns) == 0.0

    def test_key_factors(self):
        assert parse_key_factors(REASONING) == [
            "Different manufacturer",
            "Changed mounting footprint",
        ]


class TestClassify:
    """Tests for classify precedence."""

    def test_reasoning_token_wins(self, patterns):
        result = classify(patterns, {}, similarity(2, 0.6), REASONING)
        assert result.category == 3
        assert result.confidence == pytest.approx(0.9)
        assert result.agrees_with_suggestion is False
        assert result.source is SuggestionSource.EXTERNAL_REASONING
        assert result.reasoning == "The replacement differs in form and fit."
        assert result.key_factors[0] == "Different manufacturer"

    def test_confidence_is_maximum(self, patterns):
        result = classify(patterns, {}, similarity(3, 0.95), "Category III, confidence: 0.4")
        assert result.confidence == pytest.approx(0.95)
        assert result.agrees_with_suggestion is True

    def test_unparseable_reasoning_uses_suggestion(self, patterns):
        result = classify(patterns, {}, similarity(4, 0.7), "Looks routine to me.")
        assert result.category == 4
        assert result.confidence == pytest.approx(0.7)
        assert result.reasoning == UNPARSEABLE_REASONING
        assert result.agrees_with_suggestion is True

    def test_no_inputs_defaults_to_modification(self, patterns):
        result = classify(patterns, {}, None, None, neutral_confidence=0.5)
        assert result.category == 2
        assert result.confidence == 0.5
        assert result.key_factors == [GENERIC_KEY_FACTOR]

    def test_signal_descriptions_become_key_factors(self, patterns):
        result = classify(patterns, {"temporary": True}, similarity(4, 0.8))
        assert result.key_factors == ["Temporary modification."]

    @pytest.mark.parametrize("confidence", [0.0, 0.3, 1.0])
    def test_confidence_bounds(self, patterns, confidence):
        result = classify(patterns, {}, similarity(1, confidence), "Category I confidence: 99%")
        assert 0.0 <= result.confidence <= 1.0

    def test_seismic_structure_mention_keeps_suggestion(self, patterns):
        reasoning = (
            "This temporary bypass touches Seismic Category I structures; "
            "anchorage must be checked."
        )
        result = classify(patterns, {}, suggestion=similarity(4, 0.7), reasoning=reasoning)
        assert result.category == 4
        assert result.source is SuggestionSource.SIMILARITY
