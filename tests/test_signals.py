"""
Tests for signal detection
==========================
Keyword signals, structured flags and the keyword category suggestion.
"""

from app.schemas.change_request import StructuredFields
from app.schemas.classification import SuggestionSource
from app.services.change_review.nodes.signals import (
    detect_change_signals,
    keyword_suggestion,
)


class TestDetectSignals:
    """Tests for detect_change_signals."""

    def test_emergency_diesel_bypass(self, patterns):
        """Emergency diesel generator work is safety significant, not critical."""
        signals = detect_change_signals(
            "Temporary bypass of emergency diesel generator for 48 hours",
            None,
            patterns,
        )
        assert signals["safety_significant"] is True
        assert signals["temporary"] is True
        assert signals["critical_safety"] is False

    def test_critical_safety_keywords(self, patterns):
        signals = detect_change_signals(
            "Replace Class 1E relay in reactor protection cabinet", None, patterns
        )
        assert signals["critical_safety"] is True
        assert signals["safety_significant"] is True

    def test_whole_word_matching(self, patterns):
        """Substrings of longer words do not trigger signals."""
        signals = detect_change_signals(
            "Update the newsletter about emergencies", None, patterns
        )
        assert signals["new_installation"] is False
        assert signals["safety_significant"] is False

    def test_digital_environmental_seismic(self, patterns):
        signals = detect_change_signals(
            "Install PLC to monitor stack effluent; anchor for seismic loads",
            None,
            patterns,
        )
        assert signals["digital_upgrade"] is True
        assert signals["environmentally_significant"] is True
        assert signals["seismically_significant"] is True

    def test_structured_flags_set_signals(self, patterns):
        structured = StructuredFields(is_temporary=True, is_identical_replacement=True)
        signals = detect_change_signals("Swap the gauge", structured, patterns)
        assert signals["temporary"] is True
        assert signals["identical_replacement"] is True

    def test_structured_prose_is_scanned(self, patterns):
        structured = StructuredFields(problem_statement="Containment isolation valve leaks")
        signals = detect_change_signals("Repair valve", structured, patterns)
        assert signals["critical_safety"] is True

    def test_every_library_signal_reported(self, patterns):
        signals = detect_change_signals("", None, patterns)
        assert set(signals) == {rule.name for rule in patterns.signals}
        assert not any(signals.values())


class TestKeywordSuggestion:
    """Tests for the keyword-only category suggestion."""

    def _suggest(self, patterns, text):
        signals = detect_change_signals(text, None, patterns)
        return keyword_suggestion(signals, patterns, 0.5)

    def test_temporary_beats_replacement(self, patterns):
        assert self._suggest(patterns, "Temporary replacement of pump").category == 4

    def test_identical_beats_replacement(self, patterns):
        assert self._suggest(patterns, "Identical replacement of pump").category == 5

    def test_replacement_beats_new(self, patterns):
        assert self._suggest(patterns, "Replace pump with new model").category == 3

    def test_new_installation(self, patterns):
        assert self._suggest(patterns, "Install eyewash station").category == 1

    def test_default_is_modification(self, patterns):
        suggestion = self._suggest(patterns, "Repaint handrail")
        assert suggestion.category == 2
        assert suggestion.confidence == 0.5
        assert suggestion.source is SuggestionSource.KEYWORD_FALLBACK
