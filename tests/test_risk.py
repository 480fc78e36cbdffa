"""
Tests for risk assessment
=========================
Safety classification mapping, structured flags and the overall maximum.
"""

import itertools

import pytest

from app.schemas.change_request import StructuredFields
from app.schemas.risk import RiskLevel, RiskProfile
from app.services.change_review.nodes.risk import assess

ORDER = [RiskLevel.UNSET, RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH]


class TestSafetyClassification:
    """Tests for the safety dimension."""

    @pytest.mark.parametrize(
        "label, expected",
        [
            ("SAFETY-CLASS", RiskLevel.HIGH),
            ("sc", RiskLevel.HIGH),
            ("Safety-Significant", RiskLevel.MEDIUM),
            ("SS", RiskLevel.MEDIUM),
            ("GS", RiskLevel.LOW),
            ("general service", RiskLevel.LOW),
        ],
    )
    def test_mapping(self, patterns, label, expected):
        assert assess(patterns, label).safety is expected

    @pytest.mark.parametrize("label", [None, "", "   "])
    def test_missing_classification_is_unset(self, patterns, label):
        profile = assess(patterns, label)
        assert profile.safety is RiskLevel.UNSET
        assert profile.overall is RiskLevel.LOW
        assert profile.risk_factors == []


class TestStructuredDimensions:
    """Tests for environmental and operational dimensions."""

    def test_physical_change_is_environmental(self, patterns):
        profile = assess(patterns, None, StructuredFields(is_physical_change=True))
        assert profile.environmental is RiskLevel.MEDIUM
        assert profile.operational is RiskLevel.UNSET

    @pytest.mark.parametrize(
        "flags",
        [{"requires_new_procedures": True}, {"requires_software_change": True}],
    )
    def test_procedures_or_software_is_operational(self, patterns, flags):
        profile = assess(patterns, None, StructuredFields(**flags))
        assert profile.operational is RiskLevel.MEDIUM

    def test_factors_pair_with_mitigations(self, patterns):
        structured = StructuredFields(
            is_physical_change=True, requires_software_change=True
        )
        profile = assess(patterns, "SC", structured)
        assert profile.risk_factors == [
            "Safety-class system modification",
            "Physical changes may have environmental impacts",
            "Operational procedures or software changes required",
        ]
        assert len(profile.mitigations) == len(profile.risk_factors)
        assert profile.overall is RiskLevel.HIGH


class TestOverallRisk:
    """Overall risk is the most severe dimension."""

    def test_overall_is_maximum(self):
        for safety, environmental, operational in itertools.product(ORDER, repeat=3):
            profile = RiskProfile(
                safety=safety, environmental=environmental, operational=operational
            )
            expected = max(
                (safety, environmental, operational), key=ORDER.index
            )
            if expected is RiskLevel.UNSET:
                expected = RiskLevel.LOW
            assert profile.overall is expected

    def test_overall_serialized(self):
        dumped = RiskProfile(safety=RiskLevel.MEDIUM).model_dump(by_alias=True)
        assert dumped["overall"] == RiskLevel.MEDIUM
        assert "riskFactors" in dumped
        assert "riskPriority" not in dumped
