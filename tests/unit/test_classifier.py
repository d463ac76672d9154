"""Tests for the risk classifier."""

import pytest

from metascan.core.classifier import classify, explain, level_for
from metascan.models.enums import ConfidenceLevel, RiskLevel
from metascan.scoring_config import DEFAULT_CONFIG, ThresholdTable

THRESHOLDS = DEFAULT_CONFIG.thresholds


class TestLevels:
    @pytest.mark.parametrize(
        "score,level",
        [(0, 0), (3, 0), (4, 1), (7, 1), (8, 2), (12, 2), (13, 3), (40, 3)],
    )
    def test_boundaries_resolve_low(self, score, level):
        assert level_for(score, THRESHOLDS) == level

    def test_custom_thresholds(self):
        legacy = ThresholdTable(low_max=1, moderate_max=3, high_max=6)
        assert level_for(2, legacy) == 1
        assert level_for(7, legacy) == 3

    def test_risk_levels_ordered(self):
        levels = [classify(s, THRESHOLDS).risk_level for s in (0, 5, 10, 20)]
        assert levels == [RiskLevel.LOW, RiskLevel.MODERATE, RiskLevel.HIGH, RiskLevel.VERY_HIGH]
        assert [r.ordinal for r in levels] == [0, 1, 2, 3]


class TestConfidence:
    def test_very_strong(self):
        result = classify(20, THRESHOLDS)
        assert result.confidence_level is ConfidenceLevel.VERY_HIGH
        assert result.classification == "Very Strong (probable fraud)"

    def test_transport_moderate(self):
        assert classify(5, THRESHOLDS, is_digital_transport=True).confidence_level is ConfidenceLevel.MODERATE
        assert classify(5, THRESHOLDS).confidence_level is ConfidenceLevel.HIGH

    def test_recommendation_present(self):
        for score in (0, 5, 10, 20):
            assert classify(score, THRESHOLDS).recommendation


class TestExplain:
    def test_plain(self):
        text = explain(0, 0, 0, False, 0)
        assert text.startswith("Total score: 0 points.")
        assert "original capture" in text

    def test_capped(self):
        text = explain(7, 13, 1, True, 1)
        assert "score capped at 7" in text
        assert "1 co-occurrence pattern(s)" in text

    def test_transport_without_cap(self):
        assert "no cap needed" in explain(4, 4, 1, True, 0)
