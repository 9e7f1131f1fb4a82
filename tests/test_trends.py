# tests/test_trends.py

"""
Trend and Projection Tests
"""

from decimal import Decimal

import pytest

from readiness_engine.models.enumerations import TrendDirection
from readiness_engine.scoring.trends import calculate_trend, project_readiness


class TestCalculateTrend:

    @pytest.mark.parametrize("history,expected", [
        ([70, 71, 72, 76, 78, 80], TrendDirection.IMPROVING),
        ([80, 78, 76, 72, 71, 70], TrendDirection.DECLINING),
        ([70, 70, 70, 71, 71, 71], TrendDirection.STABLE),
        ([60, 60, 60, 62, 62, 62], TrendDirection.STABLE),
    ])
    def test_direction(self, test_settings, history, expected):
        assert calculate_trend(history, test_settings) == expected

    def test_only_recent_six_months_compared(self, test_settings):
        history = [10, 10, 10, 70, 70, 70, 70, 70, 70]
        assert calculate_trend(history, test_settings) == TrendDirection.STABLE

    def test_partial_earlier_window(self, test_settings):
        assert calculate_trend([60, 70, 72, 74], test_settings) == TrendDirection.IMPROVING

    @pytest.mark.parametrize("history", [[], [70], [70, 90], [70, 80, 90]])
    def test_short_history_is_stable(self, test_settings, history):
        assert calculate_trend(history, test_settings) == TrendDirection.STABLE


class TestProjectReadiness:

    def test_projects_recent_slope(self, test_settings):
        assert project_readiness(80, [70, 72, 74], test_settings) == Decimal("92.00")

    def test_uses_last_three_months(self, test_settings):
        assert project_readiness(60, [90, 10, 60, 60, 60], test_settings) == Decimal("60.00")

    def test_short_history_returns_current(self, test_settings):
        assert project_readiness(81.456, [70, 75], test_settings) == Decimal("81.46")

    def test_projection_clamped(self, test_settings):
        assert project_readiness(95, [60, 70, 80], test_settings) == Decimal("100.00")
        assert project_readiness(5, [80, 70, 60], test_settings) == Decimal("0.00")
