# tests/test_mock_data.py

"""
Mock population generator and demo CLI tests
"""

import json

import pytest

from readiness_engine.mock_data import DEPARTMENT_ROLES, TREND_MONTHS, MockDataGenerator
from readiness_engine.scripts.score_demo import format_summary, main, run

from tests.factories import AS_OF


@pytest.fixture
def generator():
    return MockDataGenerator()


class TestMockDataGenerator:

    def test_same_seed_same_population(self, generator):
        first = generator.generate_population(20, seed=7, as_of=AS_OF)
        second = generator.generate_population(20, seed=7, as_of=AS_OF)
        assert [u.model_dump() for u in first.users] == [u.model_dump() for u in second.users]

    def test_different_seed_differs(self, generator):
        first = generator.generate_population(20, seed=1, as_of=AS_OF)
        second = generator.generate_population(20, seed=2, as_of=AS_OF)
        assert [u.model_dump() for u in first.users] != [u.model_dump() for u in second.users]

    def test_partial_coverage(self, generator):
        population = generator.generate_population(300, seed=11, as_of=AS_OF)
        users = population.users
        with_personality = sum(1 for u in users if u.personality is not None)
        with_telemetry = sum(1 for u in users if u.cognitive_telemetry is not None)
        with_board = sum(1 for u in users if u.goal_artifact is not None)
        assert 0.55 * 300 < with_personality < 0.85 * 300
        assert 0.70 * 300 < with_telemetry < 0.97 * 300
        assert 0.45 * 300 < with_board < 0.75 * 300

    def test_departments_and_head_counts(self, generator):
        population = generator.generate_population(12, seed=3, as_of=AS_OF)
        assert [d.department_id for d in population.departments] == list(DEPARTMENT_ROLES)
        assert sum(d.head_count for d in population.departments) == 12
        assert population.organization.organization_id == "demo-org"

    def test_organization_monthly_trend(self, generator):
        trend = generator.generate_population(5, seed=3, as_of=AS_OF).organization.monthly_trend
        assert len(trend) == TREND_MONTHS
        assert all(0 <= v <= 100 for v in trend)

    def test_negative_count_rejected(self, generator):
        with pytest.raises(ValueError):
            generator.generate_population(-1)

    def test_mock_population_scores(self, generator, aggregator):
        population = generator.generate_population(40, seed=5, as_of=AS_OF)
        result = aggregator.calculate_population(
            population.users, departments=population.departments,
            organization=population.organization, as_of=AS_OF,
        )
        assert result.failures == []
        assert len(result.results) == 40
        for person in result.results:
            assert 0 <= person.overall_score <= 100
            assert person.data_completeness in (0.25, 0.5, 0.75, 1.0)
            assert 0 < person.predictive_confidence <= 100
            assert person.insights and person.recommendations


class TestScoreDemoScript:

    def test_run_and_summary(self):
        result = run(users=15, seed=9)
        summary = format_summary(result)
        assert "Demo Organization" in summary
        assert "People scored:       15 (0 failed)" in summary
        assert "Trend:" in summary

    def test_main_writes_output(self, tmp_path, capsys):
        output = tmp_path / "population.json"
        assert main(["--users", "5", "--seed", "1", "--workers", "2", "--output", str(output)]) == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert len(data["results"]) == 5
        assert "Overall readiness" in capsys.readouterr().out

    def test_negative_users_rejected(self):
        with pytest.raises(SystemExit):
            main(["--users", "-3"])
