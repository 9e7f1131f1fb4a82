# tests/test_motivational_alignment.py

"""
Motivational Alignment Scorer Tests
"""

from decimal import Decimal

import pytest

from readiness_engine.scoring.motivational_alignment import MotivationalAlignmentScorer

from tests.factories import AS_OF, days_ago, goal_artifact_data, make_goal_artifact


@pytest.fixture
def scorer(test_settings):
    return MotivationalAlignmentScorer(test_settings)


def _updated(days: int):
    return make_goal_artifact(
        created_date=days_ago(max(days, 200)),
        last_updated_date=days_ago(days),
    )


class TestGroupScores:

    def test_group_breakdown(self, scorer, goal_artifact):
        result = scorer.calculate(goal_artifact, AS_OF)
        assert result.goal_score == Decimal("75.00")
        assert result.motivation_score == Decimal("76.00")
        assert result.engagement_score == Decimal("75.00")
        assert result.base_score == Decimal("75.35")

    def test_recent_update_adds_full_bonus(self, scorer, goal_artifact):
        result = scorer.calculate(goal_artifact, AS_OF)
        assert result.recency_bonus == Decimal("5")
        assert result.score == Decimal("80.35")

    def test_goal_volume_caps_at_100(self, scorer):
        alignment = goal_artifact_data()["goal_alignment"]
        alignment.update(personal_goals_count=10, career_goals_count=10, learning_goals_count=10)
        result = scorer.calculate(make_goal_artifact(goal_alignment=alignment), AS_OF)
        # (80 + 70 + 70 + 100) / 4
        assert result.goal_score == Decimal("80.00")

    def test_retention_risk_lowers_engagement(self, scorer):
        predictors = goal_artifact_data()["engagement_predictors"]
        predictors["retention_risk"] = 80
        risky = scorer.calculate(make_goal_artifact(engagement_predictors=predictors), AS_OF)
        baseline = scorer.calculate(make_goal_artifact(), AS_OF)
        assert risky.engagement_score < baseline.engagement_score

    def test_leadership_aspiration_does_not_affect_score(self, scorer):
        predictors = goal_artifact_data()["engagement_predictors"]
        predictors["leadership_aspiration"] = 5
        low = scorer.calculate(make_goal_artifact(engagement_predictors=predictors), AS_OF)
        baseline = scorer.calculate(make_goal_artifact(), AS_OF)
        assert low.engagement_score == baseline.engagement_score
        assert low.score == baseline.score


class TestRecencyBonus:

    def test_five_days_at_least_fifteen_plus(self, scorer):
        five = scorer.calculate(_updated(5), AS_OF).score
        for days in (15, 31, 60, 89, 90, 365):
            assert five >= scorer.calculate(_updated(days), AS_OF).score

    def test_bonus_fades_linearly_after_window(self, scorer):
        assert scorer.calculate(_updated(30), AS_OF).recency_bonus == Decimal("5")
        assert scorer.calculate(_updated(60), AS_OF).recency_bonus == Decimal("2.5")
        assert scorer.calculate(_updated(90), AS_OF).recency_bonus == Decimal("0")

    def test_stale_board_scores_base(self, scorer):
        result = scorer.calculate(_updated(400), AS_OF)
        assert result.score == result.base_score
        assert result.days_since_update == 400

    def test_bonus_never_exceeds_100(self, scorer):
        top = {k: 100 for k in goal_artifact_data()["motivation_profile"]}
        alignment = {
            "personal_goals_count": 5, "career_goals_count": 5, "learning_goals_count": 5,
            "alignment_with_org_vision": 100, "goal_specificity": 100, "timeline_realism": 100,
        }
        predictors = {
            "likely_engagement_level": 100, "retention_risk": 0, "promotion_readiness": 100,
            "learning_velocity": 100, "leadership_aspiration": 100,
        }
        profile = make_goal_artifact(
            motivation_profile=top, goal_alignment=alignment, engagement_predictors=predictors,
        )
        result = scorer.calculate(profile, AS_OF)
        assert result.base_score == Decimal("100.00")
        assert result.score == Decimal("100.00")
