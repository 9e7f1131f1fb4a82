# tests/test_personality_alignment.py

"""
Personality Alignment Scorer Tests
"""

from decimal import Decimal

import pytest

from readiness_engine.scoring.personality_alignment import PersonalityAlignmentScorer

from tests.factories import make_personality


@pytest.fixture
def scorer(test_settings):
    return PersonalityAlignmentScorer(test_settings)


class TestRoleLookup:
    """Exact, case-sensitive role matching."""

    def test_unknown_role_gets_default(self, scorer, personality):
        result = scorer.calculate(personality, "Unknown Role")
        assert result.score == Decimal("75")
        assert result.role_matched is False
        assert result.trait_alignment == {}

    def test_role_match_is_case_sensitive(self, scorer, personality):
        assert scorer.calculate(personality, "manager").score == Decimal("75")
        assert scorer.calculate(personality, "Manager").role_matched is True

    def test_empty_role_gets_default(self, scorer, personality):
        assert scorer.calculate(personality, "").score == Decimal("75")

    @pytest.mark.parametrize("role", list(PersonalityAlignmentScorer.ROLE_PROFILES))
    def test_every_profile_weights_sum_to_one(self, role):
        weights = PersonalityAlignmentScorer.ROLE_PROFILES[role].trait_weights
        assert sum(weights.values()) == Decimal("1.00")

    def test_is_known_role(self, scorer):
        assert scorer.is_known_role("Designer")
        assert not scorer.is_known_role("Chief Vibes Officer")


class TestAlignmentScore:

    def test_senior_manager_fit_scores_above_80(self, scorer, personality):
        result = scorer.calculate(personality, "Senior Manager")
        assert result.score > Decimal("80")

    def test_in_range_profile_with_all_bonuses_caps_at_100(self, scorer, personality):
        result = scorer.calculate(personality, "Manager")
        assert result.base_score == Decimal("100.00")
        assert result.bonus == Decimal("15.0")
        assert result.score == Decimal("100.00")

    def test_out_of_range_trait_penalized(self, scorer):
        # Openness 40 sits 20 below the Manager minimum: 100 - 1.5 × 20 = 70
        profile = make_personality(
            openness=40, leadership_potential=50, change_adaptability=50, stress_resilience=50,
        )
        result = scorer.calculate(profile, "Manager")
        assert result.trait_alignment["openness"] == Decimal("70.0")
        # 0.20 × 70 + 0.80 × 100
        assert result.score == Decimal("94.00")

    def test_distance_penalty_floors_at_zero(self, scorer):
        profile = make_personality(extraversion=0, leadership_potential=0,
                                   change_adaptability=0, stress_resilience=0)
        result = scorer.calculate(profile, "Sales Representative")
        # 75 below the minimum → max(0, 100 - 112.5)
        assert result.trait_alignment["extraversion"] == Decimal("0")
        assert Decimal("0") <= result.score <= Decimal("100")

    def test_high_extraversion_penalized_for_engineer(self, scorer):
        profile = make_personality(
            extraversion=95, leadership_potential=50, change_adaptability=50, stress_resilience=50,
        )
        result = scorer.calculate(profile, "Software Engineer")
        # 15 above the maximum of 80: 77.5 at weight 0.10
        assert result.score == Decimal("97.75")


class TestDerivedBonuses:

    def test_leadership_bonus_raises_score(self, scorer):
        low = make_personality(openness=40, leadership_potential=50,
                               change_adaptability=50, stress_resilience=50)
        high = make_personality(openness=40, leadership_potential=75,
                                change_adaptability=50, stress_resilience=50)
        assert scorer.calculate(low, "Manager").score == Decimal("94.00")
        assert scorer.calculate(high, "Manager").score == Decimal("99.00")

    def test_threshold_is_strict(self, scorer):
        at = make_personality(openness=40, leadership_potential=70,
                              change_adaptability=50, stress_resilience=50)
        assert scorer.calculate(at, "Manager").bonus == Decimal("0")

    def test_emphasis_scales_bonus(self, scorer):
        # Individual contributors weigh leadership at half emphasis
        profile = make_personality(leadership_potential=90, change_adaptability=50, stress_resilience=50)
        assert scorer.calculate(profile, "Analyst").bonus == Decimal("2.50")

    def test_bonus_total_capped(self, test_settings):
        settings = test_settings.model_copy(update={"DERIVED_TRAIT_BONUS_CAP": 8.0})
        scorer = PersonalityAlignmentScorer(settings)
        profile = make_personality(openness=20)
        assert scorer.calculate(profile, "Manager").bonus == Decimal("8.0")


class TestInterpret:

    @pytest.mark.parametrize("score,prefix", [
        (92, "Strong fit"),
        (75, "Good fit"),
        (60, "Partial fit"),
        (30, "Weak fit"),
    ])
    def test_interpretation_bands(self, scorer, score, prefix):
        assert scorer.interpret(score).startswith(prefix)
