# tests/test_property_based.py
"""
Property-Based Tests

Hypothesis properties over the component scorers and the aggregator:
  - bounds on every score
  - monotonicity in recency, derived traits and performance rating
  - completeness and confidence invariants for any subset of sources
"""

from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from readiness_engine.config import COMPONENT_KEYS, Settings
from readiness_engine.models.learning import PsychometricUserData
from readiness_engine.scoring.behavioral_predictors import BehavioralPredictorScorer
from readiness_engine.scoring.cognitive_readiness import CognitiveReadinessScorer
from readiness_engine.scoring.motivational_alignment import MotivationalAlignmentScorer
from readiness_engine.scoring.personality_alignment import PersonalityAlignmentScorer
from readiness_engine.scoring.readiness_aggregator import ReadinessAggregator
from readiness_engine.scoring.recency import RecencyCurve
from readiness_engine.scoring.utils import blend_present

from tests.factories import (
    AS_OF,
    days_ago,
    make_goal_artifact,
    make_learning_record,
    make_personality,
    user_data,
    with_last_played,
)

_SETTINGS = Settings(_env_file=None)

# ---------------------------------------------------------------------------
# Shared strategies
# ---------------------------------------------------------------------------

trait_st = st.integers(min_value=0, max_value=100)
days_st = st.integers(min_value=0, max_value=1000)
rating_st = st.floats(min_value=0.0, max_value=5.0, allow_nan=False, allow_infinity=False)
component_st = st.one_of(
    st.none(),
    st.floats(min_value=0.0, max_value=100.0, allow_nan=False, allow_infinity=False),
)


@st.composite
def personality_st(draw):
    """Draw a full Big Five + derived profile."""
    return make_personality(
        openness=draw(trait_st),
        conscientiousness=draw(trait_st),
        extraversion=draw(trait_st),
        agreeableness=draw(trait_st),
        neuroticism=draw(trait_st),
        leadership_potential=draw(trait_st),
        change_adaptability=draw(trait_st),
        stress_resilience=draw(trait_st),
    )


@st.composite
def source_subset_st(draw):
    """Draw which optional profiles are present."""
    return {
        "personality": draw(st.booleans()),
        "cognitive": draw(st.booleans()),
        "goal_artifact": draw(st.booleans()),
    }


def _goal_artifact_updated(days: int):
    return make_goal_artifact(
        created_date=days_ago(max(days, 1000)),
        last_updated_date=days_ago(days),
    )


# ---------------------------------------------------------------------------
# Personality alignment
# ---------------------------------------------------------------------------

class TestPersonalityProperties:
    scorer = PersonalityAlignmentScorer(_SETTINGS)

    @given(profile=personality_st(), role=st.sampled_from(sorted(PersonalityAlignmentScorer.ROLE_PROFILES)))
    @settings(max_examples=300)
    def test_score_bounded(self, profile, role):
        score = self.scorer.calculate(profile, role).score
        assert Decimal("0") <= score <= Decimal("100")

    @given(profile=personality_st(), role=st.text(min_size=1, max_size=30))
    @settings(max_examples=200)
    def test_unknown_role_gets_default(self, profile, role):
        if role in PersonalityAlignmentScorer.ROLE_PROFILES:
            return
        result = self.scorer.calculate(profile, role)
        assert result.score == Decimal("75.00")
        assert result.role_matched is False

    @given(
        profile=personality_st(),
        role=st.sampled_from(sorted(PersonalityAlignmentScorer.ROLE_PROFILES)),
        trait=st.sampled_from(["leadership_potential", "change_adaptability", "stress_resilience"]),
    )
    @settings(max_examples=300)
    def test_higher_derived_trait_never_lowers_score(self, profile, role, trait):
        raised = profile.model_copy(update={trait: 100})
        assert self.scorer.calculate(raised, role).score >= self.scorer.calculate(profile, role).score


# ---------------------------------------------------------------------------
# Shared math
# ---------------------------------------------------------------------------

class TestBlendAndRecencyProperties:

    @given(a=component_st, b=component_st, c=component_st, d=component_st)
    @settings(max_examples=500)
    def test_blend_within_present_range(self, a, b, c, d):
        values = dict(zip(COMPONENT_KEYS, (a, b, c, d)))
        present = [Decimal(str(v)) for v in values.values() if v is not None]
        blended = blend_present(values, _SETTINGS.component_weights)
        if not present:
            assert blended == Decimal("0")
        else:
            assert min(present) - Decimal("0.0001") <= blended <= max(present) + Decimal("0.0001")

    @given(
        d1=days_st,
        d2=days_st,
        shape=st.sampled_from(["exponential", "linear"]),
    )
    @settings(max_examples=500)
    def test_recency_monotone_and_bounded(self, d1, d2, shape):
        curve = RecencyCurve.build(window_days=7, peak=1.0, floor=0.75, span_days=30, shape=shape)
        early, late = sorted((d1, d2))
        assert curve.value(early) >= curve.value(late)
        assert curve.floor <= curve.value(late) <= curve.peak


# ---------------------------------------------------------------------------
# Recency-driven components
# ---------------------------------------------------------------------------

class TestRecencyDrivenScores:
    cognitive = CognitiveReadinessScorer(_SETTINGS)
    motivational = MotivationalAlignmentScorer(_SETTINGS)

    @given(d1=days_st, d2=days_st)
    @settings(max_examples=200)
    def test_cognitive_staler_never_scores_higher(self, d1, d2):
        early, late = sorted((d1, d2))
        fresh = self.cognitive.calculate(with_last_played(early), AS_OF).score
        stale = self.cognitive.calculate(with_last_played(late), AS_OF).score
        assert fresh >= stale
        assert Decimal("0") <= stale <= Decimal("100")

    @given(d1=days_st, d2=days_st)
    @settings(max_examples=200)
    def test_motivational_staler_never_scores_higher(self, d1, d2):
        early, late = sorted((d1, d2))
        fresh = self.motivational.calculate(_goal_artifact_updated(early), AS_OF).score
        stale = self.motivational.calculate(_goal_artifact_updated(late), AS_OF).score
        assert fresh >= stale
        assert Decimal("0") <= stale <= Decimal("100")


# ---------------------------------------------------------------------------
# Behavioral predictors
# ---------------------------------------------------------------------------

class TestBehavioralProperties:
    scorer = BehavioralPredictorScorer(_SETTINGS)

    @given(r1=rating_st, r2=rating_st, with_personality=st.booleans())
    @settings(max_examples=300)
    def test_higher_rating_never_lowers_score(self, r1, r2, with_personality):
        low, high = sorted((r1, r2))
        personality = make_personality() if with_personality else None
        low_score = self.scorer.calculate(make_learning_record(performance_rating=low), personality).score
        high_score = self.scorer.calculate(make_learning_record(performance_rating=high), personality).score
        assert high_score >= low_score
        assert Decimal("0") <= low_score <= Decimal("100")


# ---------------------------------------------------------------------------
# Aggregated result
# ---------------------------------------------------------------------------

class TestAggregateProperties:
    aggregator = ReadinessAggregator(_SETTINGS)

    @given(sources=source_subset_st(), rating=rating_st)
    @settings(max_examples=100)
    def test_result_invariants(self, sources, rating):
        user = PsychometricUserData.model_validate(user_data(performance_rating=rating, **sources))
        result = self.aggregator.calculate_person(user, AS_OF)

        expected_completeness = (1 + sum(sources.values())) / 4
        assert result.data_completeness == expected_completeness
        assert 0 <= result.overall_score <= 100
        assert 0 <= result.learning_indicators.individual_competency <= 100
        assert 0 < result.predictive_confidence <= 100
        assert result.confidence_interval.ci_lower <= result.overall_score <= result.confidence_interval.ci_upper
        assert result.insights
        assert result.recommendations
        assert len(result.psychometric_components.computed()) == 1 + sum(sources.values())
