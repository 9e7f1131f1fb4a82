# readiness_engine/models/profiles.py
"""
Enrichment profiles produced by external collaborators.

- PersonalityProfile         — Big Five assessment capture
- CognitiveTelemetryProfile  — gamified cognitive/behavioral telemetry
- GoalArtifactProfile        — vision board goal artifacts

All score fields are on [0, 100].
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from readiness_engine.models.enumerations import (
    ComplexityPreference,
    LearningStyle,
    WorkStyle,
)
from readiness_engine.scoring.utils import as_utc


def _score(description: str):
    return Field(..., ge=0, le=100, description=description)


# ─── Personality (Big Five) ───

class PersonalityProfile(BaseModel):
    """
    Big Five personality profile.

    A new assessment date creates a new profile, so instances are frozen.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(..., min_length=1)
    assessment_date: datetime = Field(..., description="When the assessment was taken")

    openness: float = _score("Openness to experience")
    conscientiousness: float = _score("Conscientiousness")
    extraversion: float = _score("Extraversion")
    agreeableness: float = _score("Agreeableness")
    neuroticism: float = _score("Neuroticism (lower = more emotionally stable)")

    learning_style: LearningStyle
    work_style: WorkStyle

    leadership_potential: float = _score("Derived leadership potential")
    change_adaptability: float = _score("Derived change adaptability")
    stress_resilience: float = _score("Derived stress resilience")


# ─── Gamified telemetry ───

class GameSessionData(BaseModel):
    total_sessions: int = Field(..., ge=0)
    average_session_duration: float = Field(..., ge=0, description="Minutes")
    completion_rate: float = _score("Percentage of started games completed")
    last_played_date: datetime


class CognitiveMetrics(BaseModel):
    problem_solving_speed: float = _score("Faster = higher")
    decision_quality: float = _score("Accuracy under pressure")
    adaptability_index: float = _score("Adaptation to new challenges")
    persistence_score: float = _score("Continuation despite failures")
    collaboration_effectiveness: float = _score("Team game performance")


class BehavioralPatterns(BaseModel):
    risk_tolerance: float = _score("Willingness to take calculated risks")
    competitiveness_drive: float = _score("Motivation to excel")
    help_seeking_behavior: float = _score("Willingness to ask for help")
    mentorship_inclination: float = _score("Tendency to help others")
    innovation_mindset: float = _score("Creative problem-solving")


class LearningPreferences(BaseModel):
    preferred_complexity: ComplexityPreference
    feedback_sensitivity: float = _score("Response to feedback")
    autonomy_preference: float = _score("Preference for self-direction")
    social_learning_preference: float = _score("Preference for group learning")


class CognitiveTelemetryProfile(BaseModel):
    """Cognitive and behavioral signals inferred from gameplay."""

    user_id: str = Field(..., min_length=1)
    game_session_data: GameSessionData
    cognitive_metrics: CognitiveMetrics
    behavioral_patterns: BehavioralPatterns
    learning_preferences: LearningPreferences


# ─── Vision board ───

class GoalAlignment(BaseModel):
    personal_goals_count: int = Field(..., ge=0)
    career_goals_count: int = Field(..., ge=0)
    learning_goals_count: int = Field(..., ge=0)
    alignment_with_org_vision: float = _score("Similarity to org objectives")
    goal_specificity: float = _score("How specific/measurable goals are")
    timeline_realism: float = _score("Realistic timeline assessment")

    @property
    def total_goals(self) -> int:
        return self.personal_goals_count + self.career_goals_count + self.learning_goals_count


class MotivationProfile(BaseModel):
    intrinsic_motivation: float = _score("Internal drive indicators")
    extrinsic_motivation: float = _score("External reward indicators")
    growth_mindset: float = _score("Focus on development vs. achievement")
    purpose_clarity: float = _score("Clarity of personal purpose")
    ambition_level: float = _score("Scope and scale of aspirations")


class EngagementPredictors(BaseModel):
    likely_engagement_level: float = _score("Predicted engagement")
    retention_risk: float = _score("0 = low risk, 100 = high risk")
    promotion_readiness: float = _score("Readiness for advancement")
    learning_velocity: float = _score("Predicted learning speed")
    leadership_aspiration: float = _score("Desire for leadership roles")


class GoalArtifactProfile(BaseModel):
    """Vision board analysis, edited by the person over time."""

    user_id: str = Field(..., min_length=1)
    vision_board_id: str = Field(..., min_length=1)
    created_date: datetime
    last_updated_date: datetime

    goal_alignment: GoalAlignment
    motivation_profile: MotivationProfile
    engagement_predictors: EngagementPredictors

    @model_validator(mode="after")
    def validate_update_order(self):
        """Ensure last_updated_date is not before created_date."""
        if as_utc(self.last_updated_date) < as_utc(self.created_date):
            raise ValueError("last_updated_date must be >= created_date")
        return self
