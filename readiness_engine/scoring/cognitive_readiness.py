"""
scoring/cognitive_readiness.py

Cognitive readiness from gamified assessment telemetry.

Formula:
    metrics     = mean(problem_solving_speed, decision_quality, adaptability_index,
                       persistence_score, collaboration_effectiveness)
    behavioral  = mean(risk_tolerance, competitiveness_drive, help_seeking_behavior,
                       mentorship_inclination, innovation_mindset)
    preference  = 0.40 × complexity_level + 0.20 × (feedback + autonomy + social)
    base        = 0.55 × metrics + 0.30 × behavioral + 0.15 × preference

    engagement  = recency(days since last play) × frequency(sessions / week)
                  clamped to [decay floor, engagement cap]
    score       = clamp(base × engagement, 0, 100)

Recency holds at 1.05 for a week of inactivity, then halves its distance to
0.75 every 30 days. Stale telemetry is discounted, never zeroed.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

import structlog

from readiness_engine.config import Settings, get_settings
from readiness_engine.models.enumerations import ComplexityPreference
from readiness_engine.models.profiles import CognitiveTelemetryProfile
from readiness_engine.scoring.recency import RecencyCurve
from readiness_engine.scoring.utils import (
    RATIO_PLACES,
    blend_present,
    clamp,
    days_since,
    mean,
    quantize_score,
)

logger = structlog.get_logger(__name__)

_BLOCK_WEIGHTS: Dict[str, Decimal] = {
    "metrics":    Decimal("0.55"),
    "behavioral": Decimal("0.30"),
    "preference": Decimal("0.15"),
}

_COMPLEXITY_LEVEL: Dict[ComplexityPreference, Decimal] = {
    ComplexityPreference.LOW:    Decimal("55"),
    ComplexityPreference.MEDIUM: Decimal("75"),
    ComplexityPreference.HIGH:   Decimal("90"),
}

_PREFERENCE_WEIGHTS: Dict[str, Decimal] = {
    "complexity": Decimal("0.40"),
    "feedback":   Decimal("0.20"),
    "autonomy":   Decimal("0.20"),
    "social":     Decimal("0.20"),
}


@dataclass
class CognitiveReadinessResult:
    """Output of CognitiveReadinessScorer.calculate()."""
    score: Decimal                # [0, 100] quantized to 0.01
    base_score: Decimal           # blend before engagement adjustment
    metrics_score: Decimal
    behavioral_score: Decimal
    preference_score: Decimal
    recency_factor: Decimal
    frequency_factor: Decimal
    engagement_factor: Decimal    # clamped product of the two factors
    days_since_play: int


class CognitiveReadinessScorer:
    """Score cognitive readiness with engagement decay."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        s = self.settings
        self.recency = RecencyCurve.build(
            window_days=s.COGNITIVE_RECENCY_WINDOW_DAYS,
            peak=s.COGNITIVE_RECENCY_PEAK,
            floor=s.COGNITIVE_DECAY_FLOOR,
            span_days=s.COGNITIVE_DECAY_HALF_LIFE_DAYS,
            shape="exponential",
        )
        self.factor_floor = Decimal(str(s.COGNITIVE_DECAY_FLOOR))
        self.factor_cap = Decimal(str(s.ENGAGEMENT_FACTOR_CAP))

    def calculate(
        self,
        profile: CognitiveTelemetryProfile,
        as_of: Optional[datetime] = None,
    ) -> CognitiveReadinessResult:
        """
        Args:
            profile: Gamified telemetry for one person.
            as_of: Reference time for staleness (default: now, UTC).

        Returns:
            CognitiveReadinessResult with score and factor breakdown.
        """
        m = profile.cognitive_metrics
        metrics_score = mean([
            Decimal(str(m.problem_solving_speed)),
            Decimal(str(m.decision_quality)),
            Decimal(str(m.adaptability_index)),
            Decimal(str(m.persistence_score)),
            Decimal(str(m.collaboration_effectiveness)),
        ])

        b = profile.behavioral_patterns
        behavioral_score = mean([
            Decimal(str(b.risk_tolerance)),
            Decimal(str(b.competitiveness_drive)),
            Decimal(str(b.help_seeking_behavior)),
            Decimal(str(b.mentorship_inclination)),
            Decimal(str(b.innovation_mindset)),
        ])

        p = profile.learning_preferences
        preference_score = blend_present(
            {
                "complexity": _COMPLEXITY_LEVEL[ComplexityPreference(p.preferred_complexity)],
                "feedback": p.feedback_sensitivity,
                "autonomy": p.autonomy_preference,
                "social": p.social_learning_preference,
            },
            _PREFERENCE_WEIGHTS,
        )

        base = blend_present(
            {
                "metrics": metrics_score,
                "behavioral": behavioral_score,
                "preference": preference_score,
            },
            _BLOCK_WEIGHTS,
        )

        session = profile.game_session_data
        days = days_since(session.last_played_date, as_of)
        recency_factor = self.recency.value(days)
        frequency_factor = self.frequency_factor(session.total_sessions)
        engagement = clamp(
            (recency_factor * frequency_factor).quantize(RATIO_PLACES),
            self.factor_floor,
            self.factor_cap,
        )

        score = quantize_score(clamp(base * engagement))

        logger.info(
            "cognitive_readiness_calculated",
            user_id=profile.user_id,
            base_score=float(base),
            days_since_play=days,
            recency_factor=float(recency_factor),
            frequency_factor=float(frequency_factor),
            engagement_factor=float(engagement),
            score=float(score),
        )

        return CognitiveReadinessResult(
            score=score,
            base_score=quantize_score(base),
            metrics_score=quantize_score(metrics_score),
            behavioral_score=quantize_score(behavioral_score),
            preference_score=quantize_score(preference_score),
            recency_factor=recency_factor,
            frequency_factor=frequency_factor,
            engagement_factor=engagement,
            days_since_play=days,
        )

    def frequency_factor(self, total_sessions: int) -> Decimal:
        """Multiplier from average sessions per week over the observation window."""
        s = self.settings
        per_week = Decimal(total_sessions) / Decimal(str(s.SESSION_OBSERVATION_WEEKS))
        if per_week >= Decimal(str(s.FREQUENT_SESSIONS_PER_WEEK)):
            return Decimal(str(s.FREQUENT_PLAY_MULTIPLIER))
        if per_week < Decimal(str(s.INFREQUENT_SESSIONS_PER_WEEK)):
            return Decimal(str(s.INFREQUENT_PLAY_MULTIPLIER))
        return Decimal("1")
