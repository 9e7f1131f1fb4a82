"""
scoring/behavioral_predictors.py

Behavioral predictors of successful learning and performance.

The learning record is always present and forms the baseline term; the
personality and cognitive terms join only when their profiles exist.

Formula:
    baseline     = 0.30 × average_completion + 0.30 × average_assessment
                 + 0.20 × goal_completion_rate + 0.20 × (performance / 5 × 100)
    personality  = mean(change_adaptability, stress_resilience,
                        leadership_potential, 100 − neuroticism)
    cognitive    = mean(competitiveness, mentorship, innovation,
                        collaboration_effectiveness, persistence)
    base         = blend_present(baseline .50, personality .25, cognitive .25)
    bonus        = min(10, base × 0.10)  if performance_rating ≥ 4.0
    score        = clamp(base + bonus, 0, 100)
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional

import structlog

from readiness_engine.config import Settings, get_settings
from readiness_engine.models.learning import LearningRecord
from readiness_engine.models.profiles import CognitiveTelemetryProfile, PersonalityProfile
from readiness_engine.scoring.utils import blend_present, clamp, mean, quantize_score

logger = structlog.get_logger(__name__)

_BASELINE_WEIGHTS: Dict[str, Decimal] = {
    "completion":  Decimal("0.30"),
    "assessment":  Decimal("0.30"),
    "goals":       Decimal("0.20"),
    "performance": Decimal("0.20"),
}

_TERM_WEIGHTS: Dict[str, Decimal] = {
    "baseline":    Decimal("0.50"),
    "personality": Decimal("0.25"),
    "cognitive":   Decimal("0.25"),
}


@dataclass
class BehavioralPredictorResult:
    """Output of BehavioralPredictorScorer.calculate()."""
    score: Decimal                          # [0, 100] quantized to 0.01
    baseline_score: Decimal
    personality_score: Optional[Decimal]    # None when no personality profile
    cognitive_score: Optional[Decimal]      # None when no telemetry profile
    base_score: Decimal                     # blended terms before bonus
    high_performer_bonus: Decimal


class BehavioralPredictorScorer:
    """Score behavioral predictors from the learning record plus optional profiles."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        s = self.settings
        self.rating_scale = Decimal(str(s.PERFORMANCE_RATING_SCALE))
        self.high_performer_threshold = Decimal(str(s.HIGH_PERFORMER_THRESHOLD))
        self.bonus_pct = Decimal(str(s.HIGH_PERFORMER_BONUS_PCT))
        self.bonus_cap = Decimal(str(s.HIGH_PERFORMER_BONUS_CAP))

    def calculate(
        self,
        record: LearningRecord,
        personality: Optional[PersonalityProfile] = None,
        cognitive: Optional[CognitiveTelemetryProfile] = None,
    ) -> BehavioralPredictorResult:
        """
        Args:
            record: Learning/performance record (required).
            personality: Optional Big Five profile.
            cognitive: Optional gamified telemetry profile.

        Returns:
            BehavioralPredictorResult; valid with the learning record alone.
        """
        rating = Decimal(str(record.performance_rating))
        assessment = record.average_assessment_score or 0.0

        baseline = blend_present(
            {
                "completion": record.average_completion,
                "assessment": assessment,
                "goals": record.goal_completion_rate,
                "performance": rating / self.rating_scale * Decimal("100"),
            },
            _BASELINE_WEIGHTS,
        )

        personality_score = None
        if personality is not None:
            personality_score = mean([
                Decimal(str(personality.change_adaptability)),
                Decimal(str(personality.stress_resilience)),
                Decimal(str(personality.leadership_potential)),
                Decimal("100") - Decimal(str(personality.neuroticism)),
            ])

        cognitive_score = None
        if cognitive is not None:
            bp = cognitive.behavioral_patterns
            cm = cognitive.cognitive_metrics
            cognitive_score = mean([
                Decimal(str(bp.competitiveness_drive)),
                Decimal(str(bp.mentorship_inclination)),
                Decimal(str(bp.innovation_mindset)),
                Decimal(str(cm.collaboration_effectiveness)),
                Decimal(str(cm.persistence_score)),
            ])

        base = blend_present(
            {
                "baseline": baseline,
                "personality": personality_score,
                "cognitive": cognitive_score,
            },
            _TERM_WEIGHTS,
        )

        bonus = Decimal("0")
        if rating >= self.high_performer_threshold:
            bonus = min(self.bonus_cap, base * self.bonus_pct)

        score = quantize_score(clamp(base + bonus))

        if personality is None and cognitive is None:
            logger.debug("behavioral_baseline_only", user_id=record.user_id)

        logger.info(
            "behavioral_predictors_calculated",
            user_id=record.user_id,
            baseline_score=float(baseline),
            has_personality=personality is not None,
            has_cognitive=cognitive is not None,
            high_performer_bonus=float(bonus),
            score=float(score),
        )

        return BehavioralPredictorResult(
            score=score,
            baseline_score=quantize_score(baseline),
            personality_score=quantize_score(personality_score) if personality_score is not None else None,
            cognitive_score=quantize_score(cognitive_score) if cognitive_score is not None else None,
            base_score=quantize_score(base),
            high_performer_bonus=quantize_score(bonus),
        )
