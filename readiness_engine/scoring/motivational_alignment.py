"""
scoring/motivational_alignment.py

Motivational alignment from vision-board goal artifacts.

Formula:
    goal        = mean(alignment_with_org_vision, goal_specificity,
                       timeline_realism, min(100, total_goals × 8))
    motivation  = mean(intrinsic, extrinsic, growth_mindset, purpose_clarity, ambition)
    engagement  = mean(likely_engagement, 100 − retention_risk,
                       learning_velocity, promotion_readiness)
    base        = 0.40 × goal + 0.35 × motivation + 0.25 × engagement
    score       = min(100, base + recency_bonus)

The recency bonus is 5 points while the board was updated within 30 days,
fading linearly to 0 at 90 days.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

import structlog

from readiness_engine.config import Settings, get_settings
from readiness_engine.models.profiles import GoalArtifactProfile
from readiness_engine.scoring.recency import RecencyCurve
from readiness_engine.scoring.utils import (
    blend_present,
    clamp,
    days_since,
    mean,
    quantize_score,
)

logger = structlog.get_logger(__name__)

GOAL_VOLUME_POINTS = Decimal("8")

_GROUP_WEIGHTS: Dict[str, Decimal] = {
    "goal":       Decimal("0.40"),
    "motivation": Decimal("0.35"),
    "engagement": Decimal("0.25"),
}


@dataclass
class MotivationalAlignmentResult:
    """Output of MotivationalAlignmentScorer.calculate()."""
    score: Decimal              # [0, 100] quantized to 0.01
    base_score: Decimal         # before the recency bonus
    goal_score: Decimal
    motivation_score: Decimal
    engagement_score: Decimal
    recency_bonus: Decimal      # [0, 5] points
    days_since_update: int


class MotivationalAlignmentScorer:
    """Score goal/motivation alignment with a recency bonus."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        s = self.settings
        self.recency = RecencyCurve.build(
            window_days=s.VISION_RECENCY_WINDOW_DAYS,
            peak=s.VISION_RECENCY_BONUS,
            floor=0.0,
            span_days=s.VISION_BONUS_SPAN_DAYS,
            shape="linear",
        )

    def calculate(
        self,
        profile: GoalArtifactProfile,
        as_of: Optional[datetime] = None,
    ) -> MotivationalAlignmentResult:
        ga = profile.goal_alignment
        goal_volume = min(Decimal("100"), Decimal(ga.total_goals) * GOAL_VOLUME_POINTS)
        goal_score = mean([
            Decimal(str(ga.alignment_with_org_vision)),
            Decimal(str(ga.goal_specificity)),
            Decimal(str(ga.timeline_realism)),
            goal_volume,
        ])

        mp = profile.motivation_profile
        motivation_score = mean([
            Decimal(str(mp.intrinsic_motivation)),
            Decimal(str(mp.extrinsic_motivation)),
            Decimal(str(mp.growth_mindset)),
            Decimal(str(mp.purpose_clarity)),
            Decimal(str(mp.ambition_level)),
        ])

        ep = profile.engagement_predictors
        engagement_score = mean([
            Decimal(str(ep.likely_engagement_level)),
            Decimal("100") - Decimal(str(ep.retention_risk)),
            Decimal(str(ep.learning_velocity)),
            Decimal(str(ep.promotion_readiness)),
        ])

        base = clamp(blend_present(
            {
                "goal": goal_score,
                "motivation": motivation_score,
                "engagement": engagement_score,
            },
            _GROUP_WEIGHTS,
        ))

        days = days_since(profile.last_updated_date, as_of)
        bonus = self.recency.value(days)
        score = quantize_score(min(Decimal("100"), base + bonus))

        logger.info(
            "motivational_alignment_calculated",
            user_id=profile.user_id,
            vision_board_id=profile.vision_board_id,
            base_score=float(base),
            days_since_update=days,
            recency_bonus=float(bonus),
            score=float(score),
        )

        return MotivationalAlignmentResult(
            score=score,
            base_score=quantize_score(base),
            goal_score=quantize_score(goal_score),
            motivation_score=quantize_score(motivation_score),
            engagement_score=quantize_score(engagement_score),
            recency_bonus=bonus,
            days_since_update=days,
        )
