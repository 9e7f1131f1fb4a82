"""
scoring/individual_competency.py

Individual competency from the learning record alone.

Reported beside the psychometric overall score; it does not feed the
four-component blend.

Formula:
    learning      = min(100, 0.4 × average_completion
                             + 0.3 × min(100, completed / max(enrolled, 1) × 100)
                             + 0.3 × min(1, hours / 40) × 100)
    assessment    = average_assessment_score
    certification = min(100, earned / required × 100), or 100 when none required
    skills        = mean(skill_ratings) × 20, or 50 when no ratings
    base          = 0.4 × learning + 0.3 × assessment
                  + 0.2 × certification + 0.1 × skills
    score         = clamp(base × 0.9, 0, 100)  if inactive > 14 days
                  = clamp(base, 0, 100)        otherwise
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Optional

import structlog

from readiness_engine.config import Settings, get_settings
from readiness_engine.models.learning import LearningRecord
from readiness_engine.scoring.utils import (
    clamp,
    days_since,
    mean,
    quantize_score,
    weighted_mean,
)

logger = structlog.get_logger(__name__)

HUNDRED = Decimal("100")
SKILL_POINTS_PER_LEVEL = Decimal("20")

_LEARNING_WEIGHTS: Dict[str, Decimal] = {
    "completion": Decimal("0.40"),
    "courses":    Decimal("0.30"),
    "hours":      Decimal("0.30"),
}

_COMPETENCY_WEIGHTS: Dict[str, Decimal] = {
    "learning":      Decimal("0.40"),
    "assessment":    Decimal("0.30"),
    "certification": Decimal("0.20"),
    "skills":        Decimal("0.10"),
}


@dataclass
class IndividualCompetencyResult:
    """Output of IndividualCompetencyScorer.calculate()."""
    score: Decimal                  # [0, 100] quantized to 0.01
    learning_score: Decimal
    assessment_score: Decimal
    certification_score: Decimal
    skill_score: Decimal
    inactivity_penalty: Decimal     # 1 or the configured penalty
    days_inactive: Optional[int]    # None when no activity date on file


class IndividualCompetencyScorer:
    """Score learning progress, assessments, certifications and skills."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        s = self.settings
        self.hours_target = Decimal(str(s.COMPETENCY_HOURS_TARGET))
        self.default_skill_score = Decimal(str(s.COMPETENCY_DEFAULT_SKILL_SCORE))
        self.inactivity_days = s.COMPETENCY_INACTIVITY_DAYS
        self.inactivity_penalty = Decimal(str(s.COMPETENCY_INACTIVITY_PENALTY))

    def calculate(
        self,
        record: LearningRecord,
        as_of: Optional[datetime] = None,
    ) -> IndividualCompetencyResult:
        """
        Args:
            record: Learning/performance record.
            as_of: Reference time for the inactivity check (default: now, UTC).

        Returns:
            IndividualCompetencyResult with score and term breakdown.
        """
        course_ratio = min(
            HUNDRED,
            Decimal(record.completed_courses) / Decimal(max(record.enrolled_courses, 1)) * HUNDRED,
        )
        hours_ratio = min(Decimal("1"), Decimal(str(record.total_learning_hours)) / self.hours_target)
        learning = min(HUNDRED, weighted_mean(
            [Decimal(str(record.average_completion)), course_ratio, hours_ratio * HUNDRED],
            list(_LEARNING_WEIGHTS.values()),
        ))

        assessment = Decimal(str(record.average_assessment_score or 0.0))

        if record.certifications_required > 0:
            certification = min(
                HUNDRED,
                Decimal(record.certifications_earned) / Decimal(record.certifications_required) * HUNDRED,
            )
        else:
            certification = HUNDRED

        ratings = [Decimal(str(r)) for r in record.skill_ratings.values()]
        skills = mean(ratings) * SKILL_POINTS_PER_LEVEL if ratings else self.default_skill_score

        base = weighted_mean(
            [learning, assessment, certification, skills],
            list(_COMPETENCY_WEIGHTS.values()),
        )

        days_inactive = None
        penalty = Decimal("1")
        if record.last_activity_date is not None:
            days_inactive = days_since(record.last_activity_date, as_of)
            if days_inactive > self.inactivity_days:
                penalty = self.inactivity_penalty

        score = quantize_score(clamp(base * penalty))

        logger.info(
            "individual_competency_calculated",
            user_id=record.user_id,
            base_score=float(base),
            days_inactive=days_inactive,
            inactivity_penalty=float(penalty),
            score=float(score),
        )

        return IndividualCompetencyResult(
            score=score,
            learning_score=quantize_score(learning),
            assessment_score=quantize_score(assessment),
            certification_score=quantize_score(certification),
            skill_score=quantize_score(skills),
            inactivity_penalty=penalty,
            days_inactive=days_inactive,
        )
