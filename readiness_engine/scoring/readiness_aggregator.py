"""
scoring/readiness_aggregator.py

Per-person and population readiness scoring.

Class: ReadinessAggregator
Methods:
    calculate_person(user_data, as_of)          → ReadinessCalculationResult
    calculate_population(users, ..., as_of)     → PopulationReadinessResult

Per-person steps:
  1.  PersonalityAlignmentScorer     (only when a personality profile exists)
  2.  CognitiveReadinessScorer       (only when telemetry exists)
  3.  MotivationalAlignmentScorer    (only when a vision board exists)
  4.  BehavioralPredictorScorer      (always)
  5.  data_completeness = (1 + optional profiles present) / 4
  6.  overall = blend over computed components, weights renormalized
  7.  PredictiveConfidenceCalculator → confidence + interval
  8.  grade level
  9.  InsightGenerator → insights, recommendations
  10. IndividualCompetencyScorer     (learning record; reported, not blended)

Population steps:
  1.  map_user_data() each record; failures become PersonFailure entries
  2.  score valid records (optionally on a thread pool, input order kept)
  3.  department and organization rollups (psychometric means, learning
      indicators and risk factors, organization trend and projection)
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import structlog

from readiness_engine.config import COMPONENT_KEYS, Settings, get_settings
from readiness_engine.core.exceptions import RecordValidationError
from readiness_engine.models.enumerations import GradeLevel
from readiness_engine.models.learning import (
    DepartmentInfo,
    OrganizationInfo,
    PsychometricUserData,
)
from readiness_engine.models.results import (
    ConfidenceInterval,
    LearningIndicators,
    PersonFailure,
    PopulationReadinessResult,
    PsychometricComponents,
    ReadinessCalculationResult,
)
from readiness_engine.scoring.behavioral_predictors import BehavioralPredictorScorer
from readiness_engine.scoring.cognitive_readiness import CognitiveReadinessScorer
from readiness_engine.scoring.confidence_calculator import PredictiveConfidenceCalculator
from readiness_engine.scoring.data_mapping import map_user_data
from readiness_engine.scoring.individual_competency import IndividualCompetencyScorer
from readiness_engine.scoring.insights import InsightContext, InsightGenerator
from readiness_engine.scoring.motivational_alignment import MotivationalAlignmentScorer
from readiness_engine.scoring.personality_alignment import PersonalityAlignmentScorer
from readiness_engine.scoring.rollups import rollup_departments, rollup_organization
from readiness_engine.scoring.utils import (
    as_utc,
    blend_present,
    clamp,
    mean,
    quantize_score,
    utc_now,
)

logger = structlog.get_logger(__name__)

RawUser = Union[Mapping[str, Any], PsychometricUserData]

TOTAL_SOURCES = 4


class ReadinessAggregator:
    """Combine component scores into per-person and population readiness."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

        self.personality_scorer = PersonalityAlignmentScorer(self.settings)
        self.cognitive_scorer = CognitiveReadinessScorer(self.settings)
        self.motivational_scorer = MotivationalAlignmentScorer(self.settings)
        self.behavioral_scorer = BehavioralPredictorScorer(self.settings)
        self.competency_scorer = IndividualCompetencyScorer(self.settings)
        self.confidence_calculator = PredictiveConfidenceCalculator(self.settings)
        self.insight_generator = InsightGenerator(self.settings)

        self.component_weights: Dict[str, Decimal] = {
            key: Decimal(str(weight))
            for key, weight in self.settings.component_weights.items()
        }

    # ------------------------------------------------------------------
    # Per person
    # ------------------------------------------------------------------

    def calculate_person(
        self,
        user_data: PsychometricUserData,
        as_of: Optional[datetime] = None,
    ) -> ReadinessCalculationResult:
        """
        Score one validated person.

        Absent profiles leave their component as None; they never count as 0.
        """
        reference = as_utc(as_of) if as_of is not None else utc_now()
        record = user_data.learning_record

        components: Dict[str, Optional[Decimal]] = dict.fromkeys(COMPONENT_KEYS)
        days_since_play = None
        days_since_vision_update = None

        if user_data.personality is not None:
            components["personality_alignment"] = self.personality_scorer.calculate(
                user_data.personality, record.role
            ).score
        else:
            logger.debug("personality_profile_absent", user_id=record.user_id)

        if user_data.cognitive_telemetry is not None:
            cognitive = self.cognitive_scorer.calculate(user_data.cognitive_telemetry, reference)
            components["cognitive_readiness"] = cognitive.score
            days_since_play = cognitive.days_since_play
        else:
            logger.debug("cognitive_telemetry_absent", user_id=record.user_id)

        if user_data.goal_artifact is not None:
            motivational = self.motivational_scorer.calculate(user_data.goal_artifact, reference)
            components["motivational_alignment"] = motivational.score
            days_since_vision_update = motivational.days_since_update
        else:
            logger.debug("goal_artifact_absent", user_id=record.user_id)

        components["behavioral_predictors"] = self.behavioral_scorer.calculate(
            record, user_data.personality, user_data.cognitive_telemetry
        ).score

        competency = self.competency_scorer.calculate(record, reference)

        sources_present = 1 + len(user_data.present_sources())
        completeness = Decimal(sources_present) / Decimal(TOTAL_SOURCES)

        overall = quantize_score(clamp(blend_present(components, self.component_weights)))

        computed = {k: v for k, v in components.items() if v is not None}
        confidence = self.confidence_calculator.calculate(
            float(overall),
            [float(v) for v in computed.values()],
            sources_present,
        )

        grade = self.grade_level(overall)

        insights, recommendations = self.insight_generator.generate(InsightContext(
            components=computed,
            overall=overall,
            completeness=completeness,
            grade=grade,
            days_since_play=days_since_play,
            days_since_vision_update=days_since_vision_update,
            missing=[k for k, v in components.items() if v is None],
        ))

        logger.info(
            "readiness_calculated",
            user_id=record.user_id,
            department_id=record.department_id,
            overall_score=float(overall),
            data_completeness=float(completeness),
            predictive_confidence=float(confidence.confidence),
            grade_level=grade.value,
        )

        return ReadinessCalculationResult(
            user_id=record.user_id,
            department_id=record.department_id,
            role=record.role,
            overall_score=float(overall),
            psychometric_components=PsychometricComponents(
                **{k: (float(v) if v is not None else None) for k, v in components.items()}
            ),
            data_completeness=float(completeness),
            predictive_confidence=float(confidence.confidence),
            confidence_interval=ConfidenceInterval(
                ci_lower=float(confidence.ci_lower),
                ci_upper=float(confidence.ci_upper),
                sem=float(confidence.sem),
                reliability=float(confidence.reliability),
            ),
            grade_level=grade,
            learning_indicators=LearningIndicators(
                individual_competency=float(competency.score),
                performance_rating=record.performance_rating,
                login_frequency=record.login_frequency,
                peer_interactions=record.peer_interactions,
            ),
            insights=insights,
            recommendations=recommendations,
            calculated_at=reference,
        )

    def grade_level(self, score: Decimal) -> GradeLevel:
        """Map an overall score onto the five grade bands."""
        s = self.settings
        score = Decimal(str(score))
        if score >= Decimal(str(s.GRADE_EXCELLENT)):
            return GradeLevel.EXCELLENT
        elif score >= Decimal(str(s.GRADE_GOOD)):
            return GradeLevel.GOOD
        elif score >= Decimal(str(s.GRADE_MODERATE)):
            return GradeLevel.MODERATE
        elif score >= Decimal(str(s.GRADE_LOW)):
            return GradeLevel.LOW
        return GradeLevel.CRITICAL

    # ------------------------------------------------------------------
    # Population
    # ------------------------------------------------------------------

    def calculate_population(
        self,
        users: Sequence[RawUser],
        departments: Optional[Sequence[DepartmentInfo]] = None,
        organization: Optional[OrganizationInfo] = None,
        as_of: Optional[datetime] = None,
        max_workers: Optional[int] = None,
    ) -> PopulationReadinessResult:
        """
        Score a population; invalid records are reported, not raised.

        Args:
            users: Raw mappings or validated PsychometricUserData.
            departments: Optional department metadata for rollups.
            organization: Optional organization metadata.
            as_of: Shared reference time for every person (default: now, UTC).
            max_workers: Score on a thread pool of this size when > 1.

        Returns:
            PopulationReadinessResult with results in input order.
        """
        reference = as_utc(as_of) if as_of is not None else utc_now()

        # 1. Validate
        valid: List[PsychometricUserData] = []
        failures: List[PersonFailure] = []
        for index, raw in enumerate(users):
            try:
                valid.append(map_user_data(raw))
            except RecordValidationError as exc:
                failures.append(PersonFailure(
                    index=index,
                    user_id=exc.user_id,
                    field=exc.field,
                    message=exc.message,
                ))

        # 2. Score
        if max_workers and max_workers > 1 and len(valid) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                results = list(pool.map(lambda u: self.calculate_person(u, reference), valid))
        else:
            results = [self.calculate_person(u, reference) for u in valid]

        # 3. Rollups
        department_rollups = rollup_departments(results, departments, self.settings)
        organization_rollup = rollup_organization(
            results,
            organization=organization,
            department_count=len(department_rollups),
            failed_count=len(failures),
            settings=self.settings,
        )

        overall = quantize_score(mean([Decimal(str(r.overall_score)) for r in results]))

        logger.info(
            "population_readiness_calculated",
            scored=len(results),
            failed=len(failures),
            overall_score=float(overall),
            max_workers=max_workers,
        )

        return PopulationReadinessResult(
            results=results,
            failures=failures,
            overall_score=float(overall),
            departments=department_rollups,
            organization=organization_rollup,
        )

