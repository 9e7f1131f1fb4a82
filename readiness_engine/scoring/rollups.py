"""
scoring/rollups.py

Department and organization rollups over per-person results.

Rollups hold no state: they are recomputed from the result list on every
call. All sums run in input order over Decimal values so repeated runs on
the same input produce identical aggregates.

Performance weight (organization weighted score, team competency):
    w_i      = max(0.5, performance_rating_i / 5)
    weighted = Σ(overall_i × w_i × data_completeness_i) / Σ(w_i × data_completeness_i)

Learning-record indicators:
    individual_competency    = Σ(competency_i × w_i) / Σ w_i
    collaboration_score      = min(100, mean(peer_interactions) / 10 × 100)
    risk_multiplier          = 0.85 if mean(login_frequency) < 3     (low engagement)
                             × 0.90 if mean(performance_rating) < 3  (low performance)
    risk_adjusted_competency = individual_competency × risk_multiplier
"""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

import structlog

from readiness_engine.config import COMPONENT_KEYS, Settings, get_settings
from readiness_engine.models.enumerations import GradeLevel, RiskFactor
from readiness_engine.models.learning import DepartmentInfo, OrganizationInfo
from readiness_engine.models.results import (
    ComponentCoverage,
    DepartmentRollup,
    OrganizationRollup,
    PsychometricComponents,
    ReadinessCalculationResult,
)
from readiness_engine.scoring.trends import calculate_trend, project_readiness
from readiness_engine.scoring.utils import mean, quantize_score, weighted_mean

logger = structlog.get_logger(__name__)

MIN_PERFORMANCE_WEIGHT = Decimal("0.5")

_AT_RISK_GRADES = (GradeLevel.LOW, GradeLevel.CRITICAL)


def _d(value: float) -> Decimal:
    return Decimal(str(value))


def performance_weight(performance_rating: float, settings: Optional[Settings] = None) -> Decimal:
    settings = settings or get_settings()
    rating_share = _d(performance_rating) / _d(settings.PERFORMANCE_RATING_SCALE)
    return max(MIN_PERFORMANCE_WEIGHT, rating_share)


def risk_factors(
    results: Sequence[ReadinessCalculationResult],
    settings: Optional[Settings] = None,
) -> List[RiskFactor]:
    """Risk factors present in a group; none for an empty group."""
    if not results:
        return []
    settings = settings or get_settings()
    indicators = [r.learning_indicators for r in results]

    factors = []
    if mean([_d(i.login_frequency) for i in indicators]) < _d(settings.RISK_LOW_ENGAGEMENT_LOGINS):
        factors.append(RiskFactor.LOW_ENGAGEMENT)
    if mean([_d(i.performance_rating) for i in indicators]) < _d(settings.RISK_LOW_PERFORMANCE_RATING):
        factors.append(RiskFactor.LOW_PERFORMANCE)
    return factors


def risk_multiplier(factors: Iterable[RiskFactor], settings: Optional[Settings] = None) -> Decimal:
    settings = settings or get_settings()
    multipliers = {
        RiskFactor.LOW_ENGAGEMENT: _d(settings.RISK_LOW_ENGAGEMENT_MULTIPLIER),
        RiskFactor.LOW_PERFORMANCE: _d(settings.RISK_LOW_PERFORMANCE_MULTIPLIER),
    }
    result = Decimal("1")
    for factor in factors:
        result *= multipliers[factor]
    return result


def _learning_summary(
    results: Sequence[ReadinessCalculationResult],
    settings: Settings,
) -> dict:
    indicators = [r.learning_indicators for r in results]
    competency = weighted_mean(
        [_d(i.individual_competency) for i in indicators],
        [performance_weight(i.performance_rating, settings) for i in indicators],
    )
    interactions = mean([Decimal(i.peer_interactions) for i in indicators])
    collaboration = min(
        Decimal("100"),
        interactions / _d(settings.COLLABORATION_INTERACTIONS_TARGET) * Decimal("100"),
    )
    factors = risk_factors(results, settings)
    multiplier = risk_multiplier(factors, settings)

    return {
        "individual_competency": float(quantize_score(competency)),
        "collaboration_score": float(quantize_score(collaboration)),
        "risk_factors": factors,
        "risk_multiplier": float(multiplier),
        "risk_adjusted_competency": float(quantize_score(competency * multiplier)),
    }


def _summarize(
    results: Sequence[ReadinessCalculationResult],
    settings: Optional[Settings] = None,
) -> dict:
    """Fields shared by department and organization rollups."""
    settings = settings or get_settings()

    component_means: Dict[str, Optional[float]] = {}
    coverage: Dict[str, int] = {}
    for key in COMPONENT_KEYS:
        values = [
            _d(getattr(r.psychometric_components, key))
            for r in results
            if getattr(r.psychometric_components, key) is not None
        ]
        coverage[key] = len(values)
        component_means[key] = float(quantize_score(mean(values))) if values else None

    grades = {grade.value: 0 for grade in GradeLevel}
    for r in results:
        grades[GradeLevel(r.grade_level).value] += 1

    return {
        "people_count": len(results),
        "overall_score": float(quantize_score(mean([_d(r.overall_score) for r in results]))),
        "components": PsychometricComponents(**component_means),
        "component_coverage": ComponentCoverage(**coverage),
        "average_data_completeness": float(
            mean([_d(r.data_completeness) for r in results]).quantize(Decimal("0.0001"))
        ),
        "average_predictive_confidence": float(
            quantize_score(mean([_d(r.predictive_confidence) for r in results]))
        ),
        "grade_distribution": grades,
        "at_risk_count": sum(1 for r in results if GradeLevel(r.grade_level) in _AT_RISK_GRADES),
        **_learning_summary(results, settings),
    }


def rollup_department(
    department_id: str,
    results: Sequence[ReadinessCalculationResult],
    info: Optional[DepartmentInfo] = None,
    settings: Optional[Settings] = None,
) -> DepartmentRollup:
    """Aggregate one department's results (results must already be filtered)."""
    return DepartmentRollup(
        department_id=department_id,
        name=info.name if info else "",
        **_summarize(results, settings),
    )


def rollup_departments(
    results: Sequence[ReadinessCalculationResult],
    departments: Optional[Iterable[DepartmentInfo]] = None,
    settings: Optional[Settings] = None,
) -> List[DepartmentRollup]:
    """
    Group results by department, in order of first appearance.

    Departments supplied as metadata but with nobody scored are still
    reported with zero people.
    """
    info_by_id = {d.department_id: d for d in (departments or [])}

    grouped: Dict[str, List[ReadinessCalculationResult]] = {}
    for r in results:
        grouped.setdefault(r.department_id, []).append(r)
    for department_id in info_by_id:
        grouped.setdefault(department_id, [])

    return [
        rollup_department(department_id, members, info_by_id.get(department_id), settings)
        for department_id, members in grouped.items()
    ]


def rollup_organization(
    results: Sequence[ReadinessCalculationResult],
    organization: Optional[OrganizationInfo] = None,
    department_count: int = 0,
    failed_count: int = 0,
    settings: Optional[Settings] = None,
) -> OrganizationRollup:
    """
    Organization-wide rollup.

    Args:
        results: Successfully scored people, in input order.
        organization: Optional metadata, including the monthly score history
            used for the trend and the projection.
        department_count: Number of department rollups produced.
        failed_count: Records that failed validation.
    """
    settings = settings or get_settings()
    organization = organization or OrganizationInfo()

    weights = [
        performance_weight(r.learning_indicators.performance_rating, settings) * _d(r.data_completeness)
        for r in results
    ]
    weighted = weighted_mean([_d(r.overall_score) for r in results], weights)
    summary = _summarize(results, settings)

    rollup = OrganizationRollup(
        department_id=organization.organization_id,
        name=organization.name,
        weighted_overall_score=float(quantize_score(weighted)),
        department_count=department_count,
        failed_count=failed_count,
        trend=calculate_trend(organization.monthly_trend, settings),
        projected_score=float(project_readiness(
            summary["overall_score"], organization.monthly_trend, settings
        )),
        **summary,
    )

    logger.info(
        "organization_rollup_calculated",
        organization_id=organization.organization_id,
        people_count=rollup.people_count,
        failed_count=failed_count,
        overall_score=rollup.overall_score,
        weighted_overall_score=rollup.weighted_overall_score,
        risk_factors=[f.value for f in rollup.risk_factors],
        trend=rollup.trend.value,
    )
    return rollup
