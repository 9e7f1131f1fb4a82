"""
routers/readiness.py — Readiness Scoring Endpoints

Endpoints:
  POST /api/v1/readiness/score          — Score a population (raw records)
  POST /api/v1/readiness/score/person   — Score one validated person
  GET  /api/v1/readiness/demo           — Score a seeded mock population
  GET  /api/v1/readiness/config         — Current weights and named constants

Per-record validation failures in a population request are reported in the
response's `failures` list, not as HTTP errors.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from readiness_engine.config import Settings, get_settings
from readiness_engine.core.dependencies import get_mock_data_generator, get_readiness_aggregator
from readiness_engine.mock_data import MockDataGenerator
from readiness_engine.models.learning import DepartmentInfo, OrganizationInfo, PsychometricUserData
from readiness_engine.models.results import PopulationReadinessResult, ReadinessCalculationResult
from readiness_engine.scoring.readiness_aggregator import ReadinessAggregator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/readiness", tags=["Readiness Scoring"])


# =====================================================================
# Request / Response Models
# =====================================================================

class PopulationScoreRequest(BaseModel):
    """Raw records are validated one by one so a bad record cannot sink the batch."""
    users: List[Any] = Field(default_factory=list)
    departments: List[DepartmentInfo] = Field(default_factory=list)
    organization: Optional[OrganizationInfo] = None
    as_of: Optional[datetime] = None


class PersonScoreRequest(BaseModel):
    user: PsychometricUserData
    as_of: Optional[datetime] = None


class ConfigResponse(BaseModel):
    component_weights: Dict[str, float]
    constants: Dict[str, float]


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Optional[dict] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# Settings surfaced by GET /config (everything numeric that shapes a score)
_CONFIG_CONSTANTS = [
    "DEFAULT_ROLE_SCORE",
    "TRAIT_DISTANCE_PENALTY",
    "LEADERSHIP_BONUS_THRESHOLD",
    "ADAPTABILITY_BONUS_THRESHOLD",
    "RESILIENCE_BONUS_THRESHOLD",
    "DERIVED_TRAIT_BONUS",
    "DERIVED_TRAIT_BONUS_CAP",
    "COGNITIVE_RECENCY_WINDOW_DAYS",
    "COGNITIVE_RECENCY_PEAK",
    "COGNITIVE_DECAY_FLOOR",
    "COGNITIVE_DECAY_HALF_LIFE_DAYS",
    "ENGAGEMENT_FACTOR_CAP",
    "VISION_RECENCY_WINDOW_DAYS",
    "VISION_RECENCY_BONUS",
    "VISION_BONUS_SPAN_DAYS",
    "HIGH_PERFORMER_THRESHOLD",
    "HIGH_PERFORMER_BONUS_PCT",
    "HIGH_PERFORMER_BONUS_CAP",
    "CONFIDENCE_BASE_RELIABILITY",
    "CONFIDENCE_DISPERSION_LAMBDA",
    "GRADE_EXCELLENT",
    "GRADE_GOOD",
    "GRADE_MODERATE",
    "GRADE_LOW",
    "STALE_ACTIVITY_DAYS",
    "COMPETENCY_INACTIVITY_DAYS",
    "COMPETENCY_INACTIVITY_PENALTY",
    "RISK_LOW_ENGAGEMENT_LOGINS",
    "RISK_LOW_ENGAGEMENT_MULTIPLIER",
    "RISK_LOW_PERFORMANCE_RATING",
    "RISK_LOW_PERFORMANCE_MULTIPLIER",
    "TREND_CHANGE_THRESHOLD",
    "PROJECTION_MONTHS",
]


# =====================================================================
# Exception handler (registered in main.py)
# =====================================================================

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorResponse(
                error_code="VALIDATION_ERROR",
                message="Request validation failed",
            ).model_dump(mode="json"),
        )
    err = errors[0]
    if "json_invalid" in err.get("type", ""):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(
                error_code="INVALID_REQUEST",
                message="Malformed JSON request body",
            ).model_dump(mode="json"),
        )
    field = ".".join(str(part) for part in err.get("loc", []) if part != "body")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(
            error_code="VALIDATION_ERROR",
            message=f"{field}: {err.get('msg', 'invalid value')}" if field else err.get("msg", ""),
            details={"field": field, "error_count": len(errors)},
        ).model_dump(mode="json"),
    )


# =====================================================================
# Endpoints
# =====================================================================

@router.post(
    "/score",
    response_model=PopulationReadinessResult,
    summary="Score a population",
)
def score_population(
    request: PopulationScoreRequest,
    aggregator: ReadinessAggregator = Depends(get_readiness_aggregator),
) -> PopulationReadinessResult:
    start = time.time()
    result = aggregator.calculate_population(
        request.users,
        departments=request.departments,
        organization=request.organization,
        as_of=request.as_of,
    )
    logger.info(
        f"Scored {len(result.results)} people "
        f"({len(result.failures)} failed) in {time.time() - start:.2f}s"
    )
    return result


@router.post(
    "/score/person",
    response_model=ReadinessCalculationResult,
    responses={422: {"model": ErrorResponse}},
    summary="Score one person",
)
def score_person(
    request: PersonScoreRequest,
    aggregator: ReadinessAggregator = Depends(get_readiness_aggregator),
) -> ReadinessCalculationResult:
    return aggregator.calculate_person(request.user, as_of=request.as_of)


@router.get(
    "/demo",
    response_model=PopulationReadinessResult,
    summary="Score a seeded mock population",
)
def score_demo(
    users: int = Query(default=50, ge=0, le=get_settings().DEMO_MAX_USERS),
    seed: int = Query(default=42),
    aggregator: ReadinessAggregator = Depends(get_readiness_aggregator),
    generator: MockDataGenerator = Depends(get_mock_data_generator),
) -> PopulationReadinessResult:
    as_of = datetime.now(timezone.utc)
    population = generator.generate_population(users, seed=seed, as_of=as_of)
    return aggregator.calculate_population(
        population.users,
        departments=population.departments,
        organization=population.organization,
        as_of=as_of,
    )


@router.get(
    "/config",
    response_model=ConfigResponse,
    summary="Current scoring weights and constants",
)
def scoring_config(settings: Settings = Depends(get_settings)) -> ConfigResponse:
    return ConfigResponse(
        component_weights=settings.component_weights,
        constants={name: float(getattr(settings, name)) for name in _CONFIG_CONSTANTS},
    )
