"""
Health Check Router - Psychometric Readiness Engine
readiness_engine/routers/health.py

The engine has no external dependencies, so health reflects whether the
scoring configuration loads and the aggregator can be built.
"""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from readiness_engine.config import get_settings
from readiness_engine.core.dependencies import get_readiness_aggregator
from readiness_engine.core.exceptions import ConfigurationException

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


def check_scoring_engine() -> str:
    """Build (or fetch the cached) aggregator from current settings."""
    try:
        get_readiness_aggregator()
        return "healthy"
    except (ConfigurationException, ValidationError) as e:
        error_msg = str(e)[:100] + "..." if len(str(e)) > 100 else str(e)
        return f"unhealthy: {error_msg}"


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Scoring engine ready"},
        503: {"description": "Scoring configuration invalid"},
    },
    summary="Health check",
)
async def health_check():
    dependencies = {"scoring_engine": check_scoring_engine()}
    all_healthy = all(v.startswith("healthy") for v in dependencies.values())

    response = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=get_settings().APP_VERSION,
        dependencies=dependencies,
    )

    if all_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
