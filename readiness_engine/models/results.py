from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional, List, Dict

from readiness_engine.models.enumerations import GradeLevel, RiskFactor, TrendDirection


class PsychometricComponents(BaseModel):
    """
    The four component scores.

    None means "not computed" (source profile absent), which is distinct
    from a computed score of 0.
    """

    personality_alignment: Optional[float] = Field(default=None, ge=0, le=100)
    cognitive_readiness: Optional[float] = Field(default=None, ge=0, le=100)
    motivational_alignment: Optional[float] = Field(default=None, ge=0, le=100)
    behavioral_predictors: Optional[float] = Field(default=None, ge=0, le=100)

    def computed(self) -> Dict[str, float]:
        """Components that were computed, in reporting order."""
        return {k: v for k, v in self.model_dump().items() if v is not None}

    def missing(self) -> List[str]:
        return [k for k, v in self.model_dump().items() if v is None]


class ConfidenceInterval(BaseModel):
    ci_lower: float = Field(..., ge=0, le=100)
    ci_upper: float = Field(..., ge=0, le=100)
    sem: float = Field(..., ge=0)
    reliability: float = Field(..., ge=0, le=1)


class LearningIndicators(BaseModel):
    """Learning-record signals reported beside the psychometric components."""

    individual_competency: float = Field(..., ge=0, le=100)
    performance_rating: float = Field(..., ge=0, le=5)
    login_frequency: float = Field(default=0.0, ge=0)
    peer_interactions: int = Field(default=0, ge=0)


class ReadinessCalculationResult(BaseModel):
    """Per-person engine output. Never persisted by the engine."""

    user_id: str
    department_id: str
    role: str = ""

    overall_score: float = Field(..., ge=0, le=100)
    psychometric_components: PsychometricComponents
    data_completeness: float = Field(..., ge=0.25, le=1.0)
    predictive_confidence: float = Field(..., gt=0, le=100)
    confidence_interval: ConfidenceInterval
    grade_level: GradeLevel
    learning_indicators: LearningIndicators

    insights: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)

    calculated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Reference time the calculation used (UTC)"
    )


class PersonFailure(BaseModel):
    """A record that failed validation; the rest of the batch is unaffected."""

    index: int = Field(..., ge=0, description="Position in the input batch")
    user_id: Optional[str] = None
    field: str
    message: str


class ComponentCoverage(BaseModel):
    personality_alignment: int = 0
    cognitive_readiness: int = 0
    motivational_alignment: int = 0
    behavioral_predictors: int = 0


class DepartmentRollup(BaseModel):
    """Simple aggregates over one department's per-person results."""

    department_id: str
    name: str = ""
    people_count: int = 0
    overall_score: float = 0.0
    components: PsychometricComponents = Field(default_factory=PsychometricComponents)
    component_coverage: ComponentCoverage = Field(default_factory=ComponentCoverage)
    average_data_completeness: float = 0.0
    average_predictive_confidence: float = 0.0
    grade_distribution: Dict[str, int] = Field(default_factory=dict)
    at_risk_count: int = 0

    # Learning-record indicators
    individual_competency: float = 0.0
    collaboration_score: float = 0.0
    risk_factors: List[RiskFactor] = Field(default_factory=list)
    risk_multiplier: float = 1.0
    risk_adjusted_competency: float = 0.0


class OrganizationRollup(DepartmentRollup):
    """Organization-wide aggregates; department_id holds the organization id."""

    weighted_overall_score: float = 0.0
    department_count: int = 0
    failed_count: int = 0
    trend: TrendDirection = TrendDirection.STABLE
    projected_score: float = 0.0


class PopulationReadinessResult(BaseModel):
    results: List[ReadinessCalculationResult] = Field(default_factory=list)
    failures: List[PersonFailure] = Field(default_factory=list)
    overall_score: float = Field(default=0.0, ge=0, le=100)
    departments: List[DepartmentRollup] = Field(default_factory=list)
    organization: OrganizationRollup
