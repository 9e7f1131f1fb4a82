"""Application configuration with comprehensive validation."""
from typing import Optional, Literal, List, Dict
from functools import lru_cache
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# COMPONENT NAMES
# =============================================================================
# Keys used by the aggregator when blending component scores. Order matters:
# it is the order components are reported and evaluated by the insight rules.
# =============================================================================

COMPONENT_KEYS: List[str] = [
    "personality_alignment",
    "cognitive_readiness",
    "motivational_alignment",
    "behavioral_predictors",
]

COMPONENT_LABELS: Dict[str, str] = {
    "personality_alignment": "Personality alignment",
    "cognitive_readiness": "Cognitive readiness",
    "motivational_alignment": "Motivational alignment",
    "behavioral_predictors": "Behavioral predictors",
}


def get_component_label(key: str) -> str:
    """
    Get the display label for a component key.

    Args:
        key: Component key (e.g., "cognitive_readiness")

    Returns:
        Human-readable label, or the key itself if not mapped
    """
    return COMPONENT_LABELS.get(key, key)


class Settings(BaseSettings):
    """Application settings with production-grade validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Psychometric Readiness Engine"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"
    DEMO_MAX_USERS: int = Field(default=500, ge=1, le=10000)

    # Component weights (must sum to 1.0)
    W_PERSONALITY: float = Field(default=0.30, ge=0.0, le=1.0)
    W_COGNITIVE: float = Field(default=0.25, ge=0.0, le=1.0)
    W_MOTIVATIONAL: float = Field(default=0.25, ge=0.0, le=1.0)
    W_BEHAVIORAL: float = Field(default=0.20, ge=0.0, le=1.0)

    # Personality alignment
    DEFAULT_ROLE_SCORE: float = Field(default=75.0, ge=0.0, le=100.0)
    TRAIT_DISTANCE_PENALTY: float = Field(default=1.5, ge=0.0, le=10.0)
    LEADERSHIP_BONUS_THRESHOLD: float = Field(default=70.0, ge=0.0, le=100.0)
    ADAPTABILITY_BONUS_THRESHOLD: float = Field(default=80.0, ge=0.0, le=100.0)
    RESILIENCE_BONUS_THRESHOLD: float = Field(default=75.0, ge=0.0, le=100.0)
    DERIVED_TRAIT_BONUS: float = Field(default=5.0, ge=0.0, le=20.0)
    DERIVED_TRAIT_BONUS_CAP: float = Field(default=15.0, ge=0.0, le=50.0)

    # Cognitive readiness (engagement decay)
    COGNITIVE_RECENCY_WINDOW_DAYS: int = Field(default=7, ge=0, le=90)
    COGNITIVE_RECENCY_PEAK: float = Field(default=1.05, ge=0.5, le=1.5)
    COGNITIVE_DECAY_FLOOR: float = Field(default=0.75, gt=0.0, le=1.0)
    COGNITIVE_DECAY_HALF_LIFE_DAYS: float = Field(default=30.0, gt=0.0, le=365.0)
    ENGAGEMENT_FACTOR_CAP: float = Field(default=1.10, ge=1.0, le=1.5)
    SESSION_OBSERVATION_WEEKS: float = Field(default=12.0, gt=0.0, le=104.0)
    FREQUENT_SESSIONS_PER_WEEK: float = Field(default=2.0, ge=0.0)
    INFREQUENT_SESSIONS_PER_WEEK: float = Field(default=0.5, ge=0.0)
    FREQUENT_PLAY_MULTIPLIER: float = Field(default=1.05, ge=1.0, le=1.5)
    INFREQUENT_PLAY_MULTIPLIER: float = Field(default=0.95, ge=0.5, le=1.0)

    # Motivational alignment (recency bonus)
    VISION_RECENCY_WINDOW_DAYS: int = Field(default=30, ge=0, le=365)
    VISION_RECENCY_BONUS: float = Field(default=5.0, ge=0.0, le=20.0)
    VISION_BONUS_SPAN_DAYS: float = Field(default=60.0, gt=0.0, le=365.0)

    # Behavioral predictors
    PERFORMANCE_RATING_SCALE: float = Field(default=5.0, gt=0.0)
    HIGH_PERFORMER_THRESHOLD: float = Field(default=4.0, ge=0.0, le=5.0)
    HIGH_PERFORMER_BONUS_PCT: float = Field(default=0.10, ge=0.0, le=0.5)
    HIGH_PERFORMER_BONUS_CAP: float = Field(default=10.0, ge=0.0, le=25.0)

    # Predictive confidence (Spearman-Brown + dispersion)
    CONFIDENCE_BASE_RELIABILITY: float = Field(default=0.70, gt=0.0, lt=1.0)
    CONFIDENCE_SIGMA: float = Field(default=15.0, gt=0.0)
    CONFIDENCE_DISPERSION_LAMBDA: float = Field(default=0.5, ge=0.0, le=1.0)
    CONFIDENCE_DISPERSION_FLOOR: float = Field(default=0.5, gt=0.0, le=1.0)
    CONFIDENCE_FLOOR: float = Field(default=1.0, gt=0.0, le=100.0)

    # Grade thresholds
    GRADE_EXCELLENT: float = Field(default=90.0, ge=0, le=100)
    GRADE_GOOD: float = Field(default=75.0, ge=0, le=100)
    GRADE_MODERATE: float = Field(default=60.0, ge=0, le=100)
    GRADE_LOW: float = Field(default=40.0, ge=0, le=100)

    # Individual competency (learning record only; reported beside the overall score)
    COMPETENCY_HOURS_TARGET: float = Field(default=40.0, gt=0.0)
    COMPETENCY_DEFAULT_SKILL_SCORE: float = Field(default=50.0, ge=0, le=100)
    COMPETENCY_INACTIVITY_DAYS: int = Field(default=14, ge=1, le=365)
    COMPETENCY_INACTIVITY_PENALTY: float = Field(default=0.90, gt=0.0, le=1.0)

    # Rollup risk factors (multipliers applied to team competency)
    RISK_LOW_ENGAGEMENT_LOGINS: float = Field(default=3.0, ge=0.0)
    RISK_LOW_ENGAGEMENT_MULTIPLIER: float = Field(default=0.85, gt=0.0, le=1.0)
    RISK_LOW_PERFORMANCE_RATING: float = Field(default=3.0, ge=0.0, le=5.0)
    RISK_LOW_PERFORMANCE_MULTIPLIER: float = Field(default=0.90, gt=0.0, le=1.0)
    COLLABORATION_INTERACTIONS_TARGET: float = Field(default=10.0, gt=0.0)

    # Trend and projection
    TREND_CHANGE_THRESHOLD: float = Field(default=2.0, ge=0.0)
    PROJECTION_MONTHS: int = Field(default=6, ge=1, le=24)

    # Insight rules
    INSIGHT_HIGH_THRESHOLD: float = Field(default=80.0, ge=0, le=100)
    INSIGHT_LOW_THRESHOLD: float = Field(default=60.0, ge=0, le=100)
    RECOMMENDATION_THRESHOLD: float = Field(default=70.0, ge=0, le=100)
    STALE_ACTIVITY_DAYS: int = Field(default=90, ge=1, le=730)

    # Observability
    SERVICE_NAME: Optional[str] = "readiness-engine"

    @model_validator(mode="after")
    def validate_component_weights(self):
        """Validate component weights sum to 1.0."""
        total = sum(self.component_weights.values())
        if abs(total - 1.0) > 0.001:
            raise ValueError(f"Component weights must sum to 1.0, got {total}")
        return self

    @model_validator(mode="after")
    def validate_decay_bounds(self):
        """Decay floor must sit below the recency peak."""
        if self.COGNITIVE_DECAY_FLOOR >= self.COGNITIVE_RECENCY_PEAK:
            raise ValueError("COGNITIVE_DECAY_FLOOR must be < COGNITIVE_RECENCY_PEAK")
        return self

    @model_validator(mode="after")
    def validate_grade_thresholds(self):
        """Grade thresholds must be strictly descending."""
        grades = [self.GRADE_EXCELLENT, self.GRADE_GOOD, self.GRADE_MODERATE, self.GRADE_LOW]
        if any(a <= b for a, b in zip(grades, grades[1:])):
            raise ValueError("Grade thresholds must be strictly descending")
        return self

    @property
    def component_weights(self) -> Dict[str, float]:
        """Get component weights keyed by component name."""
        return {
            "personality_alignment": self.W_PERSONALITY,
            "cognitive_readiness": self.W_COGNITIVE,
            "motivational_alignment": self.W_MOTIVATIONAL,
            "behavioral_predictors": self.W_BEHAVIORAL,
        }


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
