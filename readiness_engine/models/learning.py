from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime
from typing import Optional, List, Dict, FrozenSet

from readiness_engine.models.enumerations import ProfileSource
from readiness_engine.models.profiles import (
    CognitiveTelemetryProfile,
    GoalArtifactProfile,
    PersonalityProfile,
)


class LearningRecord(BaseModel):
    """
    Baseline learning/performance record, always present for a person.
    """

    user_id: str = Field(..., min_length=1, description="Person identifier")
    department_id: str = Field(..., min_length=1, description="Owning department")
    role: str = Field(default="", max_length=255, description="Role title; empty when unspecified")

    # Learning progress
    enrolled_courses: int = Field(default=0, ge=0)
    completed_courses: int = Field(default=0, ge=0)
    in_progress_courses: int = Field(default=0, ge=0)
    average_completion: float = Field(..., ge=0, le=100, description="Average course completion %")
    total_learning_hours: float = Field(default=0.0, ge=0)
    last_activity_date: Optional[datetime] = None

    # Assessments & certifications
    assessment_scores: List[float] = Field(default_factory=list)
    average_assessment_score: Optional[float] = Field(
        default=None,
        ge=0,
        le=100,
        description="Mean of assessment_scores when omitted",
    )
    certifications_earned: int = Field(default=0, ge=0)
    certifications_required: int = Field(default=0, ge=0)

    # Performance
    performance_rating: float = Field(..., ge=0, le=5, description="Latest review rating (0-5)")
    goal_completion_rate: float = Field(default=0.0, ge=0, le=100)
    skill_ratings: Dict[str, float] = Field(default_factory=dict, description="Skill name -> rating 0-5")

    # Engagement proxies
    login_frequency: float = Field(default=0.0, ge=0, description="Logins per week")
    forum_participation: int = Field(default=0, ge=0)
    peer_interactions: int = Field(default=0, ge=0)
    feedback_scores: List[float] = Field(default_factory=list)

    @field_validator("assessment_scores")
    @classmethod
    def validate_assessment_scores(cls, v: List[float]) -> List[float]:
        for score in v:
            if not 0 <= score <= 100:
                raise ValueError(f"assessment score {score} outside [0, 100]")
        return v

    @field_validator("skill_ratings")
    @classmethod
    def validate_skill_ratings(cls, v: Dict[str, float]) -> Dict[str, float]:
        for skill, rating in v.items():
            if not 0 <= rating <= 5:
                raise ValueError(f"skill rating for '{skill}' ({rating}) outside [0, 5]")
        return v

    @field_validator("feedback_scores")
    @classmethod
    def validate_feedback_scores(cls, v: List[float]) -> List[float]:
        for score in v:
            if not 0 <= score <= 5:
                raise ValueError(f"feedback score {score} outside [0, 5]")
        return v

    @model_validator(mode="after")
    def derive_average_assessment(self):
        """Fill average_assessment_score from the score history when omitted."""
        if self.average_assessment_score is None:
            scores = self.assessment_scores
            self.average_assessment_score = sum(scores) / len(scores) if scores else 0.0
        return self


class PsychometricUserData(BaseModel):
    """
    Everything the engine knows about one person.

    Any subset of the three enrichment profiles may be absent.
    """

    learning_record: LearningRecord
    personality: Optional[PersonalityProfile] = None
    cognitive_telemetry: Optional[CognitiveTelemetryProfile] = None
    goal_artifact: Optional[GoalArtifactProfile] = None

    @property
    def user_id(self) -> str:
        return self.learning_record.user_id

    def present_sources(self) -> FrozenSet[ProfileSource]:
        """Which optional enrichment profiles are on file."""
        present = set()
        if self.personality is not None:
            present.add(ProfileSource.PERSONALITY)
        if self.cognitive_telemetry is not None:
            present.add(ProfileSource.COGNITIVE_TELEMETRY)
        if self.goal_artifact is not None:
            present.add(ProfileSource.GOAL_ARTIFACT)
        return frozenset(present)

    @model_validator(mode="after")
    def validate_profile_owner(self):
        """Enrichment profiles must belong to the same person as the learning record."""
        uid = self.learning_record.user_id
        for name in ("personality", "cognitive_telemetry", "goal_artifact"):
            profile = getattr(self, name)
            if profile is not None and profile.user_id != uid:
                raise ValueError(f"{name}.user_id '{profile.user_id}' does not match '{uid}'")
        return self


# Rollup metadata (optional, supplied by the surrounding layer)

class DepartmentInfo(BaseModel):
    department_id: str = Field(..., min_length=1)
    name: str = Field(default="", max_length=255)
    head_count: Optional[int] = Field(default=None, ge=0)


class OrganizationInfo(BaseModel):
    organization_id: str = Field(default="org", min_length=1)
    name: str = Field(default="", max_length=255)
    monthly_trend: List[float] = Field(
        default_factory=list,
        description="Past monthly organization readiness scores, oldest first",
    )

    @field_validator("monthly_trend")
    @classmethod
    def validate_monthly_trend(cls, v: List[float]) -> List[float]:
        for score in v:
            if not 0 <= score <= 100:
                raise ValueError(f"monthly score {score} outside [0, 100]")
        return v
