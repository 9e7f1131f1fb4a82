"""
scoring/data_mapping.py

Validation and data-mapping contracts at the engine boundary.

- map_user_data()            — raw mapping → PsychometricUserData, or RecordValidationError
- transform_learning_record() — LMS + HR system records → LearningRecord
- build_learning_records()   — join LMS and HR users by id

The engine trusts nothing upstream: pydantic validation errors are converted
into RecordValidationError carrying the user id, the offending field path and
a message, so the aggregator can isolate the failure to one person.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Mapping, Optional, Sequence, Union

import structlog
from pydantic import BaseModel, Field, ValidationError

from readiness_engine.core.exceptions import RecordValidationError
from readiness_engine.models.learning import LearningRecord, PsychometricUserData
from readiness_engine.scoring.utils import days_since

logger = structlog.get_logger(__name__)

DEFAULT_PERFORMANCE_RATING = 3.0

# Weekly logins estimated from how recently the user last logged in
# (max days since login, logins per week), checked in order.
_LOGIN_FREQUENCY_STEPS = (
    (1, 5.0),
    (3, 3.0),
    (7, 1.0),
)
_INFREQUENT_LOGINS = 0.5

# Role keyword → certifications required; first keyword found in the title wins.
_REQUIRED_CERTIFICATIONS = {
    "manager": 3,
    "senior": 2,
    "lead": 3,
    "junior": 1,
    "analyst": 2,
    "engineer": 2,
}
_DEFAULT_REQUIRED_CERTIFICATIONS = 1


# ─── Source system records ───

class Enrollment(BaseModel):
    course_id: str
    course_name: str = ""
    enrollment_date: datetime
    completion_date: Optional[datetime] = None
    progress_percentage: float = Field(..., ge=0, le=100)
    time_spent: float = Field(default=0.0, ge=0, description="Minutes")


class AssessmentAttempt(BaseModel):
    assessment_id: str
    score: float = Field(..., ge=0, le=100)
    completed_at: datetime
    attempts: int = Field(default=1, ge=1)


class Certification(BaseModel):
    certification_id: str
    earned_at: datetime
    expires_at: Optional[datetime] = None
    is_active: bool = True


class LMSUserData(BaseModel):
    """Learning management system export for one user."""

    id: str = Field(..., min_length=1)
    email: str = ""
    department: str = ""
    role: str = ""
    enrollments: List[Enrollment] = Field(default_factory=list)
    assessments: List[AssessmentAttempt] = Field(default_factory=list)
    certifications: List[Certification] = Field(default_factory=list)
    last_login_date: datetime
    total_session_time: float = Field(default=0.0, ge=0, description="Minutes")


class ReviewGoal(BaseModel):
    goal_id: str
    description: str = ""
    status: Literal["not_started", "in_progress", "completed"] = "not_started"
    completion_percentage: float = Field(..., ge=0, le=100)


class PerformanceReview(BaseModel):
    review_date: datetime
    overall_rating: float = Field(..., ge=0, le=5)
    goals: List[ReviewGoal] = Field(default_factory=list)


class SkillAssessment(BaseModel):
    skill_name: str
    current_level: float = Field(..., ge=0, le=5)
    target_level: float = Field(default=0, ge=0, le=5)
    last_assessed: Optional[datetime] = None


class FeedbackReceived(BaseModel):
    rating: float = Field(..., ge=0, le=5)
    date: datetime


class EngagementMetrics(BaseModel):
    team_collaborations: int = Field(default=0, ge=0)
    mentoring_sessions: int = Field(default=0, ge=0)
    feedback_given: int = Field(default=0, ge=0)
    feedback_received: List[FeedbackReceived] = Field(default_factory=list)


class HRUserData(BaseModel):
    """HR system export for one user."""

    user_id: str = Field(..., min_length=1)
    department_id: str = Field(..., min_length=1)
    role_title: str = ""
    hire_date: Optional[datetime] = None
    performance_reviews: List[PerformanceReview] = Field(default_factory=list)
    skill_assessments: List[SkillAssessment] = Field(default_factory=list)
    engagement: EngagementMetrics = Field(default_factory=EngagementMetrics)


# ─── Validation ───

def _recover_user_id(raw: Any) -> Optional[str]:
    if not isinstance(raw, Mapping):
        return None
    record = raw.get("learning_record")
    if isinstance(record, Mapping) and isinstance(record.get("user_id"), str):
        return record["user_id"] or None
    user_id = raw.get("user_id")
    return user_id if isinstance(user_id, str) and user_id else None


def _record_error(user_id: Optional[str], exc: ValidationError, prefix: str = "") -> RecordValidationError:
    """First pydantic error as a RecordValidationError with a dotted field path."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "record"
    if prefix:
        field = f"{prefix}.{field}"
    logger.warning(
        "record_validation_failed",
        user_id=user_id,
        field=field,
        error_count=exc.error_count(),
    )
    return RecordValidationError(user_id, field, first.get("msg", "invalid value"))


def map_user_data(raw: Union[Mapping[str, Any], PsychometricUserData]) -> PsychometricUserData:
    """
    Validate one person's raw record.

    Args:
        raw: Mapping shaped like PsychometricUserData, or an already
             validated instance (returned unchanged).

    Returns:
        PsychometricUserData

    Raises:
        RecordValidationError: missing required field or out-of-range value.
    """
    if isinstance(raw, PsychometricUserData):
        return raw

    user_id = _recover_user_id(raw)
    if not isinstance(raw, Mapping):
        raise RecordValidationError(user_id, "record", f"expected an object, got {type(raw).__name__}")

    try:
        return PsychometricUserData.model_validate(raw)
    except ValidationError as exc:
        raise _record_error(user_id, exc) from exc


# ─── LMS + HR mapping ───

def login_frequency(last_login_date: datetime, as_of: Optional[datetime] = None) -> float:
    """Estimated logins per week from last-login recency."""
    days = days_since(last_login_date, as_of)
    for max_days, per_week in _LOGIN_FREQUENCY_STEPS:
        if days <= max_days:
            return per_week
    return _INFREQUENT_LOGINS


def required_certifications(role: str) -> int:
    title = role.lower()
    for keyword, count in _REQUIRED_CERTIFICATIONS.items():
        if keyword in title:
            return count
    return _DEFAULT_REQUIRED_CERTIFICATIONS


def transform_learning_record(
    lms: LMSUserData,
    hr: HRUserData,
    as_of: Optional[datetime] = None,
) -> LearningRecord:
    """
    Combine LMS and HR exports into the engine's learning record.

    Raises:
        RecordValidationError: the combined values fail LearningRecord validation.
    """
    enrollments = lms.enrollments
    total = len(enrollments)
    completed = sum(1 for e in enrollments if e.completion_date is not None)
    in_progress = sum(1 for e in enrollments if e.completion_date is None and e.progress_percentage > 0)
    average_completion = sum(e.progress_percentage for e in enrollments) / total if total else 0.0
    hours = sum(e.time_spent for e in enrollments) / 60

    scores = [a.score for a in lms.assessments]

    reviews = sorted(hr.performance_reviews, key=lambda r: r.review_date, reverse=True)
    rating = reviews[0].overall_rating if reviews else DEFAULT_PERFORMANCE_RATING

    goals = [g for review in hr.performance_reviews for g in review.goals]
    goal_rate = sum(g.completion_percentage for g in goals) / len(goals) if goals else 0.0

    engagement = hr.engagement

    try:
        return LearningRecord(
            user_id=lms.id,
            department_id=hr.department_id,
            role=hr.role_title,
            enrolled_courses=total,
            completed_courses=completed,
            in_progress_courses=in_progress,
            average_completion=average_completion,
            total_learning_hours=hours,
            last_activity_date=lms.last_login_date,
            assessment_scores=scores,
            certifications_earned=sum(1 for c in lms.certifications if c.is_active),
            certifications_required=required_certifications(hr.role_title),
            performance_rating=rating,
            goal_completion_rate=goal_rate,
            skill_ratings={s.skill_name: s.current_level for s in hr.skill_assessments},
            login_frequency=login_frequency(lms.last_login_date, as_of),
            forum_participation=0,
            peer_interactions=engagement.team_collaborations + engagement.mentoring_sessions,
            feedback_scores=[f.rating for f in engagement.feedback_received],
        )
    except ValidationError as exc:
        raise _record_error(lms.id, exc, prefix="learning_record") from exc


def build_learning_records(
    lms_users: Sequence[LMSUserData],
    hr_users: Sequence[HRUserData],
    as_of: Optional[datetime] = None,
) -> List[LearningRecord]:
    """
    Join LMS and HR exports by user id, in LMS order.

    Raises:
        RecordValidationError: an LMS user has no HR record, or the joined
            values fail LearningRecord validation.
    """
    hr_by_id: Dict[str, HRUserData] = {hr.user_id: hr for hr in hr_users}
    records = []
    for lms in lms_users:
        hr = hr_by_id.get(lms.id)
        if hr is None:
            raise RecordValidationError(lms.id, "hr_data", f"HR data not found for user {lms.id}")
        records.append(transform_learning_record(lms, hr, as_of))
    return records
