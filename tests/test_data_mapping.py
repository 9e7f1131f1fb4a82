# tests/test_data_mapping.py

"""
Model validation and data-mapping contract tests
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from readiness_engine.core.exceptions import RecordValidationError
from readiness_engine.models.enumerations import ProfileSource
from readiness_engine.models.learning import LearningRecord, PsychometricUserData
from readiness_engine.models.results import PsychometricComponents
from readiness_engine.scoring.data_mapping import (
    HRUserData,
    LMSUserData,
    build_learning_records,
    login_frequency,
    map_user_data,
    required_certifications,
    transform_learning_record,
)

from tests.factories import (
    AS_OF,
    days_ago,
    goal_artifact_data,
    learning_record_data,
    make_personality,
    personality_data,
    user_data,
)


# =============================================================================
# MODEL VALIDATION
# =============================================================================

class TestLearningRecord:

    def test_average_assessment_derived(self):
        record = LearningRecord(**learning_record_data(assessment_scores=[60, 70, 80]))
        assert record.average_assessment_score == 70.0

    def test_explicit_average_kept(self):
        record = LearningRecord(**learning_record_data(average_assessment_score=55))
        assert record.average_assessment_score == 55

    def test_rating_out_of_range(self):
        with pytest.raises(ValidationError):
            LearningRecord(**learning_record_data(performance_rating=5.5))

    def test_assessment_score_out_of_range(self):
        with pytest.raises(ValidationError):
            LearningRecord(**learning_record_data(assessment_scores=[50, 101]))

    def test_skill_rating_out_of_range(self):
        with pytest.raises(ValidationError):
            LearningRecord(**learning_record_data(skill_ratings={"analysis": 6}))

    def test_department_required(self):
        data = learning_record_data()
        del data["department_id"]
        with pytest.raises(ValidationError):
            LearningRecord(**data)


class TestProfiles:

    def test_personality_is_immutable(self):
        profile = make_personality()
        with pytest.raises(ValidationError):
            profile.openness = 10

    def test_trait_out_of_range(self):
        with pytest.raises(ValidationError):
            PsychometricUserData.model_validate(
                {"learning_record": learning_record_data(), "personality": personality_data(openness=120)}
            )

    def test_vision_board_update_before_creation_rejected(self):
        data = user_data(personality=False, cognitive=False)
        data["goal_artifact"] = goal_artifact_data(
            created_date=days_ago(10), last_updated_date=days_ago(20),
        )
        with pytest.raises(ValidationError):
            PsychometricUserData.model_validate(data)

    def test_vision_board_dates_compared_in_utc(self):
        data = user_data(personality=False, cognitive=False)
        data["goal_artifact"] = goal_artifact_data(
            created_date=datetime(2025, 1, 1, 10, 0, tzinfo=timezone(timedelta(hours=5))),
            last_updated_date=datetime(2025, 1, 1, 6, 0),
        )
        user = PsychometricUserData.model_validate(data)
        assert user.goal_artifact is not None

    def test_profile_owner_must_match(self):
        data = user_data(cognitive=False, goal_artifact=False)
        data["personality"]["user_id"] = "someone-else"
        with pytest.raises(ValidationError):
            PsychometricUserData.model_validate(data)

    def test_present_sources(self):
        user = PsychometricUserData.model_validate(user_data(personality=False))
        assert user.present_sources() == frozenset({
            ProfileSource.COGNITIVE_TELEMETRY, ProfileSource.GOAL_ARTIFACT,
        })

    def test_components_sentinel(self):
        components = PsychometricComponents(behavioral_predictors=0.0)
        assert components.computed() == {"behavioral_predictors": 0.0}
        assert "behavioral_predictors" not in components.missing()


# =============================================================================
# map_user_data
# =============================================================================

class TestMapUserData:

    def test_valid_record(self):
        user = map_user_data(user_data())
        assert isinstance(user, PsychometricUserData)
        assert user.user_id == "user-001"

    def test_validated_instance_passes_through(self):
        user = PsychometricUserData.model_validate(user_data())
        assert map_user_data(user) is user

    def test_missing_required_field(self):
        data = user_data()
        del data["learning_record"]["performance_rating"]
        with pytest.raises(RecordValidationError) as exc_info:
            map_user_data(data)
        assert exc_info.value.user_id == "user-001"
        assert exc_info.value.field == "learning_record.performance_rating"

    def test_missing_learning_record(self):
        with pytest.raises(RecordValidationError) as exc_info:
            map_user_data({"personality": personality_data()})
        assert exc_info.value.user_id is None
        assert exc_info.value.field == "learning_record"

    def test_out_of_range_nested_value(self):
        data = user_data()
        data["cognitive_telemetry"]["cognitive_metrics"]["decision_quality"] = -1
        with pytest.raises(RecordValidationError) as exc_info:
            map_user_data(data)
        assert exc_info.value.field == "cognitive_telemetry.cognitive_metrics.decision_quality"

    def test_error_message_names_user(self):
        with pytest.raises(RecordValidationError, match="user-001"):
            map_user_data(user_data(performance_rating=-2))


# =============================================================================
# LMS + HR MAPPING
# =============================================================================

@pytest.fixture
def lms_user():
    return LMSUserData(
        id="u-100",
        email="ada@example.com",
        enrollments=[
            {"course_id": "c1", "enrollment_date": days_ago(90), "completion_date": days_ago(30),
             "progress_percentage": 100, "time_spent": 180},
            {"course_id": "c2", "enrollment_date": days_ago(40),
             "progress_percentage": 50, "time_spent": 60},
            {"course_id": "c3", "enrollment_date": days_ago(5),
             "progress_percentage": 0, "time_spent": 0},
        ],
        assessments=[
            {"assessment_id": "a1", "score": 70, "completed_at": days_ago(20)},
            {"assessment_id": "a2", "score": 90, "completed_at": days_ago(10)},
        ],
        certifications=[
            {"certification_id": "cert1", "earned_at": days_ago(100), "is_active": True},
            {"certification_id": "cert2", "earned_at": days_ago(800), "is_active": False},
        ],
        last_login_date=days_ago(2),
    )


@pytest.fixture
def hr_user():
    return HRUserData(
        user_id="u-100",
        department_id="finance",
        role_title="Senior Analyst",
        performance_reviews=[
            {"review_date": days_ago(400), "overall_rating": 3.0,
             "goals": [{"goal_id": "g1", "completion_percentage": 40}]},
            {"review_date": days_ago(30), "overall_rating": 4.5,
             "goals": [{"goal_id": "g2", "completion_percentage": 80, "status": "in_progress"}]},
        ],
        skill_assessments=[{"skill_name": "modeling", "current_level": 4}],
        engagement={
            "team_collaborations": 6,
            "mentoring_sessions": 2,
            "feedback_received": [{"rating": 4, "date": days_ago(15)}],
        },
    )


class TestTransformLearningRecord:

    def test_course_metrics(self, lms_user, hr_user):
        record = transform_learning_record(lms_user, hr_user, AS_OF)
        assert record.enrolled_courses == 3
        assert record.completed_courses == 1
        assert record.in_progress_courses == 1
        assert record.average_completion == 50.0
        assert record.total_learning_hours == 4.0

    def test_assessment_and_certifications(self, lms_user, hr_user):
        record = transform_learning_record(lms_user, hr_user, AS_OF)
        assert record.average_assessment_score == 80.0
        assert record.certifications_earned == 1
        # "senior" is matched before "analyst"
        assert record.certifications_required == 2

    def test_performance_from_latest_review(self, lms_user, hr_user):
        record = transform_learning_record(lms_user, hr_user, AS_OF)
        assert record.performance_rating == 4.5
        assert record.goal_completion_rate == 60.0

    def test_default_rating_without_reviews(self, lms_user, hr_user):
        hr = hr_user.model_copy(update={"performance_reviews": []})
        assert transform_learning_record(lms_user, hr, AS_OF).performance_rating == 3.0

    def test_engagement_fields(self, lms_user, hr_user):
        record = transform_learning_record(lms_user, hr_user, AS_OF)
        assert record.peer_interactions == 8
        assert record.feedback_scores == [4]
        assert record.skill_ratings == {"modeling": 4}
        assert record.login_frequency == 3.0
        assert record.department_id == "finance"

    def test_missing_hr_data_raises(self, lms_user):
        with pytest.raises(RecordValidationError) as exc_info:
            build_learning_records([lms_user], [], AS_OF)
        assert exc_info.value.field == "hr_data"

    def test_invalid_joined_record_raises_record_error(self, lms_user, hr_user):
        hr = hr_user.model_copy(update={"role_title": "x" * 300})
        with pytest.raises(RecordValidationError) as exc_info:
            build_learning_records([lms_user], [hr], AS_OF)
        assert exc_info.value.user_id == "u-100"
        assert exc_info.value.field == "learning_record.role"

    def test_build_joins_by_id(self, lms_user, hr_user):
        records = build_learning_records([lms_user], [hr_user], AS_OF)
        assert [r.user_id for r in records] == ["u-100"]


class TestMappingHelpers:

    @pytest.mark.parametrize("days,expected", [(0, 5.0), (1, 5.0), (3, 3.0), (7, 1.0), (8, 0.5)])
    def test_login_frequency(self, days, expected):
        assert login_frequency(AS_OF - timedelta(days=days), AS_OF) == expected

    @pytest.mark.parametrize("role,expected", [
        ("Engineering Manager", 3),
        ("Junior Developer", 1),
        ("Data Engineer", 2),
        ("Team Lead", 3),
        ("Receptionist", 1),
    ])
    def test_required_certifications(self, role, expected):
        assert required_certifications(role) == expected
