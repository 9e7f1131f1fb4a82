"""
Mock population generator for demos and tests.

Produces realistic, seeded PsychometricUserData with partial profile
coverage: roughly 70% of people have a personality assessment, 85% have
gamified telemetry and 60% have a vision board. The same seed and reference
time always yield the same population.
"""

import random
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, List, Optional

import structlog

from readiness_engine.models.enumerations import ComplexityPreference, LearningStyle, WorkStyle
from readiness_engine.models.learning import (
    DepartmentInfo,
    LearningRecord,
    OrganizationInfo,
    PsychometricUserData,
)
from readiness_engine.models.profiles import (
    BehavioralPatterns,
    CognitiveMetrics,
    CognitiveTelemetryProfile,
    EngagementPredictors,
    GameSessionData,
    GoalAlignment,
    GoalArtifactProfile,
    LearningPreferences,
    MotivationProfile,
    PersonalityProfile,
)
from readiness_engine.scoring.utils import as_utc, utc_now

logger = structlog.get_logger(__name__)

PERSONALITY_COVERAGE = 0.70
COGNITIVE_COVERAGE = 0.85
GOAL_ARTIFACT_COVERAGE = 0.60
TREND_MONTHS = 12

DEPARTMENT_ROLES: Dict[str, List[str]] = {
    "engineering": ["Software Engineer", "Senior Engineer", "Team Lead", "Manager"],
    "sales": ["Sales Representative", "Account Executive", "Manager"],
    "design": ["Designer", "Creative Director"],
    "operations": ["Analyst", "Individual Contributor", "Operations Coordinator", "Senior Manager"],
    "leadership": ["Director", "Senior Manager"],
}

DEPARTMENT_NAMES: Dict[str, str] = {
    "engineering": "Engineering",
    "sales": "Sales",
    "design": "Design",
    "operations": "Operations",
    "leadership": "Leadership",
}


@dataclass
class MockPopulation:
    users: List[PsychometricUserData] = field(default_factory=list)
    departments: List[DepartmentInfo] = field(default_factory=list)
    organization: OrganizationInfo = field(default_factory=OrganizationInfo)


class MockDataGenerator:
    """Seeded generator of mock people, departments and an organization."""

    def __init__(self, default_seed: Optional[int] = None):
        self.default_seed = default_seed

    def generate_population(
        self,
        count: int,
        seed: Optional[int] = None,
        as_of: Optional[datetime] = None,
    ) -> MockPopulation:
        """
        Args:
            count: Number of people (>= 0).
            seed: Random seed; falls back to the generator's default seed.
            as_of: Reference time dates are generated relative to.
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")

        rng = random.Random(seed if seed is not None else self.default_seed)
        reference = as_utc(as_of) if as_of is not None else utc_now()

        department_ids = list(DEPARTMENT_ROLES)
        users = []
        for i in range(count):
            department_id = department_ids[i % len(department_ids)]
            users.append(self.generate_user(rng, f"user-{i + 1:04d}", department_id, reference))

        head_counts = {d: 0 for d in department_ids}
        for user in users:
            head_counts[user.learning_record.department_id] += 1

        departments = [
            DepartmentInfo(department_id=d, name=DEPARTMENT_NAMES[d], head_count=head_counts[d])
            for d in department_ids
        ]

        logger.info("mock_population_generated", count=count, seed=seed)
        return MockPopulation(
            users=users,
            departments=departments,
            organization=OrganizationInfo(
                organization_id="demo-org",
                name="Demo Organization",
                monthly_trend=self._monthly_trend(rng),
            ),
        )

    def generate_user(
        self,
        rng: random.Random,
        user_id: str,
        department_id: str,
        as_of: datetime,
    ) -> PsychometricUserData:
        role = rng.choice(DEPARTMENT_ROLES[department_id])
        record = self._learning_record(rng, user_id, department_id, role, as_of)

        personality = None
        if rng.random() < PERSONALITY_COVERAGE:
            personality = self._personality(rng, user_id, as_of)

        telemetry = None
        if rng.random() < COGNITIVE_COVERAGE:
            telemetry = self._telemetry(rng, user_id, as_of)

        artifact = None
        if rng.random() < GOAL_ARTIFACT_COVERAGE:
            artifact = self._goal_artifact(rng, user_id, as_of)

        return PsychometricUserData(
            learning_record=record,
            personality=personality,
            cognitive_telemetry=telemetry,
            goal_artifact=artifact,
        )

    # ------------------------------------------------------------------

    @staticmethod
    def _monthly_trend(rng: random.Random, months: int = TREND_MONTHS) -> List[float]:
        """Random walk of past monthly readiness, oldest first."""
        score = rng.uniform(55, 75)
        history = []
        for _ in range(months):
            score = min(100.0, max(0.0, score + rng.uniform(-2, 3)))
            history.append(round(score, 1))
        return history

    @staticmethod
    def _score(rng: random.Random, low: float = 30, high: float = 95) -> float:
        return round(rng.uniform(low, high), 1)

    def _learning_record(self, rng, user_id, department_id, role, as_of) -> LearningRecord:
        enrolled = rng.randint(1, 12)
        completed = rng.randint(0, enrolled)
        return LearningRecord(
            user_id=user_id,
            department_id=department_id,
            role=role,
            enrolled_courses=enrolled,
            completed_courses=completed,
            in_progress_courses=enrolled - completed,
            average_completion=self._score(rng, 20, 100),
            total_learning_hours=round(rng.uniform(2, 120), 1),
            last_activity_date=as_of - timedelta(days=rng.randint(0, 60)),
            assessment_scores=[self._score(rng, 40, 100) for _ in range(rng.randint(0, 6))],
            certifications_earned=rng.randint(0, 3),
            certifications_required=rng.randint(1, 3),
            performance_rating=round(rng.uniform(2.0, 5.0), 1),
            goal_completion_rate=self._score(rng, 10, 100),
            skill_ratings={
                skill: round(rng.uniform(1, 5), 1)
                for skill in rng.sample(["communication", "analysis", "delivery", "leadership"], 2)
            },
            login_frequency=rng.choice([0.5, 1.0, 3.0, 5.0]),
            forum_participation=rng.randint(0, 20),
            peer_interactions=rng.randint(0, 40),
            feedback_scores=[round(rng.uniform(2, 5), 1) for _ in range(rng.randint(0, 4))],
        )

    def _personality(self, rng, user_id, as_of) -> PersonalityProfile:
        return PersonalityProfile(
            user_id=user_id,
            assessment_date=as_of - timedelta(days=rng.randint(1, 365)),
            openness=self._score(rng, 20, 100),
            conscientiousness=self._score(rng, 20, 100),
            extraversion=self._score(rng, 20, 100),
            agreeableness=self._score(rng, 20, 100),
            neuroticism=self._score(rng, 0, 80),
            learning_style=rng.choice(list(LearningStyle)),
            work_style=rng.choice(list(WorkStyle)),
            leadership_potential=self._score(rng),
            change_adaptability=self._score(rng),
            stress_resilience=self._score(rng),
        )

    def _telemetry(self, rng, user_id, as_of) -> CognitiveTelemetryProfile:
        return CognitiveTelemetryProfile(
            user_id=user_id,
            game_session_data=GameSessionData(
                total_sessions=rng.randint(1, 60),
                average_session_duration=round(rng.uniform(5, 45), 1),
                completion_rate=self._score(rng, 40, 100),
                last_played_date=as_of - timedelta(days=rng.randint(0, 150)),
            ),
            cognitive_metrics=CognitiveMetrics(
                problem_solving_speed=self._score(rng),
                decision_quality=self._score(rng),
                adaptability_index=self._score(rng),
                persistence_score=self._score(rng),
                collaboration_effectiveness=self._score(rng),
            ),
            behavioral_patterns=BehavioralPatterns(
                risk_tolerance=self._score(rng, 10, 90),
                competitiveness_drive=self._score(rng),
                help_seeking_behavior=self._score(rng),
                mentorship_inclination=self._score(rng),
                innovation_mindset=self._score(rng),
            ),
            learning_preferences=LearningPreferences(
                preferred_complexity=rng.choice(list(ComplexityPreference)),
                feedback_sensitivity=self._score(rng),
                autonomy_preference=self._score(rng),
                social_learning_preference=self._score(rng),
            ),
        )

    def _goal_artifact(self, rng, user_id, as_of) -> GoalArtifactProfile:
        created = as_of - timedelta(days=rng.randint(60, 400))
        updated = created + timedelta(days=rng.randint(0, (as_of - created).days))
        return GoalArtifactProfile(
            user_id=user_id,
            vision_board_id=f"vb-{user_id}",
            created_date=created,
            last_updated_date=updated,
            goal_alignment=GoalAlignment(
                personal_goals_count=rng.randint(0, 5),
                career_goals_count=rng.randint(0, 5),
                learning_goals_count=rng.randint(0, 5),
                alignment_with_org_vision=self._score(rng),
                goal_specificity=self._score(rng),
                timeline_realism=self._score(rng),
            ),
            motivation_profile=MotivationProfile(
                intrinsic_motivation=self._score(rng),
                extrinsic_motivation=self._score(rng),
                growth_mindset=self._score(rng),
                purpose_clarity=self._score(rng),
                ambition_level=self._score(rng),
            ),
            engagement_predictors=EngagementPredictors(
                likely_engagement_level=self._score(rng),
                retention_risk=self._score(rng, 5, 70),
                promotion_readiness=self._score(rng),
                learning_velocity=self._score(rng),
                leadership_aspiration=self._score(rng),
            ),
        )
