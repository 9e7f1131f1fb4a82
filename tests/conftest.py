# tests/conftest.py

"""
Pytest Fixtures - Shared test configuration and data for scorers, models and APIs

REFERENCE PERSON (tests/factories.py), scored at AS_OF = 2025-06-01 12:00 UTC:
- Personality:   every trait inside the Manager ranges, all derived bonuses → 100.00
- Telemetry:     base 74.9, engagement factor capped at 1.10 → 82.39
- Vision board:  base 75.35, updated 5 days ago (+5) → 80.35
- Learning:      baseline 74 at rating 3.5; 76.8 at rating 4.2
- Competency:    learning 82, assessments 80, certifications 66.67, skills 75 → 77.63
"""

import pytest
from fastapi.testclient import TestClient

from readiness_engine.config import Settings
from readiness_engine.main import app
from readiness_engine.scoring.readiness_aggregator import ReadinessAggregator

from tests.factories import (
    AS_OF,
    make_goal_artifact,
    make_learning_record,
    make_personality,
    make_telemetry,
    make_user,
    user_data,
)


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# SETTINGS / ENGINE FIXTURES
# =============================================================================

@pytest.fixture
def as_of():
    """Fixed reference time so recency-dependent scores are reproducible."""
    return AS_OF


@pytest.fixture
def test_settings():
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def aggregator(test_settings):
    return ReadinessAggregator(test_settings)


# =============================================================================
# PROFILE FIXTURES
# =============================================================================

@pytest.fixture
def personality():
    return make_personality()


@pytest.fixture
def telemetry():
    return make_telemetry()


@pytest.fixture
def goal_artifact():
    return make_goal_artifact()


@pytest.fixture
def learning_record():
    return make_learning_record()


# =============================================================================
# PERSON FIXTURES
# =============================================================================

@pytest.fixture
def full_manager():
    """Manager with every source present, rating 4.2, recent activity."""
    return make_user(performance_rating=4.2)


@pytest.fixture
def learning_only_user():
    """Only the mandatory learning record."""
    return make_user(personality=False, cognitive=False, goal_artifact=False)


@pytest.fixture
def raw_population():
    """Three valid raw records across two departments plus one invalid record."""
    invalid = user_data(user_id="user-bad")
    invalid["learning_record"]["performance_rating"] = 7
    return [
        user_data(user_id="user-a", department_id="engineering"),
        invalid,
        user_data(user_id="user-b", department_id="sales", role="Sales Representative",
                  personality=False),
        user_data(user_id="user-c", department_id="engineering",
                  cognitive=False, goal_artifact=False),
    ]
