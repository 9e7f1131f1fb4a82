"""
Dependencies - Psychometric Readiness Engine
readiness_engine/core/dependencies.py

FastAPI dependency injection for the scoring engine.
"""

from functools import lru_cache

from readiness_engine.mock_data import MockDataGenerator
from readiness_engine.scoring.readiness_aggregator import ReadinessAggregator


@lru_cache()
def get_readiness_aggregator() -> ReadinessAggregator:
    """Get cached ReadinessAggregator instance."""
    return ReadinessAggregator()


@lru_cache()
def get_mock_data_generator() -> MockDataGenerator:
    """Get cached MockDataGenerator instance."""
    return MockDataGenerator()
