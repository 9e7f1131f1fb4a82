"""
Core Package - Psychometric Readiness Engine
readiness_engine/core/__init__.py

Core infrastructure: exceptions. Dependency getters live in
readiness_engine.core.dependencies and are imported from there, since they
pull in the scoring package which itself raises these exceptions.
"""

from readiness_engine.core.exceptions import (
    ConfigurationException,
    ReadinessEngineException,
    RecordValidationError,
)

__all__ = [
    "ConfigurationException",
    "ReadinessEngineException",
    "RecordValidationError",
]
