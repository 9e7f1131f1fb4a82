"""
Custom Exceptions - Psychometric Readiness Engine
readiness_engine/core/exceptions.py

Custom exception classes for the scoring engine.
"""

from typing import Optional


class ReadinessEngineException(Exception):
    """Base exception for readiness engine operations."""

    pass


class RecordValidationError(ReadinessEngineException):
    """A person's record is missing a required field or has an out-of-range value."""

    def __init__(self, user_id: Optional[str], field: str, message: str):
        self.user_id = user_id
        self.field = field
        self.message = message
        who = user_id if user_id else "<unknown user>"
        super().__init__(f"Invalid record for {who}: {field}: {message}")


class ConfigurationException(ReadinessEngineException):
    """Scoring configuration is inconsistent."""

    def __init__(self, message: str = "Invalid scoring configuration"):
        self.message = message
        super().__init__(message)
