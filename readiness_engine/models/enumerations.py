from enum import Enum

class LearningStyle(str, Enum):
    VISUAL = "visual"
    AUDITORY = "auditory"
    KINESTHETIC = "kinesthetic"
    READING = "reading"

class WorkStyle(str, Enum):
    COLLABORATIVE = "collaborative"
    INDEPENDENT = "independent"
    HYBRID = "hybrid"

class ComplexityPreference(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

class ProfileSource(str, Enum):
    PERSONALITY = "personality"                  # Big Five assessment
    COGNITIVE_TELEMETRY = "cognitive_telemetry"  # Gamified assessment
    GOAL_ARTIFACT = "goal_artifact"              # Vision board

class GradeLevel(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    LOW = "low"
    CRITICAL = "critical"

class InsightKind(str, Enum):
    INSIGHT = "insight"
    RECOMMENDATION = "recommendation"

class RiskFactor(str, Enum):
    LOW_ENGAGEMENT = "low_engagement"    # average weekly logins below threshold
    LOW_PERFORMANCE = "low_performance"  # average review rating below threshold

class TrendDirection(str, Enum):
    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"
