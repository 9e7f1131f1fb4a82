"""
scoring/insights.py

Rule table producing human-readable insights and recommendations.

Each rule is (name, kind, predicate, message) evaluated in table order over
an InsightContext. A summary insight always leads the insight list and a
fallback recommendation is appended when no recommendation rule fires, so
both lists are non-empty for any scored person.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple

from readiness_engine.config import COMPONENT_KEYS, Settings, get_component_label, get_settings
from readiness_engine.models.enumerations import GradeLevel, InsightKind

ACCELERATE_THRESHOLD = Decimal("85")
LEADERSHIP_CHANNEL_PERSONALITY = Decimal("75")
SPREAD_THRESHOLD = Decimal("15")


@dataclass
class InsightContext:
    """Everything the rules may look at for one person."""
    components: Dict[str, Decimal]          # computed components only
    overall: Decimal
    completeness: Decimal
    grade: GradeLevel
    days_since_play: Optional[int] = None
    days_since_vision_update: Optional[int] = None
    missing: List[str] = field(default_factory=list)

    def get(self, key: str) -> Optional[Decimal]:
        return self.components.get(key)


@dataclass(frozen=True)
class InsightRule:
    name: str
    kind: InsightKind
    predicate: Callable[[InsightContext], bool]
    message: Callable[[InsightContext], str]


def _at_least(key: str, threshold: Decimal) -> Callable[[InsightContext], bool]:
    return lambda ctx: ctx.get(key) is not None and ctx.get(key) >= threshold


def _below(key: str, threshold: Decimal) -> Callable[[InsightContext], bool]:
    return lambda ctx: ctx.get(key) is not None and ctx.get(key) < threshold


def _missing(key: str) -> Callable[[InsightContext], bool]:
    return lambda ctx: key in ctx.missing


def _fixed(text: str) -> Callable[[InsightContext], str]:
    return lambda ctx: text


def _spread(ctx: InsightContext) -> Tuple[str, str, Decimal]:
    ordered = sorted(ctx.components.items(), key=lambda kv: (-kv[1], COMPONENT_KEYS.index(kv[0])))
    strongest, weakest = ordered[0], ordered[-1]
    return strongest[0], weakest[0], strongest[1] - weakest[1]


def build_rules(settings: Settings) -> List[InsightRule]:
    """Build the ordered rule table from configured thresholds."""
    high = Decimal(str(settings.INSIGHT_HIGH_THRESHOLD))
    low = Decimal(str(settings.INSIGHT_LOW_THRESHOLD))
    rec = Decimal(str(settings.RECOMMENDATION_THRESHOLD))
    stale = settings.STALE_ACTIVITY_DAYS

    insight, recommend = InsightKind.INSIGHT, InsightKind.RECOMMENDATION

    rules = [
        # High components
        InsightRule("personality_high", insight, _at_least("personality_alignment", high),
                    _fixed("Strong personality-role alignment indicates high potential for success")),
        InsightRule("cognitive_high", insight, _at_least("cognitive_readiness", high),
                    _fixed("Excellent cognitive readiness suggests capacity for complex challenges")),
        InsightRule("motivation_high", insight, _at_least("motivational_alignment", high),
                    _fixed("High motivational alignment with organizational goals")),
        InsightRule("behavioral_high", insight, _at_least("behavioral_predictors", high),
                    _fixed("Behavioral indicators predict strong learning outcomes")),
    ]

    # Low components
    for key in COMPONENT_KEYS:
        rules.append(InsightRule(
            f"{key}_low", insight, _below(key, low),
            lambda ctx, key=key: (
                f"{get_component_label(key)} is a development area "
                f"({float(ctx.get(key)):.1f}/100)"
            ),
        ))

    rules.extend([
        InsightRule(
            "component_spread", insight,
            lambda ctx: len(ctx.components) >= 2 and _spread(ctx)[2] >= SPREAD_THRESHOLD,
            lambda ctx: (
                f"Strongest area is {get_component_label(_spread(ctx)[0]).lower()}; "
                f"weakest is {get_component_label(_spread(ctx)[1]).lower()}"
            ),
        ),
        InsightRule(
            "partial_data", insight,
            lambda ctx: bool(ctx.missing),
            lambda ctx: (
                f"Score based on {len(COMPONENT_KEYS) - len(ctx.missing)} of "
                f"{len(COMPONENT_KEYS)} data sources; missing "
                + ", ".join(get_component_label(k).lower() for k in ctx.missing)
            ),
        ),
        InsightRule(
            "stale_cognitive", insight,
            lambda ctx: ctx.days_since_play is not None and ctx.days_since_play >= stale,
            lambda ctx: (
                f"Cognitive telemetry is {ctx.days_since_play} days old; "
                "cognitive readiness may be understated"
            ),
        ),
        InsightRule(
            "stale_vision_board", insight,
            lambda ctx: ctx.days_since_vision_update is not None and ctx.days_since_vision_update >= stale,
            lambda ctx: f"Vision board has not been updated in {ctx.days_since_vision_update} days",
        ),

        # Recommendations for weak components
        InsightRule("personality_coaching", recommend, _below("personality_alignment", rec),
                    _fixed("Consider role adjustments or personality-based coaching for better alignment")),
        InsightRule("cognitive_training", recommend, _below("cognitive_readiness", rec),
                    _fixed("Implement cognitive training programs and problem-solving workshops")),
        InsightRule("vision_alignment", recommend, _below("motivational_alignment", rec),
                    _fixed("Facilitate vision alignment sessions and personal development planning")),
        InsightRule("behavioral_development", recommend, _below("behavioral_predictors", rec),
                    _fixed("Focus on behavioral development and emotional intelligence training")),

        # Cross-component opportunities
        InsightRule("accelerated_learning", recommend, _at_least("cognitive_readiness", ACCELERATE_THRESHOLD),
                    _fixed("Leverage high cognitive ability with accelerated learning programs")),
        InsightRule(
            "leadership_channel", recommend,
            lambda ctx: (
                _at_least("motivational_alignment", ACCELERATE_THRESHOLD)(ctx)
                and _at_least("personality_alignment", LEADERSHIP_CHANNEL_PERSONALITY)(ctx)
            ),
            _fixed("Channel high motivation into team leadership and collaboration roles"),
        ),

        # Missing sources
        InsightRule("collect_personality", recommend, _missing("personality_alignment"),
                    _fixed("Complete a Big Five personality assessment to improve score confidence")),
        InsightRule("collect_cognitive", recommend, _missing("cognitive_readiness"),
                    _fixed("Invite to gamified assessments to capture cognitive readiness")),
        InsightRule("collect_vision_board", recommend, _missing("motivational_alignment"),
                    _fixed("Encourage creating a vision board to capture goals and motivation")),

        # Staleness
        InsightRule(
            "refresh_cognitive", recommend,
            lambda ctx: ctx.days_since_play is not None and ctx.days_since_play >= stale,
            _fixed("Re-engage with gamified assessments to refresh cognitive data"),
        ),
        InsightRule(
            "refresh_vision_board", recommend,
            lambda ctx: ctx.days_since_vision_update is not None and ctx.days_since_vision_update >= stale,
            _fixed("Prompt a vision board review to refresh goal alignment"),
        ),
    ])
    return rules


class InsightGenerator:
    """Evaluate the rule table for one person."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.rules = build_rules(self.settings)

    def generate(self, ctx: InsightContext) -> Tuple[List[str], List[str]]:
        """
        Returns:
            (insights, recommendations), each in rule-table order.
        """
        insights = [self.summary(ctx)]
        recommendations: List[str] = []

        for rule in self.rules:
            if not rule.predicate(ctx):
                continue
            target = insights if rule.kind == InsightKind.INSIGHT else recommendations
            target.append(rule.message(ctx))

        if not recommendations:
            recommendations.append(self.fallback_recommendation(ctx))

        return insights, recommendations

    def summary(self, ctx: InsightContext) -> str:
        return (
            f"Overall readiness {float(ctx.overall):.1f}/100 ({ctx.grade.value}) "
            f"with {int(ctx.completeness * 100)}% data completeness"
        )

    def fallback_recommendation(self, ctx: InsightContext) -> str:
        if ctx.grade in (GradeLevel.EXCELLENT, GradeLevel.GOOD):
            return "Maintain the current development plan and reassess next cycle"
        return "Schedule a development conversation to agree on focus areas"
