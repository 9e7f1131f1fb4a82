"""
scoring/personality_alignment.py

Scores a Big Five personality profile against a target role.

Formula:
    alignment_t = 100                              if trait t inside the role's optimal range
                = max(0, 100 − 1.5 × distance_t)   otherwise
    base        = Σ(alignment_t × w_t) / Σ w_t
    bonus       = min(cap, Σ 5 × emphasis_c  for each derived characteristic c above its threshold)
    score       = clamp(base + bonus, 0, 100)

Roles are matched by exact, case-sensitive name. Unknown roles receive the
configured default score (75) without computation.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Optional, Tuple

import structlog

from readiness_engine.config import Settings, get_settings
from readiness_engine.models.profiles import PersonalityProfile
from readiness_engine.scoring.utils import clamp, quantize_score, weighted_mean

logger = structlog.get_logger(__name__)

TRAITS = ("openness", "conscientiousness", "extraversion", "agreeableness", "neuroticism")
DERIVED = ("leadership_potential", "change_adaptability", "stress_resilience")


@dataclass(frozen=True)
class RoleProfile:
    """Optimal trait ranges, trait weights and derived-characteristic emphasis for a role."""
    archetype: str
    trait_ranges: Dict[str, Tuple[Decimal, Decimal]]
    trait_weights: Dict[str, Decimal]
    derived_emphasis: Dict[str, Decimal] = field(default_factory=dict)


def _profile(archetype, ranges, weights, emphasis) -> RoleProfile:
    return RoleProfile(
        archetype=archetype,
        trait_ranges={t: (Decimal(lo), Decimal(hi)) for t, (lo, hi) in ranges.items()},
        trait_weights={t: Decimal(w) for t, w in weights.items()},
        derived_emphasis={c: Decimal(e) for c, e in emphasis.items()},
    )


# Neuroticism ranges sit low: emotional stability is the desirable end.
_MANAGER = _profile(
    "manager",
    {"openness": (60, 85), "conscientiousness": (70, 95), "extraversion": (60, 90),
     "agreeableness": (65, 85), "neuroticism": (10, 40)},
    {"openness": "0.20", "conscientiousness": "0.30", "extraversion": "0.15",
     "agreeableness": "0.15", "neuroticism": "0.20"},
    {"leadership_potential": "1.0", "change_adaptability": "1.0", "stress_resilience": "1.0"},
)

_SENIOR_LEADER = _profile(
    "senior_leader",
    {"openness": (65, 90), "conscientiousness": (70, 95), "extraversion": (60, 90),
     "agreeableness": (60, 85), "neuroticism": (5, 35)},
    {"openness": "0.20", "conscientiousness": "0.25", "extraversion": "0.20",
     "agreeableness": "0.10", "neuroticism": "0.25"},
    {"leadership_potential": "1.0", "change_adaptability": "1.0", "stress_resilience": "1.0"},
)

_INDIVIDUAL_CONTRIBUTOR = _profile(
    "individual_contributor",
    {"openness": (50, 90), "conscientiousness": (60, 90), "extraversion": (30, 80),
     "agreeableness": (50, 80), "neuroticism": (10, 50)},
    {"openness": "0.25", "conscientiousness": "0.35", "extraversion": "0.10",
     "agreeableness": "0.10", "neuroticism": "0.20"},
    {"leadership_potential": "0.5", "change_adaptability": "1.0", "stress_resilience": "1.0"},
)

_CREATIVE = _profile(
    "creative",
    {"openness": (75, 95), "conscientiousness": (40, 80), "extraversion": (40, 85),
     "agreeableness": (40, 75), "neuroticism": (20, 60)},
    {"openness": "0.40", "conscientiousness": "0.20", "extraversion": "0.10",
     "agreeableness": "0.10", "neuroticism": "0.20"},
    {"leadership_potential": "0.5", "change_adaptability": "1.0", "stress_resilience": "0.5"},
)

_SALES = _profile(
    "sales",
    {"openness": (60, 85), "conscientiousness": (65, 90), "extraversion": (75, 95),
     "agreeableness": (70, 90), "neuroticism": (10, 35)},
    {"openness": "0.10", "conscientiousness": "0.25", "extraversion": "0.30",
     "agreeableness": "0.15", "neuroticism": "0.20"},
    {"leadership_potential": "0.5", "change_adaptability": "1.0", "stress_resilience": "1.0"},
)


@dataclass
class PersonalityAlignmentResult:
    """Output of PersonalityAlignmentScorer.calculate()."""
    score: Decimal                      # [0, 100] quantized to 0.01
    role: str
    role_matched: bool                  # False → default score used
    archetype: Optional[str] = None
    base_score: Optional[Decimal] = None
    bonus: Decimal = Decimal("0")
    trait_alignment: Dict[str, Decimal] = field(default_factory=dict)


class PersonalityAlignmentScorer:
    """
    Score personality-role alignment.

    The lookup table is keyed by exact role title.
    """

    ROLE_PROFILES: Dict[str, RoleProfile] = {
        "Senior Manager": _SENIOR_LEADER,
        "Director": _SENIOR_LEADER,
        "Manager": _MANAGER,
        "Team Lead": _MANAGER,
        "Individual Contributor": _INDIVIDUAL_CONTRIBUTOR,
        "Software Engineer": _INDIVIDUAL_CONTRIBUTOR,
        "Senior Engineer": _INDIVIDUAL_CONTRIBUTOR,
        "Analyst": _INDIVIDUAL_CONTRIBUTOR,
        "Sales Representative": _SALES,
        "Account Executive": _SALES,
        "Designer": _CREATIVE,
        "Creative Director": _CREATIVE,
    }

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        s = self.settings
        self.default_score = Decimal(str(s.DEFAULT_ROLE_SCORE))
        self.distance_penalty = Decimal(str(s.TRAIT_DISTANCE_PENALTY))
        self.bonus_points = Decimal(str(s.DERIVED_TRAIT_BONUS))
        self.bonus_cap = Decimal(str(s.DERIVED_TRAIT_BONUS_CAP))
        self.bonus_thresholds: Dict[str, Decimal] = {
            "leadership_potential": Decimal(str(s.LEADERSHIP_BONUS_THRESHOLD)),
            "change_adaptability": Decimal(str(s.ADAPTABILITY_BONUS_THRESHOLD)),
            "stress_resilience": Decimal(str(s.RESILIENCE_BONUS_THRESHOLD)),
        }

    def calculate(self, profile: PersonalityProfile, role: str) -> PersonalityAlignmentResult:
        """
        Calculate personality alignment for a role.

        Args:
            profile: Big Five profile (already validated)
            role: Role title, matched exactly against ROLE_PROFILES

        Returns:
            PersonalityAlignmentResult with score and breakdown

        Examples:
            >>> scorer = PersonalityAlignmentScorer()
            >>> scorer.calculate(profile, "Unknown Role").score
            Decimal('75.00')
        """
        role_profile = self.ROLE_PROFILES.get(role)
        if role_profile is None:
            logger.debug("personality_role_unmatched", role=role, default_score=float(self.default_score))
            return PersonalityAlignmentResult(
                score=quantize_score(self.default_score),
                role=role,
                role_matched=False,
            )

        alignment: Dict[str, Decimal] = {}
        for trait in TRAITS:
            value = Decimal(str(getattr(profile, trait)))
            alignment[trait] = self._factor_alignment(value, role_profile.trait_ranges[trait])

        base = weighted_mean(
            [alignment[t] for t in TRAITS],
            [role_profile.trait_weights[t] for t in TRAITS],
        )

        bonus = self._derived_bonus(profile, role_profile)
        score = quantize_score(clamp(base + bonus))

        logger.info(
            "personality_alignment_calculated",
            user_id=profile.user_id,
            role=role,
            archetype=role_profile.archetype,
            base_score=float(base),
            bonus=float(bonus),
            score=float(score),
        )

        return PersonalityAlignmentResult(
            score=score,
            role=role,
            role_matched=True,
            archetype=role_profile.archetype,
            base_score=quantize_score(base),
            bonus=bonus,
            trait_alignment=alignment,
        )

    def _factor_alignment(self, value: Decimal, optimal: Tuple[Decimal, Decimal]) -> Decimal:
        low, high = optimal
        if low <= value <= high:
            return Decimal("100")
        distance = low - value if value < low else value - high
        return max(Decimal("0"), Decimal("100") - distance * self.distance_penalty)

    def _derived_bonus(self, profile: PersonalityProfile, role_profile: RoleProfile) -> Decimal:
        bonus = Decimal("0")
        for characteristic in DERIVED:
            value = Decimal(str(getattr(profile, characteristic)))
            if value > self.bonus_thresholds[characteristic]:
                emphasis = role_profile.derived_emphasis.get(characteristic, Decimal("1"))
                bonus += self.bonus_points * emphasis
        return min(self.bonus_cap, bonus)

    def is_known_role(self, role: str) -> bool:
        return role in self.ROLE_PROFILES

    def interpret(self, score: float) -> str:
        """
        Interpret an alignment score into a display label.

        Args:
            score: Alignment score (0-100)

        Returns:
            Interpretation string
        """
        if score >= 85:
            return "Strong fit - traits sit inside the role's optimal ranges"
        elif score >= 70:
            return "Good fit - minor gaps on individual traits"
        elif score >= 55:
            return "Partial fit - coaching recommended on misaligned traits"
        else:
            return "Weak fit - significant trait misalignment for this role"
