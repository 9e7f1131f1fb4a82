"""
scoring/confidence_calculator.py

Predictive confidence for a readiness score, plus an SEM-based interval.

Formula:
    ρ          = (n × r) / (1 + (n−1) × r)        — Spearman-Brown reliability
    factor     = clamp(1 − λ × σ_c / 50, 0.5, 1)   — agreement between components
    confidence = clamp(100 × ρ × factor, 1, 100)
    SEM        = σ × √(1 − ρ)
    CI         = [score − 1.96×SEM, score + 1.96×SEM]

Parameters (Settings):
    r   = 0.70  base reliability of one source
    σ   = 15.0  assumed score standard deviation
    λ   = 0.5   dispersion penalty
    n   = number of sources present (learning record + optional profiles)
    σ_c = standard deviation of the computed component scores
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from readiness_engine.config import Settings, get_settings
from readiness_engine.scoring.utils import RATIO_PLACES, clamp, quantize_score, std_dev

logger = logging.getLogger(__name__)


@dataclass
class PredictiveConfidenceResult:
    """Output of PredictiveConfidenceCalculator.calculate()."""
    confidence: Decimal         # (0, 100], quantized to 0.01
    reliability: Decimal        # ρ in (0, 1), quantized to 0.0001
    dispersion: Decimal         # σ_c of component scores
    dispersion_factor: Decimal  # [floor, 1]
    sem: Decimal                # quantized to 0.0001
    ci_lower: Decimal           # clamped to [0, 100], quantized to 0.01
    ci_upper: Decimal           # clamped to [0, 100], quantized to 0.01
    sources_present: int


class PredictiveConfidenceCalculator:
    """Calculate predictive confidence from source count and component agreement."""

    Z_95: float = 1.96

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def calculate(
        self,
        score: float,
        component_scores: List[float],
        sources_present: int,
    ) -> PredictiveConfidenceResult:
        """
        Args:
            score: Overall readiness score the interval is centred on.
            component_scores: Computed component scores (absent ones omitted).
            sources_present: Number of data sources on file (1-4).

        Returns:
            PredictiveConfidenceResult

        Examples:
            >>> calc = PredictiveConfidenceCalculator()
            >>> float(calc.calculate(80.0, [80.0], 1).confidence)
            70.0
        """
        if sources_present < 1:
            raise ValueError(f"sources_present must be >= 1, got {sources_present}")

        s = self.settings
        score_d = Decimal(str(score))
        n = Decimal(sources_present)
        r = Decimal(str(s.CONFIDENCE_BASE_RELIABILITY))

        # Spearman-Brown: ρ = (n × r) / (1 + (n − 1) × r)
        rho = (n * r) / (Decimal("1") + (n - Decimal("1")) * r)

        dispersion = std_dev([Decimal(str(c)) for c in component_scores])
        factor = clamp(
            Decimal("1") - Decimal(str(s.CONFIDENCE_DISPERSION_LAMBDA)) * dispersion / Decimal("50"),
            Decimal(str(s.CONFIDENCE_DISPERSION_FLOOR)),
            Decimal("1"),
        )

        confidence = quantize_score(clamp(
            Decimal("100") * rho * factor,
            Decimal(str(s.CONFIDENCE_FLOOR)),
            Decimal("100"),
        ))

        # SEM = σ × √(1 − ρ)
        sem_float = s.CONFIDENCE_SIGMA * math.sqrt(float(Decimal("1") - rho))
        margin = Decimal(str(self.Z_95 * sem_float))

        ci_lower = clamp(quantize_score(score_d - margin))
        ci_upper = clamp(quantize_score(score_d + margin))

        rho_quantized = rho.quantize(RATIO_PLACES)
        sem_quantized = Decimal(str(sem_float)).quantize(RATIO_PLACES)

        logger.info(
            "confidence_calculated",
            extra={
                "score": float(score_d),
                "sources_present": sources_present,
                "reliability": float(rho_quantized),
                "dispersion": float(dispersion),
                "dispersion_factor": float(factor),
                "confidence": float(confidence),
            },
        )

        return PredictiveConfidenceResult(
            confidence=confidence,
            reliability=rho_quantized,
            dispersion=dispersion,
            dispersion_factor=factor,
            sem=sem_quantized,
            ci_lower=ci_lower,
            ci_upper=ci_upper,
            sources_present=sources_present,
        )
