"""
scoring/recency.py

Shared time-decay curve used for cognitive engagement decay and the
vision-board recency bonus.

Shape:
    days <= window           → peak
    "exponential" past window → floor + (peak − floor) × 0.5^((days − window) / span)
    "linear" past window      → peak − (peak − floor) × min(1, (days − window) / span)

The curve is monotonic non-increasing in days and bounded in [floor, peak].
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from readiness_engine.core.exceptions import ConfigurationException
from readiness_engine.scoring.utils import RATIO_PLACES

CurveShape = Literal["exponential", "linear"]


@dataclass(frozen=True)
class RecencyCurve:
    """Monotonic decay from peak (inside the window) toward floor."""
    window_days: int
    peak: Decimal
    floor: Decimal
    span_days: Decimal          # half-life (exponential) or fade length (linear)
    shape: CurveShape = "exponential"

    def __post_init__(self):
        if self.floor > self.peak:
            raise ConfigurationException(
                f"RecencyCurve floor ({self.floor}) must not exceed peak ({self.peak})"
            )
        if self.span_days <= 0:
            raise ConfigurationException("RecencyCurve span_days must be > 0")
        if self.window_days < 0:
            raise ConfigurationException("RecencyCurve window_days must be >= 0")

    @classmethod
    def build(
        cls,
        window_days: int,
        peak: float,
        floor: float,
        span_days: float,
        shape: CurveShape = "exponential",
    ) -> "RecencyCurve":
        return cls(
            window_days=window_days,
            peak=Decimal(str(peak)),
            floor=Decimal(str(floor)),
            span_days=Decimal(str(span_days)),
            shape=shape,
        )

    def value(self, days: int) -> Decimal:
        """Curve value for the given staleness in whole days."""
        if days <= self.window_days:
            return self.peak

        overdue = Decimal(days - self.window_days)
        spread = self.peak - self.floor

        if self.shape == "linear":
            fraction = min(Decimal("1"), overdue / self.span_days)
            result = self.peak - spread * fraction
        else:
            decay = Decimal("0.5") ** (overdue / self.span_days)
            result = self.floor + spread * decay

        # Quantizing can round toward the bounds, never past them
        return max(self.floor, min(self.peak, result.quantize(RATIO_PLACES)))
