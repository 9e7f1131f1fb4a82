"""
Decimal Utilities
readiness_engine/scoring/utils.py

Provides precision-safe decimal math shared by every scorer:
clamping, weighted blends that renormalize over present inputs,
dispersion, and elapsed-day arithmetic.
"""

from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Mapping, Optional, Union

Number = Union[int, float, Decimal]

SCORE_PLACES = Decimal("0.01")
RATIO_PLACES = Decimal("0.0001")


def to_decimal(value: Number, places: int = 4) -> Decimal:
    """Convert float to Decimal with explicit precision."""
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )


def quantize_score(value: Decimal) -> Decimal:
    """Round a score to 2 decimal places (ROUND_HALF_UP)."""
    return value.quantize(SCORE_PLACES, rounding=ROUND_HALF_UP)


def clamp(
    value: Decimal,
    min_val: Decimal = Decimal("0"),
    max_val: Decimal = Decimal("100"),
) -> Decimal:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def weighted_mean(values: List[Decimal], weights: List[Decimal]) -> Decimal:
    """
    Calculate weighted mean.

    Formula: Σ(value_i × weight_i) / Σ(weight_i)
    Returns Decimal("0") if all weights are zero.
    """
    if len(values) != len(weights):
        raise ValueError("values and weights must have same length")

    total_weight = sum(weights, Decimal("0"))
    if total_weight == 0:
        return Decimal("0")

    numerator = sum((v * w for v, w in zip(values, weights)), Decimal("0"))
    return (numerator / total_weight).quantize(RATIO_PLACES, rounding=ROUND_HALF_UP)


def blend_present(
    values: Mapping[str, Optional[Number]],
    weights: Mapping[str, Number],
) -> Decimal:
    """
    Weighted blend over the keys whose value is present.

    Absent keys (value None) drop out and their weight is redistributed
    proportionally over the present keys, so a missing input never counts
    as a zero. Keys without a weight are ignored.

    Formula: Σ_present(value_k × w_k) / Σ_present(w_k)
    Returns Decimal("0") if nothing is present.

    Examples:
        >>> blend_present({"a": 80, "b": None}, {"a": 0.6, "b": 0.4})
        Decimal('80.0000')
    """
    present_values: List[Decimal] = []
    present_weights: List[Decimal] = []
    # Iterate in weight order so the reduction is stable regardless of dict order
    for key, weight in weights.items():
        value = values.get(key)
        if value is None:
            continue
        present_values.append(Decimal(str(value)))
        present_weights.append(Decimal(str(weight)))

    return weighted_mean(present_values, present_weights)


def weighted_std_dev(
    values: List[Decimal],
    weights: List[Decimal],
    mean: Decimal,
) -> Decimal:
    """
    Calculate weighted standard deviation.

    Formula: sqrt(Σ(weight_i × (value_i - mean)²) / Σ(weight_i))
    """
    if len(values) != len(weights):
        raise ValueError("values and weights must have same length")

    total_weight = sum(weights, Decimal("0"))
    if total_weight == 0:
        return Decimal("0")

    variance_sum = sum((w * (v - mean) ** 2 for v, w in zip(values, weights)), Decimal("0"))
    variance = variance_sum / total_weight

    return variance.sqrt().quantize(RATIO_PLACES, rounding=ROUND_HALF_UP)


def std_dev(values: List[Decimal]) -> Decimal:
    """Population standard deviation (equal weights). 0 for fewer than 2 values."""
    if len(values) < 2:
        return Decimal("0")
    weights = [Decimal("1")] * len(values)
    mean = sum(values, Decimal("0")) / Decimal(len(values))
    return weighted_std_dev(values, weights, mean)


def mean(values: List[Decimal]) -> Decimal:
    """Index-ordered arithmetic mean; Decimal("0") for an empty list."""
    if not values:
        return Decimal("0")
    return sum(values, Decimal("0")) / Decimal(len(values))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def days_since(timestamp: datetime, as_of: Optional[datetime] = None) -> int:
    """
    Whole days elapsed between timestamp and as_of (default: now, UTC).

    Timestamps in the future count as 0 days.
    """
    reference = as_utc(as_of) if as_of is not None else utc_now()
    elapsed = reference - as_utc(timestamp)
    return max(0, elapsed.days)
