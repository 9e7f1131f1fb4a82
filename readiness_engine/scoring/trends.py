"""
scoring/trends.py

Direction and short-range projection of a monthly readiness history.

Trend:
    change = mean(last 3 months) − mean(the 3 months before them)
    improving if change > 2, declining if change < −2, otherwise stable
    (stable when there is no earlier window to compare against)

Projection:
    slope     = (last − first) / 2     over the last 3 months
    projected = clamp(current + slope × 6, 0, 100)
    (current score unchanged with fewer than 3 months of history)
"""

from decimal import Decimal
from typing import Optional, Sequence

from readiness_engine.config import Settings, get_settings
from readiness_engine.models.enumerations import TrendDirection
from readiness_engine.scoring.utils import Number, clamp, mean, quantize_score

WINDOW_MONTHS = 3


def calculate_trend(
    monthly_scores: Sequence[Number],
    settings: Optional[Settings] = None,
) -> TrendDirection:
    """
    Classify the recent direction of a monthly score history (oldest first).

    Examples:
        >>> calculate_trend([70, 71, 72, 76, 78, 80])
        <TrendDirection.IMPROVING: 'improving'>
    """
    settings = settings or get_settings()
    history = [Decimal(str(v)) for v in monthly_scores]
    recent = history[-WINDOW_MONTHS:]
    earlier = history[-2 * WINDOW_MONTHS:-WINDOW_MONTHS]
    if len(history) < 2 or not earlier:
        return TrendDirection.STABLE

    change = mean(recent) - mean(earlier)
    threshold = Decimal(str(settings.TREND_CHANGE_THRESHOLD))
    if change > threshold:
        return TrendDirection.IMPROVING
    if change < -threshold:
        return TrendDirection.DECLINING
    return TrendDirection.STABLE


def project_readiness(
    current_score: Number,
    monthly_scores: Sequence[Number],
    settings: Optional[Settings] = None,
) -> Decimal:
    """Linear projection of the current score from the last three months' slope."""
    settings = settings or get_settings()
    current = Decimal(str(current_score))
    if len(monthly_scores) < WINDOW_MONTHS:
        return quantize_score(clamp(current))

    recent = [Decimal(str(v)) for v in monthly_scores[-WINDOW_MONTHS:]]
    slope = (recent[-1] - recent[0]) / Decimal(WINDOW_MONTHS - 1)
    return quantize_score(clamp(current + slope * Decimal(settings.PROJECTION_MONTHS)))
