# src/pklevels/metrics.py
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .types import Status

# Status bands on the capped aggregate percentage (upper bounds are strict)
THERAPEUTIC_ABOVE_PCT = 40.0
SUB_THERAPEUTIC_ABOVE_PCT = 10.0

# Redose when ~30% of the last single dose remains: 0.5 ** 1.7 ~= 0.31
REDOSE_HALF_LIVES = 1.7


def classify_status(percentage: float) -> Status:
    """Map an aggregate percentage onto its status band."""
    if percentage > THERAPEUTIC_ABOVE_PCT:
        return "therapeutic"
    if percentage > SUB_THERAPEUTIC_ABOVE_PCT:
        return "sub_therapeutic"
    return "cleared"


def next_dose_estimate(half_life_hours: float, hours_since_last_dose: float) -> Optional[str]:
    """
    Time left until the next optimal dose, or None when it is already due.

    The target is REDOSE_HALF_LIVES half-lives after the most recent dose.
    Under an hour is shown in minutes, under a day in whole hours, and
    anything longer in days with one decimal.
    """
    hours_until = REDOSE_HALF_LIVES * half_life_hours - hours_since_last_dose
    if not (hours_until > 0):
        return None
    return _humanize_hours(hours_until, days_from_h=24.0)


def format_duration(hours: float) -> str:
    """Axis label for a decay chart sample ("45 min", "12 hrs", "3.5 days")."""
    return _humanize_hours(hours, days_from_h=48.0)


def _humanize_hours(hours: float, days_from_h: float) -> str:
    if hours < 1:
        return f"{_round_half_up(hours * 60, '1')} min"
    if hours < days_from_h:
        return f"{_round_half_up(hours, '1')} hrs"
    return f"{_round_half_up(hours / 24.0, '0.1')} days"


def _round_half_up(x: float, places: str) -> Decimal:
    # Rounds the exact binary value of x, .5 upward (round() is banker's)
    return Decimal(x).quantize(Decimal(places), rounding=ROUND_HALF_UP)
