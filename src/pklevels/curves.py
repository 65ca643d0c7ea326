# src/pklevels/curves.py
from numbers import Integral

import numpy as np

from .types import CurvePoint, PharmacokineticProfile
from .models.first_order import decay_fraction


def sample_decay_curve(half_life_hours: float, total_hours: float,
                       sample_count: int) -> list[CurvePoint]:
    """
    Sample the single-dose decay curve for plotting.

    Returns exactly sample_count points evenly spaced from hour 0 to
    total_hours (both ends included), each with its remaining percentage.

    Raises:
      ValueError if sample_count < 2 (no step size for a single point).
    """
    if not isinstance(sample_count, Integral):
        raise ValueError(f"sample_count must be an integer (got {type(sample_count).__name__}).")
    if sample_count < 2:
        raise ValueError(f"sample_count must be >= 2 (got {sample_count}).")

    # linspace pins the last sample to total_hours exactly
    hours = np.linspace(0.0, float(total_hours), int(sample_count))
    return [CurvePoint(hour=float(h), percentage=decay_fraction(half_life_hours, float(h)))
            for h in hours]


def decay_chart(profile: PharmacokineticProfile, points: int = 10,
                half_lives: float = 5.0) -> list[CurvePoint]:
    """
    Curve for a profile's decay chart: half_lives multiples of the half-life
    (5 half-lives leaves ~3% of the dose).
    """
    total_hours = profile.half_life_hours * half_lives
    return sample_decay_curve(profile.half_life_hours, total_hours, points)
