# src/pklevels/simulate.py
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Mapping, Optional

from .types import ConcentrationLevel, CurvePoint, DoseEvent, PharmacokineticProfile
from .config import Settings, get_settings
from .curves import decay_chart
from .dosing import load_dose_log
from .profiles import load_profiles
from .solvers import compute_concentrations


def current_levels(doses: Iterable[DoseEvent],
                   profiles: Mapping[str, PharmacokineticProfile],
                   now: Optional[datetime] = None) -> list[ConcentrationLevel]:
    """
    High-level wrapper for the concentration dashboard.
    now defaults to the current UTC time.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return compute_concentrations(doses, profiles, now)


def levels_from_files(dose_log_path: Optional[str | Path] = None,
                      profiles_path: Optional[str | Path] = None,
                      now: Optional[datetime] = None,
                      settings: Optional[Settings] = None) -> list[ConcentrationLevel]:
    """
    Load the dose log and the profile table from disk and compute levels.
    Paths not given fall back to the configured ones.
    """
    settings = settings or get_settings()
    doses = load_dose_log(dose_log_path or settings.dose_log_path)
    profiles = load_profiles(profiles_path or settings.profiles_path)
    return current_levels(doses, profiles, now=now)


def chart_for(profile: PharmacokineticProfile,
              settings: Optional[Settings] = None) -> list[CurvePoint]:
    """Decay chart for a profile with the configured sampling."""
    settings = settings or get_settings()
    return decay_chart(profile, points=settings.chart_points,
                       half_lives=settings.chart_half_lives)
