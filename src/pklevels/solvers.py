# src/pklevels/solvers.py
import logging
from datetime import datetime
from typing import Iterable, Mapping

from .types import ConcentrationLevel, DoseEvent, Identified, PharmacokineticProfile
from .models.first_order import decay_fraction
from .helpers import group_doses_by_substance, hours_between
from .metrics import classify_status, next_dose_estimate

logger = logging.getLogger(__name__)

MAX_PERCENTAGE = 100.0


def compute_concentrations(doses: Iterable[DoseEvent],
                           profiles: Mapping[str, PharmacokineticProfile],
                           now: datetime) -> list[ConcentrationLevel]:
    """
    Estimate the current active level of every tracked substance.

    Each dose decays independently with its substance's half-life and the
    remaining percentages of all doses of a substance are summed
    (superposition), then capped at 100%.

    Parameters
    ----------
    doses : Iterable[DoseEvent]
        Snapshot of the dose log. May mix substances and free-text entries.
    profiles : Mapping[str, PharmacokineticProfile]
        Kinetic profile per substance_id.
    now : datetime
        Reference instant for elapsed-time computation. Must be comparable
        with the dose timestamps (both aware or both naive).

    Returns
    -------
    list[ConcentrationLevel]
        One entry per substance that has a profile, highest percentage first.
        Free-text doses and substances without a profile are left out.
    """
    # 1) Group the dose log per substance
    groups = group_doses_by_substance(doses)

    results: list[ConcentrationLevel] = []
    for key, group in groups.items():
        first = group[0]
        if not isinstance(key, Identified):
            logger.debug("Skipping free-text substance %r (%d doses)", key.name, len(group))
            continue
        profile = profiles.get(key.substance_id)
        if profile is None:
            logger.debug("No profile for substance_id %r, skipping %d doses",
                         key.substance_id, len(group))
            continue

        # 2) Sum the decayed contribution of every dose
        total = 0.0
        last_dose_time = first.timestamp
        for d in group:
            total += decay_fraction(profile.half_life_hours, hours_between(d.timestamp, now))
            if d.timestamp > last_dose_time:
                last_dose_time = d.timestamp

        percentage = min(total, MAX_PERCENTAGE)

        results.append(ConcentrationLevel(
            substance_name=first.name,
            substance_id=first.substance_id,
            percentage=percentage,
            status=classify_status(percentage),
            last_dose_time=last_dose_time,
            next_dose_optimal=next_dose_estimate(profile.half_life_hours,
                                                 hours_between(last_dose_time, now)),
            half_life_hours=profile.half_life_hours,
        ))

    # 3) Most active first; sort is stable so ties keep input order
    results.sort(key=lambda lvl: lvl.percentage, reverse=True)
    logger.debug("Computed %d concentration levels from %d substance groups",
                 len(results), len(groups))
    return results
