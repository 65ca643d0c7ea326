# src/pklevels/profiles.py
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .types import PharmacokineticProfile

logger = logging.getLogger(__name__)


class ProfileRecord(BaseModel):
    """
    One entry of the reference table:
      {"halfLifeHours": 4.0, "peakTime": "15-30 min",
       "halfLife": "~4 hours", "clearanceTime": "~20 hours"}
    """
    model_config = ConfigDict(populate_by_name=True)

    half_life_hours: float = Field(alias="halfLifeHours", gt=0)
    peak_time: str = Field(default="", alias="peakTime")
    half_life: str = Field(default="", alias="halfLife")
    clearance_time: str = Field(default="", alias="clearanceTime")


def profile_from_record(substance_id: str, d: Any) -> PharmacokineticProfile:
    """
    Validate one table entry and build its profile.

    Raises pydantic.ValidationError (a ValueError) for a missing, null or
    non-positive halfLifeHours, or an entry that is not an object.
    """
    rec = ProfileRecord.model_validate(d)
    logger.debug("Profile %s: half-life %.2f h", substance_id, rec.half_life_hours)
    return PharmacokineticProfile(
        half_life_hours=rec.half_life_hours,
        peak_time=rec.peak_time,
        half_life=rec.half_life,
        clearance_time=rec.clearance_time,
    )


def profiles_from_records(table: Mapping[str, Any]) -> dict[str, PharmacokineticProfile]:
    """Convert a {substance_id: entry} table into profiles keyed by substance_id."""
    return {sid: profile_from_record(sid, d) for sid, d in table.items()}


def load_profiles(path: str | Path) -> dict[str, PharmacokineticProfile]:
    """Read the reference table from a JSON object file keyed by substance_id."""
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: profile table must be a JSON object (got {type(raw).__name__}).")
    profiles = profiles_from_records(raw)
    logger.info("Loaded %d pharmacokinetic profiles from %s", len(profiles), path)
    return profiles
