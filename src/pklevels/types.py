# src/pklevels/types.py
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Optional, Union

# All kinetic time is in HOURS; wall-clock instants are datetimes.
Status = Literal["therapeutic", "sub_therapeutic", "cleared"]


@dataclass(frozen=True)
class Identified:
    """Grouping key for a dose that references a known substance."""
    substance_id: str


@dataclass(frozen=True)
class Unidentified:
    """Grouping key for a free-text dose; never has a profile."""
    name: str


SubstanceKey = Union[Identified, Unidentified]


@dataclass(frozen=True)
class DoseEvent:
    """
    A single logged administration.

    id             : opaque unique id of the log entry
    substance_id   : id of a known substance, or None for a free-text entry
    name           : display name as typed when the dose was logged
    timestamp      : when the dose was taken
    dosage         : amount as entered (e.g., "250mcg"), display only
    notes          : optional free-text notes
    injection_site : optional site label (e.g., "abdomen_left")
    """
    id: str
    substance_id: Optional[str]
    name: str
    timestamp: datetime
    dosage: str = ""
    notes: Optional[str] = None
    injection_site: Optional[str] = None

    @property
    def key(self) -> SubstanceKey:
        if self.substance_id is not None:
            return Identified(self.substance_id)
        return Unidentified(self.name)


@dataclass(frozen=True)
class PharmacokineticProfile:
    """
    Per-substance kinetic constants.

    Only half_life_hours enters the math; the strings are for display.
    """
    half_life_hours: float
    peak_time: str = ""
    half_life: str = ""
    clearance_time: str = ""


@dataclass(frozen=True)
class ConcentrationLevel:
    substance_name: str
    substance_id: Optional[str]
    percentage: float
    status: Status
    last_dose_time: datetime
    next_dose_optimal: Optional[str]
    half_life_hours: float


@dataclass(frozen=True)
class CurvePoint:
    hour: float
    percentage: float
