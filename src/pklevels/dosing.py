# src/pklevels/dosing.py
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .types import DoseEvent

logger = logging.getLogger(__name__)


class DoseRecord(BaseModel):
    """
    One dose-log entry as persisted by the app (camelCase JSON, ISO-8601
    timestamp). Unknown keys are ignored.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str
    substance_id: Optional[str] = Field(default=None, alias="peptideId")
    name: str
    dosage: str = ""
    timestamp: datetime
    notes: Optional[str] = None
    injection_site: Optional[str] = Field(default=None, alias="injectionSite")


def dose_event_from_record(record: Mapping[str, Any]) -> DoseEvent:
    """
    Validate one stored record and turn it into a DoseEvent.
    Naive timestamps are read as UTC.

    Raises pydantic.ValidationError (a ValueError) for a malformed record.
    """
    rec = DoseRecord.model_validate(record)
    ts = rec.timestamp
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return DoseEvent(
        id=rec.id,
        substance_id=rec.substance_id,
        name=rec.name,
        timestamp=ts,
        dosage=rec.dosage,
        notes=rec.notes,
        injection_site=rec.injection_site,
    )


def doses_from_records(records: Iterable[Mapping[str, Any]]) -> list[DoseEvent]:
    """Convert a list of stored records, keeping their order."""
    return [dose_event_from_record(r) for r in records]


def load_dose_log(path: str | Path) -> list[DoseEvent]:
    """
    Read a dose log saved as a JSON array of records.
    Example file:
      [{"id": "lx1-a9", "peptideId": "bpc-157", "name": "BPC-157",
        "dosage": "250mcg", "timestamp": "2025-03-01T08:00:00.000Z"}]
    """
    with open(path, "r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"{path}: dose log must be a JSON array (got {type(raw).__name__}).")
    doses = doses_from_records(raw)
    logger.info("Loaded %d doses from %s", len(doses), path)
    return doses
