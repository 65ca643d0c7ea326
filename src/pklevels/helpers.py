from collections import defaultdict
from datetime import datetime
from typing import Iterable

from .types import DoseEvent, SubstanceKey


def group_doses_by_substance(doses: Iterable[DoseEvent]) -> dict[SubstanceKey, list[DoseEvent]]:
    """
    Group doses by substance key, keeping first-seen order of keys and of
    doses within each group.
    """
    buckets: dict[SubstanceKey, list[DoseEvent]] = defaultdict(list)
    for d in doses:
        buckets[d.key].append(d)
    return dict(buckets)


def hours_between(earlier: datetime, later: datetime) -> float:
    """Signed difference later - earlier, in hours."""
    return (later - earlier).total_seconds() / 3600.0
