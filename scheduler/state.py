"""
Planner Result & Health Reporting.

This module acts as the 'Memory' of a single mutation and the auditor of a
whole collection:
1. MutationResult - what a planner operation did (or why it did not).
2. CollectionReport - row-by-row issues (weekend, holiday, clashes, sequence, ids).
"""

from collections import defaultdict
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from models import Activity, PrepDerivation
from .calendar import CalendarFacts
from .conflicts import conflicting_names, has_any_conflicts
from .constraints import ConstraintViolation
from .dates import is_before, parse_strict
from .sequencer import parse_id


class MutationStatus(str, Enum):
    """Outcome of a planner operation."""
    APPLIED = "applied"
    REJECTED = "rejected"      # hard-blocking violation
    CONFLICT = "conflict"      # paused; needs explicit confirmation


@dataclass
class MutationResult:
    """
    The new canonical collection plus everything a caller needs to explain
    the outcome. On REJECTED/CONFLICT 'activities' is the untouched input.
    """
    status: MutationStatus
    activities: List[Activity]
    violation: Optional[ConstraintViolation] = None
    conflicts: Dict[str, List[str]] = field(default_factory=dict)
    prep_adjustment: Optional[PrepDerivation] = None
    activity: Optional[Activity] = None

    @property
    def applied(self) -> bool:
        return self.status == MutationStatus.APPLIED

    @property
    def needs_confirmation(self) -> bool:
        return self.status == MutationStatus.CONFLICT

    @property
    def has_conflicts(self) -> bool:
        """Post-mutation health check of the returned collection."""
        return has_any_conflicts(self.activities)


@dataclass
class RowIssues:
    """Everything wrong with one row."""
    index: int
    activity_id: str
    activity_name: str
    issues: List[str] = field(default_factory=list)
    kinds: List[str] = field(default_factory=list)

    def add(self, kind: str, message: str) -> None:
        self.kinds.append(kind)
        if message:
            self.issues.append(message)


@dataclass
class CollectionReport:
    rows: List[RowIssues]
    total: int

    @property
    def flagged(self) -> List[RowIssues]:
        return [r for r in self.rows if r.issues]

    @property
    def is_healthy(self) -> bool:
        return not any(
            kind in ("conflict", "sequence") for row in self.rows for kind in row.kinds
        )

    def get_statistics(self) -> Dict[str, Any]:
        counts = defaultdict(int)
        for row in self.rows:
            for kind in set(row.kinds):
                counts[kind] += 1
        return {
            "total_rows": self.total,
            "flagged_rows": len(self.flagged),
            "weekend_rows": counts["weekend"],
            "holiday_rows": counts["holiday"],
            "conflict_rows": counts["conflict"],
            "sequence_rows": counts["sequence"],
            "unmanaged_ids": counts["unmanaged_id"],
            "healthy": self.is_healthy,
        }


def _describe_day(calendar: CalendarFacts, label: str, day: str) -> List[tuple]:
    found = []
    weekend = calendar.is_weekend(day)
    info = calendar.holiday_info(day)
    if weekend and info.is_holiday:
        found.append(("weekend", f"{label}: Weekend & {info.label}"))
        found.append(("holiday", ""))
    elif weekend:
        found.append(("weekend", f"{label}: Weekend"))
    elif info.is_holiday:
        found.append(("holiday", f"{label}: {info.label}"))
    return found


def summarize(collection: Sequence[Activity], calendar: Optional[CalendarFacts] = None) -> CollectionReport:
    """
    Generate a human-readable audit of the collection.
    Flags are recomputed from the dates, never read from the cached fields.
    """
    calendar = calendar or CalendarFacts()
    rows = []

    for index, activity in enumerate(collection):
        row = RowIssues(index, activity.activity_id, activity.activity_name)

        for label, day in (("PREP", activity.prep_date), ("GO", activity.go_date)):
            if parse_strict(day) is None:
                row.add("format", f"{label}: invalid date {day!r}")
                continue
            for kind, message in _describe_day(calendar, label, day):
                row.add(kind, message)
            names = conflicting_names(collection, day, index)
            if names:
                row.add("conflict", f"{label}: Conflict with: {', '.join(names)}")

        if not is_before(activity.prep_date, activity.go_date):
            row.add("sequence", "PREP date is not before GO date")

        if parse_id(activity.activity_id) is None:
            row.add("unmanaged_id", f"Id {activity.activity_id!r} has no sequence number")

        rows.append(row)

    return CollectionReport(rows=rows, total=len(collection))
