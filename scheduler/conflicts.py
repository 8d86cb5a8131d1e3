"""
Date Conflict Detection.

An activity "occupies" both its PREP date and its GO date. Two different
activities occupying the same day is a conflict. The activity being edited is
excluded, by position (int) or by durable id (str).
"""

from typing import List, Optional, Sequence, Union

from models import Activity
from .dates import is_before, normalize, parse_strict

Exclusion = Union[int, str, None]


def _is_excluded(activity: Activity, index: int, exclude: Exclusion) -> bool:
    if exclude is None:
        return False
    if isinstance(exclude, int) and not isinstance(exclude, bool):
        return index == exclude
    return activity.activity_id == exclude


def _occupies(activity: Activity, day: str) -> bool:
    return normalize(activity.prep_date) == day or normalize(activity.go_date) == day


def conflicting_activities(collection: Sequence[Activity], day: str, exclude: Exclusion = None) -> List[Activity]:
    """Every other activity whose PREP or GO date equals the day."""
    day = normalize(day) if day else day
    if not day or parse_strict(day) is None:
        return []
    return [
        activity for index, activity in enumerate(collection)
        if not _is_excluded(activity, index, exclude) and _occupies(activity, day)
    ]


def has_conflict(collection: Sequence[Activity], day: str, exclude: Exclusion = None) -> bool:
    return bool(conflicting_activities(collection, day, exclude))


def conflicting_names(collection: Sequence[Activity], day: str, exclude: Exclusion = None) -> List[str]:
    return [a.activity_name for a in conflicting_activities(collection, day, exclude)]


def row_has_problem(collection: Sequence[Activity], index: int) -> bool:
    """Row-level health: either milestone collides, or PREP is not before GO."""
    row = collection[index]
    return (
        has_conflict(collection, row.prep_date, index)
        or has_conflict(collection, row.go_date, index)
        or not is_before(row.prep_date, row.go_date)
    )


def has_any_conflicts(collection: Sequence[Activity]) -> bool:
    """Whole-collection health check, used after bulk operations."""
    return any(row_has_problem(collection, i) for i in range(len(collection)))


class ConflictDetector:
    """
    Object facade over the conflict functions, so the planner can hold one
    collaborator per concern.
    """

    def check_activity(self, collection: Sequence[Activity], activity: Activity, exclude: Exclusion = None) -> Optional[dict]:
        """
        Check both milestones of a candidate. Returns None if clear, otherwise
        {'prep_date': [names], 'go_date': [names]} with only the clashing fields.
        """
        clashes = {}
        for field_name in ("prep_date", "go_date"):
            names = conflicting_names(collection, getattr(activity, field_name), exclude)
            if names:
                clashes[field_name] = names
        return clashes or None
