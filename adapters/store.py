"""
Persistent store adapter.

The store keeps dates as ISO 'YYYY-MM-DD'; the planner works in DD/MM/YYYY.
Translation happens here and nowhere else.
"""

import logging
from typing import Any, Dict, List, Sequence

from models import Activity
from scheduler.dates import from_iso, parse_strict, to_iso

logger = logging.getLogger(__name__)


class StoreFormatError(ValueError):
    """Raised when a collection cannot be written to the store as-is."""
    pass


def to_store_record(activity: Activity) -> Dict[str, Any]:
    prep = to_iso(activity.prep_date)
    go = to_iso(activity.go_date)
    if prep is None or go is None:
        raise StoreFormatError(f"Activity {activity.activity_id} has dates that are not DD/MM/YYYY")
    return {
        "activity_id": activity.activity_id,
        "activity_name": activity.activity_name,
        "description": activity.description,
        "strategy": activity.strategy,
        "prep_date": prep,
        "go_date": go,
    }


def from_store_record(record: Dict[str, Any]) -> Activity:
    return Activity(
        activity_id=record.get("activity_id", ""),
        activity_name=record.get("activity_name", ""),
        description=record.get("description") or "",
        strategy=record.get("strategy") or "",
        prep_date=from_iso(record.get("prep_date", "")),
        go_date=from_iso(record.get("go_date", "")),
    )


def check_store_ready(activities: Sequence[Activity]) -> None:
    """Refuse to save when any PREP date falls after its GO date."""
    bad = [
        a.activity_id for a in activities
        if parse_strict(a.prep_date) and parse_strict(a.go_date)
        and parse_strict(a.prep_date) > parse_strict(a.go_date)
    ]
    if bad:
        raise StoreFormatError(
            f"Cannot save: PREP date after GO date for {', '.join(bad)}"
        )


def to_store_records(activities: Sequence[Activity]) -> List[Dict[str, Any]]:
    check_store_ready(activities)
    records = [to_store_record(a) for a in activities]
    logger.info(f"Prepared {len(records)} records for the store")
    return records
