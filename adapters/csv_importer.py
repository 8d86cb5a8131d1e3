"""
CSV importer for the PREP/GO Planner.
Turns line-oriented text (as uploaded by a user) into Activities.

Expected column order:
    activity id, activity name, description, strategy, PREP date, GO date
"""

import csv
import io
import logging
from typing import List, Optional

from pydantic import ValidationError

from models import Activity
from scheduler.calendar import CalendarFacts
from scheduler.dates import normalize
from scheduler.sequencer import parse_id

logger = logging.getLogger(__name__)

HEADER_HINTS = ("activity id", "name", "description")
MIN_COLUMNS = 6


class CSVImportError(ValueError):
    """Raised when an upload contains no usable rows."""
    pass


def _looks_like_header(row: List[str]) -> bool:
    first = ",".join(row).lower()
    return any(hint in first for hint in HEADER_HINTS)


def parse_csv(
    content: str,
    calendar: Optional[CalendarFacts] = None,
    fallback_prefix: str = "A"
) -> List[Activity]:
    """
    Parse CSV text into Activities.

    - An optional header row is skipped.
    - Blank lines and rows with fewer than six columns are skipped.
    - PREP/GO dates are normalized to DD/MM/YYYY where possible.
    - Ids without a trailing sequence number become '{fallback_prefix}{row}'.
    """
    calendar = calendar or CalendarFacts()
    reader = csv.reader(io.StringIO(content), skipinitialspace=True)
    rows = [[cell.strip() for cell in row] for row in reader if any(cell.strip() for cell in row)]

    if rows and _looks_like_header(rows[0]):
        rows = rows[1:]

    activities = []
    for i, values in enumerate(rows):
        if len(values) < MIN_COLUMNS:
            logger.warning(f"Skipping row {i + 1}: expected {MIN_COLUMNS} columns, got {len(values)}")
            continue

        prep_date = normalize(values[4])
        go_date = normalize(values[5])
        activity_id = values[0]
        if parse_id(activity_id) is None:
            replacement = f"{fallback_prefix}{len(activities) + 1}"
            logger.info(f"Row {i + 1}: id {activity_id!r} has no sequence number, using {replacement}")
            activity_id = replacement

        try:
            activities.append(Activity(
                activity_id=activity_id,
                activity_name=values[1],
                description=values[2],
                strategy=values[3],
                prep_date=prep_date,
                go_date=go_date,
                **calendar.flags_for(prep_date, go_date)
            ))
        except ValidationError as e:
            logger.warning(f"Skipping invalid row {i + 1}: {e.json()}")
            continue

    if not activities:
        raise CSVImportError("No valid data found in CSV file")

    logger.info(f"Loaded {len(activities)} activities from CSV")
    return activities
