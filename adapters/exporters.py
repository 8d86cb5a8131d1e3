"""
Exporters: CSV text and iCalendar (ICS) files.

Both read the textual dates as-is; nothing is re-derived here.
"""

import csv
import io
import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from models import Activity
from scheduler.dates import parse_strict

logger = logging.getLogger(__name__)

CSV_HEADER = ["Activity ID", "Activity Name", "Description", "Strategy", "PREP Date", "GO Date"]
PRODID = "-//PREP GO Planner//Activity Calendar//EN"
MAX_LINE_OCTETS = 75


def to_csv(activities: Sequence[Activity]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for a in activities:
        writer.writerow([a.activity_id, a.activity_name, a.description, a.strategy, a.prep_date, a.go_date])
    return buffer.getvalue()


def _ics_date(text: str) -> str:
    return parse_strict(text).strftime("%Y%m%d")


def _ics_escape(text: str) -> str:
    return (
        text.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\n")
        .replace("\r", "\n")
        .replace("\n", "\\n")
    )


def _ics_fold(line: str) -> List[str]:
    """Split a content line into chunks of at most 75 octets; continuations start with a space."""
    chunks = []
    current, size = "", 0
    for char in line:
        width = len(char.encode("utf-8"))
        if size + width > MAX_LINE_OCTETS:
            chunks.append(current)
            current, size = " ", 1
        current += char
        size += width
    chunks.append(current)
    return chunks


def generate_ics(
    activities: Sequence[Activity],
    calendar_name: str,
    stamp: Optional[datetime] = None
) -> str:
    """
    One all-day VEVENT per activity spanning PREP (DTSTART) to GO (DTEND).
    Rows whose dates are not valid DD/MM/YYYY are skipped.
    """
    stamp = stamp or datetime.now(timezone.utc)
    dtstamp = stamp.strftime("%Y%m%dT%H%M%SZ")

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{PRODID}",
        f"X-WR-CALNAME:{_ics_escape(calendar_name)}",
        "CALSCALE:GREGORIAN",
        "METHOD:PUBLISH",
    ]

    for a in activities:
        if parse_strict(a.prep_date) is None or parse_strict(a.go_date) is None:
            logger.error(f"Invalid date format for activity {a.activity_id}, skipping")
            continue

        description = f"{a.description}\nStrategy: {a.strategy}\nActivity ID: {a.activity_id}"
        lines += [
            "BEGIN:VEVENT",
            f"UID:{a.activity_id}-{_ics_date(a.prep_date)}-{int(stamp.timestamp())}@prepgo",
            f"SUMMARY:{_ics_escape(a.activity_name)}",
            f"DESCRIPTION:{_ics_escape(description)}",
            f"DTSTART;VALUE=DATE:{_ics_date(a.prep_date)}",
            f"DTEND;VALUE=DATE:{_ics_date(a.go_date)}",
            "SEQUENCE:0",
            f"DTSTAMP:{dtstamp}",
            "END:VEVENT",
        ]

    lines.append("END:VCALENDAR")
    folded = [chunk for line in lines for chunk in _ics_fold(line)]
    return "\r\n".join(folded) + "\r\n"
