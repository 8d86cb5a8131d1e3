"""
Date Format Engine.

The planner's canonical textual date is day-first, zero-padded DD/MM/YYYY.
This module parses that form strictly, coaxes lenient input into it, and
compares dates at day granularity.
"""

import logging
import re
from datetime import date as date_type, datetime, timedelta
from typing import Optional, Union

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

STRICT_PATTERN = re.compile(r"^(0[1-9]|[12][0-9]|3[01])/(0[1-9]|1[0-2])/(\d{4})$")
SEPARATORS = re.compile(r"[/\-.]")

# Two defaults differing in day, month and year (and weekday)
FILL_DEFAULTS = (datetime(1900, 1, 1), datetime(1904, 12, 28))

DateLike = Union[str, date_type]


def parse_strict(text: str) -> Optional[date_type]:
    """
    Parse DD/MM/YYYY. Returns None for anything else, including
    calendar-impossible combinations such as 31/02/2024.
    """
    if not isinstance(text, str):
        return None
    match = STRICT_PATTERN.match(text)
    if not match:
        return None

    day, month, year = (int(part) for part in match.groups())
    try:
        parsed = date_type(year, month, day)
    except ValueError:
        return None

    # Round-trip check: the constructed date must agree field-for-field
    if (parsed.day, parsed.month, parsed.year) != (day, month, year):
        return None
    return parsed


def is_valid_format(text: str) -> bool:
    return parse_strict(text) is not None


def format_date(value: date_type) -> str:
    """date -> 'DD/MM/YYYY'."""
    return f"{value.day:02d}/{value.month:02d}/{value.year:04d}"


def to_date(value: DateLike) -> Optional[date_type]:
    """Accept a date or a strict DD/MM/YYYY string."""
    if isinstance(value, date_type):
        return value
    return parse_strict(value)


def normalize(text: str) -> str:
    """
    Best-effort conversion of lenient input to DD/MM/YYYY.

    - '8/4/2025', '08-04-2025', '8.4.2025' -> '08/04/2025' (day-first)
    - '25/4/2025' first segment > 12 -> it is the day
    - '4/25/2025' second segment > 12 -> month-first fallback
    - '2025-04-08' four-digit first segment -> year-first
    - anything else goes to dateutil with dayfirst=True
    Never raises; returns the input unchanged when nothing parses.
    """
    if not isinstance(text, str):
        return text
    if is_valid_format(text):
        return text

    structural = _normalize_segments(text.strip())
    if structural is not None:
        return structural

    try:
        first, second = (
            date_parser.parse(text, dayfirst=True, default=default).date()
            for default in FILL_DEFAULTS
        )
    except (ValueError, OverflowError) as e:
        logger.debug(f"Could not normalize date {text!r}: {e}")
        return text

    # Missing parts are filled from the default; disagreement means a partial date
    if first != second:
        logger.debug(f"Could not normalize date {text!r}: incomplete day, month or year")
        return text
    return format_date(first)


def _normalize_segments(text: str) -> Optional[str]:
    """Structural parse of three separator-delimited numeric segments."""
    parts = SEPARATORS.split(text)
    if len(parts) != 3 or not all(p.strip().isdigit() for p in parts):
        return None

    p0, p1, p2 = (int(p) for p in parts)

    if len(parts[0].strip()) == 4:
        year, month, day = p0, p1, p2
    elif p0 > 12:
        day, month, year = p0, p1, p2
    elif p1 > 12:
        day, month, year = p1, p0, p2
    else:
        # Both segments could be a month: the locale is day/month/year
        day, month, year = p0, p1, p2

    if not (year > 1900 and 1 <= month <= 12 and 1 <= day <= 31):
        return None
    try:
        return format_date(date_type(year, month, day))
    except ValueError:
        return None


def is_before(first: str, second: str) -> bool:
    """
    Strict chronological comparison of two DD/MM/YYYY strings.
    If either side is not a valid date yet, returns True ("not yet comparable"),
    so incomplete rows never block an ordering decision.
    """
    a = parse_strict(first)
    b = parse_strict(second)
    if a is None or b is None:
        return True
    return a < b


def add_days(text: str, days: int) -> str:
    """Shift a DD/MM/YYYY string by calendar days; invalid input is returned unchanged."""
    parsed = parse_strict(text)
    if parsed is None:
        return text
    return format_date(parsed + timedelta(days=days))


def to_iso(text: str) -> Optional[str]:
    """'DD/MM/YYYY' -> 'YYYY-MM-DD' (None if not strict)."""
    parsed = parse_strict(text)
    return parsed.isoformat() if parsed else None


def from_iso(text: str) -> str:
    """'YYYY-MM-DD' -> 'DD/MM/YYYY'; leaves unparseable input as-is."""
    try:
        return format_date(date_type.fromisoformat(text))
    except (TypeError, ValueError):
        return text
