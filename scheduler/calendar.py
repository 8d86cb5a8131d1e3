"""
Calendar Fact Provider.

Answers two questions about a calendar day: is it a weekend, and is it a
public holiday (and where)? Holiday facts come from an injected HolidayTable
so new years or regions can be added without touching the resolver.
"""

from collections import defaultdict
from datetime import date as date_type
from typing import Dict, Iterable, List, Optional

from models import ALL_JURISDICTIONS, HolidayFact, HolidayInfo
from .dates import DateLike, to_date
from .holiday_data import AU_HOLIDAYS, DATASET_VERSION


class HolidayTable:
    """
    Versioned, read-only index of HolidayFacts keyed by date.
    Facts sharing a date are kept in registration order.
    """

    def __init__(self, facts: Iterable[HolidayFact], version: str = "custom"):
        self.version = version
        self._by_date: Dict[date_type, List[HolidayFact]] = defaultdict(list)
        for fact in facts:
            self._by_date[fact.date].append(fact)

    def lookup(self, day: date_type) -> List[HolidayFact]:
        """All facts registered for the date (possibly several regional ones)."""
        return list(self._by_date.get(day, []))

    def extend(self, facts: Iterable[HolidayFact], version: Optional[str] = None) -> "HolidayTable":
        """Return a new table with extra facts appended after the existing ones."""
        existing = [f for day in sorted(self._by_date) for f in self._by_date[day]]
        return HolidayTable(existing + list(facts), version or self.version)

    def __len__(self) -> int:
        return sum(len(v) for v in self._by_date.values())


def default_holiday_table() -> HolidayTable:
    return HolidayTable(AU_HOLIDAYS, version=DATASET_VERSION)


class CalendarFacts:
    """Weekend and holiday queries over a HolidayTable."""

    def __init__(self, holidays: Optional[HolidayTable] = None):
        self.holidays = holidays if holidays is not None else default_holiday_table()

    def is_weekend(self, value: DateLike) -> bool:
        """Saturday or Sunday. Unparseable input is not a weekend."""
        day = to_date(value)
        if day is None:
            return False
        return day.weekday() >= 5  # Sat=5, Sun=6

    def matching_holidays(self, value: DateLike, jurisdiction: str = ALL_JURISDICTIONS) -> List[HolidayFact]:
        day = to_date(value)
        if day is None:
            return []
        return [f for f in self.holidays.lookup(day) if f.applies_to(jurisdiction)]

    def is_holiday(self, value: DateLike, jurisdiction: str = ALL_JURISDICTIONS) -> bool:
        """True if any fact on that date is observed in the jurisdiction."""
        return bool(self.matching_holidays(value, jurisdiction))

    def holiday_info(self, value: DateLike, jurisdiction: str = ALL_JURISDICTIONS) -> HolidayInfo:
        """Descriptive fields of the earliest-registered matching fact."""
        matches = self.matching_holidays(value, jurisdiction)
        if not matches:
            return HolidayInfo(is_holiday=False)
        first = matches[0]
        return HolidayInfo(
            is_holiday=True,
            name=first.name,
            jurisdictions=sorted(first.jurisdictions)
        )

    def flags_for(self, prep_date: DateLike, go_date: DateLike) -> Dict[str, bool]:
        """Cached-flag values for an activity: either milestone counts."""
        return {
            "is_weekend": self.is_weekend(prep_date) or self.is_weekend(go_date),
            "is_holiday": self.is_holiday(prep_date) or self.is_holiday(go_date),
        }
