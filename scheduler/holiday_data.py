"""
Bundled public holiday dataset (Australia, 2024-2025).

Registration order matters: when several facts share a date, lookups report
the earliest-registered one first.
"""

from datetime import date

from models import HolidayFact

DATASET_VERSION = "au-2024.2025-r2"

_NATIONAL = {"ALL"}
_KINGS_BIRTHDAY = {"ACT", "NSW", "NT", "SA", "TAS", "VIC"}
_EASTER_SATURDAY = {"ACT", "NSW", "NT", "QLD", "SA", "VIC"}

_RAW = [
    # --- 2024 ---
    (date(2024, 1, 1), "New Year's Day", _NATIONAL),
    (date(2024, 1, 26), "Australia Day", _NATIONAL),
    (date(2024, 3, 29), "Good Friday", _NATIONAL),
    (date(2024, 3, 30), "Easter Saturday", _EASTER_SATURDAY),
    (date(2024, 4, 1), "Easter Monday", _NATIONAL),
    (date(2024, 4, 25), "Anzac Day", _NATIONAL),
    (date(2024, 5, 6), "May Day", {"NT"}),
    (date(2024, 5, 6), "Labour Day", {"QLD"}),
    (date(2024, 6, 10), "King's Birthday", _KINGS_BIRTHDAY),
    (date(2024, 11, 5), "Melbourne Cup", {"VIC"}),
    (date(2024, 12, 25), "Christmas Day", _NATIONAL),
    (date(2024, 12, 26), "Boxing Day", _NATIONAL),

    # --- 2025 ---
    (date(2025, 1, 1), "New Year's Day", _NATIONAL),
    (date(2025, 1, 26), "Australia Day", _NATIONAL),
    (date(2025, 1, 27), "Australia Day (observed)", _NATIONAL),
    (date(2025, 4, 18), "Good Friday", _NATIONAL),
    (date(2025, 4, 19), "Easter Saturday", _EASTER_SATURDAY),
    (date(2025, 4, 21), "Easter Monday", _NATIONAL),
    (date(2025, 4, 25), "Anzac Day", _NATIONAL),
    (date(2025, 5, 5), "May Day", {"NT"}),
    (date(2025, 5, 5), "Labour Day", {"QLD"}),
    (date(2025, 6, 9), "King's Birthday", _KINGS_BIRTHDAY),
    (date(2025, 11, 4), "Melbourne Cup", {"VIC"}),
    (date(2025, 12, 25), "Christmas Day", _NATIONAL),
    (date(2025, 12, 26), "Boxing Day", _NATIONAL),
]

AU_HOLIDAYS = [
    HolidayFact(date=day, name=name, jurisdictions=frozenset(codes))
    for day, name, codes in _RAW
]
