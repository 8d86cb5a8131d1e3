"""
Data models package for the PREP/GO Planner.

This package exports the three pillars of the data architecture:
1. Demand (Activity)
2. Rules (SchedulingPolicy, HolidayFact)
3. Output helpers (PrepDerivation, HolidayInfo)
"""

from .activity import (
    Activity,
    SchedulingPolicy,
    PrepDerivation
)

from .holiday import (
    ALL_JURISDICTIONS,
    HolidayFact,
    HolidayInfo
)

__all__ = [
    # --- Demand Models ---
    "Activity",

    # --- Rule Models ---
    "SchedulingPolicy",
    "HolidayFact",
    "ALL_JURISDICTIONS",

    # --- Output Models ---
    "PrepDerivation",
    "HolidayInfo",
]
