"""
PREP/GO scheduling engine: date rules, clash detection, id sequencing and
collection mutations.
"""

from .calendar import CalendarFacts, HolidayTable, default_holiday_table
from .config import DEFAULT_CONFIG, EngineConfig
from .conflicts import ConflictDetector, conflicting_names, has_any_conflicts, has_conflict
from .constraints import ConstraintChecker, ConstraintViolation, ViolationKind
from .dates import add_days, format_date, is_before, normalize, parse_strict
from .engine import ActivityPlanner
from .sequencer import next_id, next_number, parse_id, renumber_after_mutation
from .state import CollectionReport, MutationResult, MutationStatus, summarize

__all__ = [
    "ActivityPlanner",
    "CalendarFacts",
    "HolidayTable",
    "default_holiday_table",
    "EngineConfig",
    "DEFAULT_CONFIG",
    "ConflictDetector",
    "conflicting_names",
    "has_any_conflicts",
    "has_conflict",
    "ConstraintChecker",
    "ConstraintViolation",
    "ViolationKind",
    "add_days",
    "format_date",
    "is_before",
    "normalize",
    "parse_strict",
    "next_id",
    "next_number",
    "parse_id",
    "renumber_after_mutation",
    "CollectionReport",
    "MutationResult",
    "MutationStatus",
    "summarize",
]
