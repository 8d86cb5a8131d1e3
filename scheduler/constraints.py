"""
Hard Constraint Validation Logic.

This module answers the binary question: "Can Activity X use Date Y?"
It enforces the scheduling policy (weekends, public holidays), the date
format, and PREP-before-GO ordering, and it derives PREP dates from GO dates.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Optional

from models import Activity, SchedulingPolicy, PrepDerivation
from .calendar import CalendarFacts
from .config import EngineConfig, DEFAULT_CONFIG
from .dates import DateLike, format_date, is_before, parse_strict, to_date

logger = logging.getLogger(__name__)


class ViolationKind(str, Enum):
    """Error taxonomy. These are kinds of outcome, not exceptions."""
    MISSING_FIELD = "MissingField"
    INVALID_DATE_FORMAT = "InvalidDateFormat"
    DATE_SEQUENCE = "DateSequenceViolation"
    POLICY = "PolicyViolation"
    DATE_CONFLICT = "DateConflict"
    UNPARSEABLE_ID = "UnparseableIdentifier"


# Soft kinds pause a mutation but can be confirmed past; everything else blocks
SOFT_KINDS = {ViolationKind.DATE_CONFLICT}


@dataclass
class ConstraintViolation:
    """Detailed reason for rejection."""
    kind: ViolationKind
    field: str
    reason: str
    activity_id: str = ""
    value: str = ""

    @property
    def is_blocking(self) -> bool:
        return self.kind not in SOFT_KINDS


REQUIRED_FIELDS = [
    ("activity_name", "Activity name"),
    ("prep_date", "PREP date"),
    ("go_date", "GO date"),
    ("activity_id", "Activity ID"),
]
DATE_FIELDS = [("prep_date", "PREP"), ("go_date", "GO")]


class ConstraintChecker:
    """
    Validates hard constraints for activity dates.
    """

    def __init__(self, calendar: Optional[CalendarFacts] = None, config: EngineConfig = DEFAULT_CONFIG):
        self.calendar = calendar or CalendarFacts()
        self.config = config

    def is_acceptable(self, value: DateLike, policy: SchedulingPolicy) -> bool:
        """False only if the day is a weekend/holiday the policy disallows."""
        if self.calendar.is_weekend(value) and not policy.allow_weekends:
            return False
        if self.calendar.is_holiday(value, policy.jurisdiction) and not policy.allow_holidays:
            return False
        return True

    def derive_default_prep(self, go_date: DateLike) -> Optional[str]:
        """PREP = GO minus a fixed number of calendar days (not business days)."""
        go = to_date(go_date)
        if go is None:
            return None
        return format_date(go - timedelta(days=self.config.prep_offset_days))

    def resolve_backward(self, value: DateLike, policy: SchedulingPolicy) -> str:
        """
        Step back one calendar day at a time until the policy accepts the day.
        Gives up after max_backward_steps and returns the last day examined.
        """
        current = to_date(value)
        if current is None:
            return value if isinstance(value, str) else format_date(value)

        steps = 0
        while not self.is_acceptable(current, policy) and steps < self.config.max_backward_steps:
            logger.debug(f"{format_date(current)} rejected by policy, stepping back")
            current -= timedelta(days=1)
            steps += 1

        if not self.is_acceptable(current, policy):
            logger.warning(
                f"No acceptable day within {self.config.max_backward_steps} steps "
                f"before {format_date(to_date(value))}; returning {format_date(current)}"
            )
        return format_date(current)

    def derive_prep(self, go_date: str, policy: SchedulingPolicy) -> Optional[PrepDerivation]:
        """Naive PREP from GO, then resolved backward against the policy."""
        naive = self.derive_default_prep(go_date)
        if naive is None:
            return None
        resolved = self.resolve_backward(naive, policy)
        derivation = PrepDerivation(
            go_date=go_date,
            naive_prep=naive,
            prep_date=resolved,
            adjusted=resolved != naive,
            capped=not self.is_acceptable(resolved, policy)
        )
        if derivation.adjusted:
            logger.info(derivation.message)
        return derivation

    def check_go_date(self, go_date: str, policy: SchedulingPolicy, activity_id: str = "") -> Optional[ConstraintViolation]:
        """A GO date must itself be well-formed and acceptable before any PREP is derived."""
        if parse_strict(go_date) is None:
            return ConstraintViolation(
                ViolationKind.INVALID_DATE_FORMAT, "go_date",
                "Please enter dates in dd/mm/yyyy format", activity_id, go_date
            )
        return self._check_policy("go_date", "GO", go_date, policy, activity_id)

    def validate_candidate(self, activity: Activity, policy: Optional[SchedulingPolicy] = None) -> Optional[ConstraintViolation]:
        """
        Master validation function. Returns None if Valid, Violation object if Invalid.
        Order: missing fields -> format -> acceptability (PREP, then GO) -> sequence.
        Acceptability is skipped when no policy is given.
        """

        # 1. Required fields
        for field_name, label in REQUIRED_FIELDS:
            if not str(getattr(activity, field_name)).strip():
                return ConstraintViolation(
                    ViolationKind.MISSING_FIELD, field_name,
                    f"{label} is required", activity.activity_id
                )

        # 2. Strict format
        for field_name, label in DATE_FIELDS:
            value = getattr(activity, field_name)
            if parse_strict(value) is None:
                return ConstraintViolation(
                    ViolationKind.INVALID_DATE_FORMAT, field_name,
                    f"{label} date must be in dd/mm/yyyy format", activity.activity_id, value
                )

        # 3. Weekend / holiday policy
        if policy is not None:
            for field_name, label in DATE_FIELDS:
                violation = self._check_policy(
                    field_name, label, getattr(activity, field_name), policy, activity.activity_id
                )
                if violation: return violation

        # 4. PREP strictly before GO
        if not is_before(activity.prep_date, activity.go_date):
            return ConstraintViolation(
                ViolationKind.DATE_SEQUENCE, "prep_date",
                f"PREP date {activity.prep_date} must be before GO date {activity.go_date}",
                activity.activity_id, activity.prep_date
            )

        return None # All clear!

    def _check_policy(self, field_name: str, label: str, value: str, policy: SchedulingPolicy, activity_id: str) -> Optional[ConstraintViolation]:
        if self.calendar.is_weekend(value) and not policy.allow_weekends:
            return ConstraintViolation(
                ViolationKind.POLICY, field_name,
                f"{label} date {value} falls on a weekend. Enable weekend dates or pick another date.",
                activity_id, value
            )
        if self.calendar.is_holiday(value, policy.jurisdiction) and not policy.allow_holidays:
            info = self.calendar.holiday_info(value, policy.jurisdiction)
            return ConstraintViolation(
                ViolationKind.POLICY, field_name,
                f"{label} date {value} is a public holiday ({info.label}). Enable holiday dates or pick another date.",
                activity_id, value
            )
        return None
