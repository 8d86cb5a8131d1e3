"""
The PREP/GO Planning Engine.

This module owns every mutation of an activity collection:
1. Insert / Update - validate, check clashes, place in PREP-date order, renumber.
2. Delete - remove and close the gap in the prefix group.
3. Move forward - raw bulk shift of dates, no validation.

Each operation is a pure function of (collection, arguments): the input list
is never modified and a fresh, internally consistent list is returned.
"""

import logging
from typing import List, Optional, Sequence

from models import Activity, SchedulingPolicy
from .calendar import CalendarFacts
from .config import EngineConfig, DEFAULT_CONFIG
from .conflicts import ConflictDetector
from .constraints import ConstraintChecker, ConstraintViolation, ViolationKind
from .dates import add_days, is_before
from .sequencer import next_id, parse_id, renumber_after_mutation
from .state import MutationResult, MutationStatus

logger = logging.getLogger(__name__)

FIELD_LABELS = {"prep_date": "PREP", "go_date": "GO"}


class ActivityPlanner:
    """
    Main planning engine.
    Ingests a collection and a requested change, outputs a MutationResult.
    """

    def __init__(
        self,
        calendar: Optional[CalendarFacts] = None,
        config: EngineConfig = DEFAULT_CONFIG
    ):
        self.config = config
        self.calendar = calendar or CalendarFacts()

        # Initialize Helpers
        self.checker = ConstraintChecker(self.calendar, config)
        self.detector = ConflictDetector()

    # --- Insert ---

    def insert(
        self,
        collection: Sequence[Activity],
        activity: Activity,
        policy: Optional[SchedulingPolicy] = None,
        id_prefix: Optional[str] = None,
        confirm: bool = False
    ) -> MutationResult:
        """
        Add a new activity. Policy violations block; date clashes pause the
        operation unless confirm=True.
        """
        current = list(collection)
        policy = policy or SchedulingPolicy()

        activity = self._strip_id(activity)
        if not activity.activity_id:
            prefix = id_prefix or self.config.default_id_prefix
            activity = activity.model_copy(update={"activity_id": next_id(current, prefix)})

        # 1. Hard constraints
        violation = self.checker.validate_candidate(activity, policy)
        if violation:
            return self._reject(current, violation)

        # 2. Soft constraint: clashes with other activities
        paused = self._check_conflicts(current, activity, confirm)
        if paused:
            return paused

        # 3. Commit
        return self._commit(current, activity, affected=self._prefixes(activity))

    def confirm_insert(
        self,
        collection: Sequence[Activity],
        activity: Activity,
        policy: Optional[SchedulingPolicy] = None,
        id_prefix: Optional[str] = None
    ) -> MutationResult:
        """'Proceed anyway': skips only the clash check."""
        return self.insert(collection, activity, policy, id_prefix, confirm=True)

    # --- Schedule from a GO date ---

    def schedule_from_go(
        self,
        collection: Sequence[Activity],
        draft: Activity,
        go_date: str,
        policy: Optional[SchedulingPolicy] = None,
        id_prefix: Optional[str] = None,
        confirm: bool = False
    ) -> MutationResult:
        """
        Full creation flow: GO check -> PREP derivation (resolved backward
        against the policy) -> validation -> clash check -> insertion.
        """
        policy = policy or SchedulingPolicy()

        violation = self.checker.check_go_date(go_date, policy, draft.activity_id)
        if violation:
            return self._reject(list(collection), violation)

        derivation = self.checker.derive_prep(go_date, policy)
        candidate = draft.model_copy(update={"go_date": go_date, "prep_date": derivation.prep_date})

        result = self.insert(collection, candidate, policy, id_prefix, confirm)
        result.prep_adjustment = derivation
        return result

    def confirm_schedule_from_go(
        self,
        collection: Sequence[Activity],
        draft: Activity,
        go_date: str,
        policy: Optional[SchedulingPolicy] = None,
        id_prefix: Optional[str] = None
    ) -> MutationResult:
        return self.schedule_from_go(collection, draft, go_date, policy, id_prefix, confirm=True)

    # --- Update ---

    def update(
        self,
        collection: Sequence[Activity],
        index: int,
        activity: Activity,
        policy: Optional[SchedulingPolicy] = None,
        confirm: bool = False
    ) -> MutationResult:
        """
        Replace the row at 'index'. The row is taken out first, so it never
        clashes with itself, then re-inserted in PREP-date order.
        Without a policy weekend/holiday acceptability is not checked.
        """
        current = list(collection)
        self._check_index(current, index)

        original = current[index]
        activity = self._strip_id(activity)
        if not activity.activity_id:
            activity = activity.model_copy(update={"activity_id": original.activity_id})

        remaining = current[:index] + current[index + 1:]

        violation = self.checker.validate_candidate(activity, policy)
        if violation:
            return self._reject(current, violation)

        paused = self._check_conflicts(remaining, activity, confirm, untouched=current)
        if paused:
            return paused

        affected = self._prefixes(original) | self._prefixes(activity)
        return self._commit(remaining, activity, affected=affected)

    def confirm_update(
        self,
        collection: Sequence[Activity],
        index: int,
        activity: Activity,
        policy: Optional[SchedulingPolicy] = None
    ) -> MutationResult:
        return self.update(collection, index, activity, policy, confirm=True)

    # --- Delete ---

    def delete(self, collection: Sequence[Activity], index: int) -> MutationResult:
        """
        Remove the row and renumber its prefix group by PREP-date rank,
        so the group stays dense.
        """
        current = list(collection)
        self._check_index(current, index)

        removed = current.pop(index)
        renumbered = renumber_after_mutation(current, self._prefixes(removed))

        logger.info(f"Deleted {removed.activity_id} ({removed.activity_name})")
        return MutationResult(MutationStatus.APPLIED, renumbered, activity=removed)

    # --- Bulk shift ---

    def move_forward(
        self,
        collection: Sequence[Activity],
        start_index: int,
        days: Optional[int] = None
    ) -> MutationResult:
        """
        Shift PREP and GO of every row from start_index to the end.
        This is a raw shift: no policy or clash checks are made. Callers
        should look at result.has_conflicts afterwards.
        """
        current = list(collection)
        if not 0 <= start_index <= len(current):
            raise IndexError(f"start_index {start_index} out of range for {len(current)} activities")

        days = self.config.default_shift_days if days is None else days

        shifted = current[:start_index]
        for activity in current[start_index:]:
            prep = add_days(activity.prep_date, days)
            go = add_days(activity.go_date, days)
            shifted.append(activity.model_copy(update={
                "prep_date": prep,
                "go_date": go,
                **self.calendar.flags_for(prep, go)
            }))

        result = MutationResult(MutationStatus.APPLIED, shifted)
        logger.info(f"Moved {len(current) - start_index} activities forward by {days} days")
        if result.has_conflicts:
            logger.warning("Collection has date conflicts or sequence problems after the shift")
        return result

    # --- Helpers ---

    def _check_conflicts(
        self,
        others: List[Activity],
        activity: Activity,
        confirm: bool,
        untouched: Optional[List[Activity]] = None
    ) -> Optional[MutationResult]:
        clashes = self.detector.check_activity(others, activity)
        if not clashes:
            return None

        if confirm:
            logger.info(f"Proceeding with {activity.activity_id} despite clashes: {clashes}")
            return None

        field_name = next(iter(clashes))
        value = getattr(activity, field_name)
        violation = ConstraintViolation(
            ViolationKind.DATE_CONFLICT, field_name,
            f"{FIELD_LABELS[field_name]} date {value} conflicts with: {', '.join(clashes[field_name])}",
            activity.activity_id, value
        )
        logger.warning(f"Paused {activity.activity_id}: {violation.reason}")
        return MutationResult(
            MutationStatus.CONFLICT,
            untouched if untouched is not None else others,
            violation=violation,
            conflicts=clashes,
            activity=activity
        )

    def _commit(self, others: List[Activity], activity: Activity, affected: set) -> MutationResult:
        activity = activity.model_copy(
            update=self.calendar.flags_for(activity.prep_date, activity.go_date)
        )

        index = self.insertion_index(others, activity.prep_date)
        placed = others[:index] + [activity] + others[index:]
        placed = renumber_after_mutation(placed, affected)

        logger.info(f"Placed {placed[index].activity_id} at position {index}")
        return MutationResult(MutationStatus.APPLIED, placed, activity=placed[index])

    @staticmethod
    def insertion_index(collection: Sequence[Activity], prep_date: str) -> int:
        """First position whose PREP date is not before the new one; else append."""
        for index, item in enumerate(collection):
            if not is_before(item.prep_date, prep_date):
                return index
        return len(collection)

    @staticmethod
    def _strip_id(activity: Activity) -> Activity:
        # model_copy(update=...) skips field validators
        stripped = activity.activity_id.strip()
        if stripped == activity.activity_id:
            return activity
        return activity.model_copy(update={"activity_id": stripped})

    @staticmethod
    def _prefixes(activity: Activity) -> set:
        parsed = parse_id(activity.activity_id)
        return {parsed.prefix} if parsed else set()

    @staticmethod
    def _check_index(collection: Sequence[Activity], index: int) -> None:
        if not 0 <= index < len(collection):
            raise IndexError(f"index {index} out of range for {len(collection)} activities")

    @staticmethod
    def _reject(collection: List[Activity], violation: ConstraintViolation) -> MutationResult:
        logger.warning(f"Rejected {violation.activity_id or 'activity'}: {violation.reason}")
        return MutationResult(MutationStatus.REJECTED, collection, violation=violation)
