"""
Identifier Sequencer.

Activity ids look like '{prefix}{number}', e.g. 'A1', 'PRJ-12'. Within a
prefix group the numbers are kept dense (1..N) and ascending by PREP date.
Ids without a trailing number are 'unmanaged' and never renumbered.
"""

import logging
import re
from collections import defaultdict
from datetime import date as date_type
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

from models import Activity
from .dates import parse_strict

logger = logging.getLogger(__name__)

# Greedy prefix ending in a non-digit, so the number is the maximal trailing digit run
ID_PATTERN = re.compile(r"^(.*\D)(\d+)$")


class ParsedId(NamedTuple):
    prefix: str
    number: int


def parse_id(activity_id: str) -> Optional[ParsedId]:
    """'A12' -> ('A', 12). Returns None for ids with no prefix or no trailing digits."""
    match = ID_PATTERN.match(activity_id or "")
    if not match:
        return None
    return ParsedId(match.group(1), int(match.group(2)))


def format_id(prefix: str, number: int) -> str:
    return f"{prefix}{number}"


def _numbers_for(collection: Iterable[Activity], prefix: str) -> List[int]:
    numbers = []
    for activity in collection:
        parsed = parse_id(activity.activity_id)
        if parsed and parsed.prefix == prefix:
            numbers.append(parsed.number)
    return numbers


def next_number(collection: Sequence[Activity], prefix: str) -> int:
    """1 for an unused prefix, otherwise highest number + 1."""
    numbers = _numbers_for(collection, prefix)
    return max(numbers) + 1 if numbers else 1


def first_available_number(collection: Sequence[Activity], prefix: str) -> int:
    """Lowest positive number not yet used by the prefix (fills gaps)."""
    used = set(_numbers_for(collection, prefix))
    candidate = 1
    while candidate in used:
        candidate += 1
    return candidate


def next_id(collection: Sequence[Activity], prefix: str) -> str:
    return format_id(prefix, next_number(collection, prefix))


def unmanaged_ids(collection: Sequence[Activity]) -> List[str]:
    """Ids excluded from sequencing because they have no trailing number."""
    return [a.activity_id for a in collection if parse_id(a.activity_id) is None]


def _prep_sort_key(activity: Activity) -> date_type:
    # Undated rows sort after every dated row of their group
    return parse_strict(activity.prep_date) or date_type.max


def renumber_after_mutation(
    collection: Sequence[Activity],
    prefixes: Optional[Iterable[str]] = None
) -> List[Activity]:
    """
    Reassign numbers within each prefix group to the 1-based rank of the
    member's PREP date (ties keep their collection order). Row order is not
    changed; only ids are rewritten. 'prefixes' limits the groups touched.
    """
    scope = set(prefixes) if prefixes is not None else None

    # 1. Group positions by prefix
    groups: Dict[str, List[int]] = defaultdict(list)
    for index, activity in enumerate(collection):
        parsed = parse_id(activity.activity_id)
        if parsed is None:
            continue
        if scope is not None and parsed.prefix not in scope:
            continue
        groups[parsed.prefix].append(index)

    # 2. Rank each group by PREP date (sorted() is stable)
    result = list(collection)
    for prefix, positions in groups.items():
        ranked = sorted(positions, key=lambda i: _prep_sort_key(collection[i]))
        for rank, index in enumerate(ranked, start=1):
            new_id = format_id(prefix, rank)
            if result[index].activity_id != new_id:
                logger.debug(f"Renumbered {result[index].activity_id} -> {new_id}")
                result[index] = result[index].model_copy(update={"activity_id": new_id})

    return result


def is_dense(collection: Sequence[Activity], prefix: str) -> bool:
    """True if the prefix group's numbers are exactly 1..N."""
    numbers = sorted(_numbers_for(collection, prefix))
    return numbers == list(range(1, len(numbers) + 1))
