"""Comparator-driven sorting algorithms used by the listing endpoints.

Both algorithms return a new list and leave the input sequence untouched.
Comparator exceptions propagate to the caller as-is.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Sequence, Tuple

from .comparators import Comparator, ValidationError

logger = logging.getLogger(__name__)

SortFunction = Callable[[Sequence[Any], Comparator], List[Any]]


def quick_sort(records: Sequence[Any], comparator: Comparator) -> List[Any]:
    """Partition sort around the middle element of each segment.

    Pending segments live on an explicit stack instead of the call stack, so
    degenerate partitions cost time but never hit the recursion limit. The
    result is not stable.
    """

    if len(records) <= 1:
        return list(records)

    result: List[Any] = []
    # Entries are (segment, is_ordered); the top of the stack is emitted next.
    pending: List[Tuple[List[Any], bool]] = [(list(records), False)]

    while pending:
        segment, is_ordered = pending.pop()
        if is_ordered or len(segment) <= 1:
            result.extend(segment)
            continue

        pivot_index = len(segment) // 2
        pivot = segment[pivot_index]
        less: List[Any] = []
        equal: List[Any] = []
        greater: List[Any] = []
        for index, item in enumerate(segment):
            if index == pivot_index:
                # The pivot always lands in its own group, even when the
                # comparator disagrees with itself, so every round shrinks.
                equal.append(item)
                continue
            order = comparator(item, pivot)
            if order < 0:
                less.append(item)
            elif order > 0:
                greater.append(item)
            else:
                equal.append(item)

        pending.append((greater, False))
        pending.append((equal, True))
        pending.append((less, False))

    return result


def _merge(left: List[Any], right: List[Any], comparator: Comparator) -> List[Any]:
    merged: List[Any] = []
    i = j = 0
    while i < len(left) and j < len(right):
        # Ties take from the left half to keep equal records in input order.
        if comparator(left[i], right[j]) <= 0:
            merged.append(left[i])
            i += 1
        else:
            merged.append(right[j])
            j += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def merge_sort(records: Sequence[Any], comparator: Comparator) -> List[Any]:
    """Stable top-down merge sort; the left half gets the floor of n / 2."""

    if len(records) <= 1:
        return list(records)

    mid = len(records) // 2
    left = merge_sort(records[:mid], comparator)
    right = merge_sort(records[mid:], comparator)
    return _merge(left, right, comparator)


ALGORITHMS: Dict[str, SortFunction] = {
    "quick": quick_sort,
    "merge": merge_sort,
}


def get_algorithm(name: str | None) -> SortFunction:
    """Return the sort function registered under ``name``."""

    key = (name or "").strip().lower()
    if key not in ALGORITHMS:
        raise ValidationError(
            "algorithm must be one of: " + ", ".join(sorted(ALGORITHMS)) + "."
        )
    return ALGORITHMS[key]


def sort_records(
    records: Sequence[Any], comparator: Comparator, algorithm: str = "merge"
) -> List[Any]:
    """Return every record ordered by ``comparator`` using ``algorithm``."""

    sort_function = get_algorithm(algorithm)
    logger.debug("Sorting %d record(s) with %s sort", len(records), algorithm)
    return sort_function(records, comparator)


__all__ = [
    "ALGORITHMS",
    "SortFunction",
    "get_algorithm",
    "merge_sort",
    "quick_sort",
    "sort_records",
]
