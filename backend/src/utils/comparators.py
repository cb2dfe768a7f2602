"""Comparator construction for sortable record fields."""

from __future__ import annotations

from typing import Any, Callable, Mapping

Record = Mapping[str, Any]
Comparator = Callable[[Any, Any], int]

STUDENT_SORT_CRITERIA: Mapping[str, str] = {
    "lastName": "last_name",
    "firstName": "first_name",
    "email": "email",
    "year": "year",
}

COURSE_SORT_CRITERIA: Mapping[str, str] = {
    "courseName": "course_name",
    "courseCode": "course_code",
    "credits": "credits",
}


class ValidationError(ValueError):
    """Raised when a sort or paging parameter is not recognised."""


def compare_values(left: Any, right: Any) -> int:
    """Three-way compare two field values.

    Strings compare case-insensitively, with the exact text breaking ties.
    ``None`` orders after any present value. Mixed types raise ``TypeError``.
    """

    if left is None or right is None:
        if left is None and right is None:
            return 0
        return 1 if left is None else -1

    if isinstance(left, str) and isinstance(right, str):
        folded_left, folded_right = left.casefold(), right.casefold()
        if folded_left != folded_right:
            return -1 if folded_left < folded_right else 1
        return (left > right) - (left < right)

    if left < right:
        return -1
    if right < left:
        return 1
    return 0


def parse_direction(raw_order: str | None) -> bool:
    """Return ``True`` for a descending order string, ``False`` otherwise."""

    order = (raw_order or "asc").strip().lower()
    if order == "asc":
        return False
    if order == "desc":
        return True
    raise ValidationError("order must be one of: asc, desc.")


def build_comparator(
    criterion: str,
    descending: bool = False,
    *,
    allowed_criteria: Mapping[str, str],
) -> Comparator:
    """Return a comparator ordering records by ``criterion``.

    Descending order negates the field comparison so that equal keys keep
    their input order under a stable algorithm.
    """

    if criterion not in allowed_criteria:
        options = ", ".join(sorted(allowed_criteria))
        raise ValidationError(f"criterion must be one of: {options}.")

    field = allowed_criteria[criterion]
    sign = -1 if descending else 1

    def comparator(left: Record, right: Record) -> int:
        return sign * compare_values(left.get(field), right.get(field))

    return comparator


__all__ = [
    "COURSE_SORT_CRITERIA",
    "Comparator",
    "STUDENT_SORT_CRITERIA",
    "ValidationError",
    "build_comparator",
    "compare_values",
    "parse_direction",
]
