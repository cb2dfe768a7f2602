"""Utilities for parsing sort/pagination query parameters and slicing pages."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .comparators import ValidationError, parse_direction
from .sorting import ALGORITHMS


class PagingParamError(ValidationError):
    """Raised when pagination query parameters are invalid."""


@dataclass(frozen=True)
class SortRequest:
    criterion: str
    field: str
    descending: bool
    algorithm: str
    page: int
    limit: int


@dataclass(frozen=True)
class Pagination:
    total_count: int
    total_pages: int
    current_page: int
    limit: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalCount": self.total_count,
            "totalPages": self.total_pages,
            "currentPage": self.current_page,
            "limit": self.limit,
        }


def _parse_int_arg(
    raw_value: str | None,
    *,
    name: str,
    default: int,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int:
    if raw_value in (None, ""):
        value = default
    else:
        try:
            value = int(raw_value)
        except (TypeError, ValueError):
            raise PagingParamError(f"{name} must be an integer.") from None

    if minimum is not None and value < minimum:
        raise PagingParamError(f"{name} must be ≥ {minimum}.")
    if maximum is not None and value > maximum:
        raise PagingParamError(f"{name} must be ≤ {maximum}.")

    return value


def parse_sort_request(
    args: Mapping[str, str],
    *,
    allowed_criteria: Mapping[str, str],
    default_criterion: str,
    default_algorithm: str = "merge",
    default_limit: int = 10,
    max_limit: int = 100,
) -> SortRequest:
    """Validate sort and paging parameters from a request args mapping.

    Raises ``ValidationError`` (or its ``PagingParamError`` subclass) for the
    first unrecognised value, so no sort runs on a bad request.
    """

    criterion = (args.get("criterion") or default_criterion).strip()
    if criterion not in allowed_criteria:
        options = ", ".join(sorted(allowed_criteria))
        raise ValidationError(f"criterion must be one of: {options}.")

    descending = parse_direction(args.get("order"))

    algorithm = (args.get("algorithm") or default_algorithm).strip().lower()
    if algorithm not in ALGORITHMS:
        raise ValidationError(
            "algorithm must be one of: " + ", ".join(sorted(ALGORITHMS)) + "."
        )

    page = _parse_int_arg(args.get("page"), name="page", default=1, minimum=1)
    limit = _parse_int_arg(
        args.get("limit"),
        name="limit",
        default=default_limit,
        minimum=1,
        maximum=max_limit,
    )

    return SortRequest(
        criterion=criterion,
        field=allowed_criteria[criterion],
        descending=descending,
        algorithm=algorithm,
        page=page,
        limit=limit,
    )


def paginate(
    items: Sequence[Any], page: int, limit: int
) -> Tuple[List[Any], Pagination]:
    """Slice one page out of a fully ordered sequence.

    Pages past the end come back empty; ``currentPage`` echoes the request.
    """

    if page < 1:
        raise PagingParamError("page must be ≥ 1.")
    if limit < 1:
        raise PagingParamError("limit must be ≥ 1.")

    total = len(items)
    start = min((page - 1) * limit, total)
    end = min(page * limit, total)

    pagination = Pagination(
        total_count=total,
        total_pages=math.ceil(total / limit),
        current_page=page,
        limit=limit,
    )
    return list(items[start:end]), pagination


__all__ = [
    "Pagination",
    "PagingParamError",
    "SortRequest",
    "paginate",
    "parse_sort_request",
]
