"""Sorted, paginated listing endpoints."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping

from flask import Blueprint, jsonify, request
from pymongo.errors import PyMongoError

from ..config import ConfigError, get_default_sort_algorithm, get_page_size_limits
from ..db import fetch_courses, fetch_students
from ..utils.comparators import (
    COURSE_SORT_CRITERIA,
    STUDENT_SORT_CRITERIA,
    ValidationError,
    build_comparator,
)
from ..utils.paging import paginate, parse_sort_request
from ..utils.sorting import sort_records

sort_bp = Blueprint("sort", __name__, url_prefix="/api/sort")

logger = logging.getLogger(__name__)


def _json_error(message: str, status: int):
    return jsonify({"error": message}), status


def _sorted_listing(
    *,
    key: str,
    fetch: Callable[[], List[Dict[str, Any]]],
    allowed_criteria: Mapping[str, str],
    default_criterion: str,
):
    try:
        default_limit, max_limit = get_page_size_limits()
        sort_request = parse_sort_request(
            request.args,
            allowed_criteria=allowed_criteria,
            default_criterion=default_criterion,
            default_algorithm=get_default_sort_algorithm(),
            default_limit=default_limit,
            max_limit=max_limit,
        )
    except ValidationError as exc:
        return _json_error(str(exc), 400)
    except ConfigError as exc:
        logger.exception("Invalid listing configuration")
        return _json_error(str(exc), 500)

    try:
        records = fetch()
    except ConfigError as exc:
        logger.exception("Missing configuration for MongoDB")
        return _json_error(str(exc), 500)
    except PyMongoError:
        logger.exception("Failed to load %s due to MongoDB error", key)
        return _json_error("Database unavailable. Please try again later.", 503)

    comparator = build_comparator(
        sort_request.criterion,
        sort_request.descending,
        allowed_criteria=allowed_criteria,
    )
    try:
        ordered = sort_records(records, comparator, sort_request.algorithm)
    except TypeError:
        logger.exception(
            "Failed to sort %s by %s", key, sort_request.criterion
        )
        return _json_error("Failed to sort records.", 500)

    items, pagination = paginate(ordered, sort_request.page, sort_request.limit)
    logger.info(
        "Listed %s sorted by %s (%s, %s sort), page %d of %d",
        key,
        sort_request.criterion,
        "desc" if sort_request.descending else "asc",
        sort_request.algorithm,
        pagination.current_page,
        pagination.total_pages,
    )
    return jsonify({key: items, "pagination": pagination.to_dict()})


@sort_bp.get("/students")
def sort_students():
    return _sorted_listing(
        key="students",
        fetch=fetch_students,
        allowed_criteria=STUDENT_SORT_CRITERIA,
        default_criterion="lastName",
    )


@sort_bp.get("/courses")
def sort_courses():
    return _sorted_listing(
        key="courses",
        fetch=fetch_courses,
        allowed_criteria=COURSE_SORT_CRITERIA,
        default_criterion="courseName",
    )


__all__ = ["sort_bp"]
