"""MongoDB helpers for the application."""

from typing import Any, Dict, List

from pymongo import ASCENDING, IndexModel, MongoClient
from pymongo.collection import Collection

from .config import get_db_name, get_mongo_uri

_MONGO_CLIENT = None
_MONGO_DB = None


def _get_client():
    """Create (or reuse) a MongoDB client using the configured URI."""

    global _MONGO_CLIENT

    if _MONGO_CLIENT is None:
        _MONGO_CLIENT = MongoClient(get_mongo_uri(), serverSelectionTimeoutMS=5000)
    return _MONGO_CLIENT


def get_db():
    """Return the application's MongoDB database instance."""

    global _MONGO_DB

    if _MONGO_DB is None:
        _MONGO_DB = _get_client()[get_db_name()]
    return _MONGO_DB


_students_indexes_created = False
_courses_indexes_created = False


def _ensure_students_indexes(collection: Collection) -> None:
    global _students_indexes_created
    if _students_indexes_created:
        return

    collection.create_index("email", unique=True, name="unique_email")
    collection.create_index(
        [("last_name", ASCENDING), ("first_name", ASCENDING)],
        name="name_asc",
        background=True,
    )
    _students_indexes_created = True


def get_students_collection() -> Collection:
    """Return the collection that stores student documents."""

    collection = get_db()["students"]
    _ensure_students_indexes(collection)
    return collection


def _optional_int(value):
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    if isinstance(value, (int, float)):
        return int(value)
    return None


def serialize_student(document):
    """Convert a MongoDB student document into a JSON-serialisable dict."""

    return {
        "_id": str(document.get("_id", "")),
        "first_name": document.get("first_name"),
        "last_name": document.get("last_name"),
        "email": document.get("email"),
        "year": _optional_int(document.get("year")),
    }


def _ensure_courses_indexes(collection: Collection) -> None:
    global _courses_indexes_created
    if _courses_indexes_created:
        return

    collection.create_indexes(
        [
            IndexModel(
                [("course_code", ASCENDING)],
                name="unique_course_code",
                unique=True,
            ),
            IndexModel(
                [("course_name", ASCENDING)],
                name="course_name_idx",
                background=True,
            ),
        ]
    )
    _courses_indexes_created = True


def get_courses_collection() -> Collection:
    """Return the courses collection and ensure supporting indexes."""

    collection = get_db()["courses"]
    _ensure_courses_indexes(collection)
    return collection


def serialize_course(document):
    """Serialize a raw Mongo course document to JSON-friendly dict."""

    return {
        "_id": str(document.get("_id", "")),
        "course_name": document.get("course_name"),
        "course_code": document.get("course_code"),
        "credits": _optional_int(document.get("credits")),
    }


# Read-only repository used by the listing endpoints.
def fetch_students() -> List[Dict[str, Any]]:
    """Return every student as a serialized, unordered record."""

    projection = {"_id": 1, "first_name": 1, "last_name": 1, "email": 1, "year": 1}
    cursor = get_students_collection().find({}, projection=projection)
    return [serialize_student(doc) for doc in cursor]


def fetch_courses() -> List[Dict[str, Any]]:
    """Return every course as a serialized, unordered record."""

    projection = {"_id": 1, "course_name": 1, "course_code": 1, "credits": 1}
    cursor = get_courses_collection().find({}, projection=projection)
    return [serialize_course(doc) for doc in cursor]


__all__ = [
    "fetch_courses",
    "fetch_students",
    "get_courses_collection",
    "get_db",
    "get_students_collection",
    "serialize_course",
    "serialize_student",
]
