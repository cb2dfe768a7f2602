"""Application configuration helpers."""

import os

from dotenv import load_dotenv

from .utils.sorting import ALGORITHMS

_BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_DOTENV_PATH = os.path.join(_BASE_DIR, ".env")

if os.path.exists(_DOTENV_PATH):
    load_dotenv(_DOTENV_PATH)


class ConfigError(RuntimeError):
    """Raised when configuration values are missing or invalid."""


_MONGO_URI_CACHE = None
_DB_NAME_CACHE = None

_MISSING_DB_NAME = "Database name not found. Provide it via MONGODB_URI or MONGODB_DB."

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_mongo_uri():
    """Return the MongoDB connection string from the environment."""

    global _MONGO_URI_CACHE

    if _MONGO_URI_CACHE:
        return _MONGO_URI_CACHE

    uri = os.getenv("MONGODB_URI")
    if not uri:
        raise ConfigError("MONGODB_URI is not set. Define it in backend/.env.")

    _MONGO_URI_CACHE = uri
    return uri


def get_db_name():
    """Return the database name from MONGODB_DB or the path of the URI."""

    global _DB_NAME_CACHE

    if _DB_NAME_CACHE:
        return _DB_NAME_CACHE

    db_name = os.getenv("MONGODB_DB")
    if not db_name:
        location = get_mongo_uri().split("?", 1)[0].rstrip("/")
        location = location.split("://", 1)[-1]
        _, _, db_name = location.partition("/")
        if not db_name:
            raise ConfigError(_MISSING_DB_NAME)

    _DB_NAME_CACHE = db_name
    return db_name


def _get_int(name, default, minimum=1):
    raw_value = os.getenv(name)
    if raw_value in (None, ""):
        return default
    try:
        value = int(raw_value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer.") from None
    if value < minimum:
        raise ConfigError(f"{name} must be ≥ {minimum}.")
    return value


def get_log_level():
    """Return the configured log level name (LOG_LEVEL, default INFO)."""

    level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigError("LOG_LEVEL must be one of: " + ", ".join(_LOG_LEVELS) + ".")
    return level


def get_log_file():
    """Return the log file path, or None to log to the console only."""

    path = (os.getenv("LOG_FILE") or "").strip()
    return path or None


def get_page_size_limits():
    """Return ``(default_page_size, max_page_size)`` for listing endpoints."""

    default_size = _get_int("DEFAULT_PAGE_SIZE", 10)
    max_size = _get_int("MAX_PAGE_SIZE", 100)
    if default_size > max_size:
        raise ConfigError("DEFAULT_PAGE_SIZE cannot exceed MAX_PAGE_SIZE.")
    return default_size, max_size


def get_default_sort_algorithm():
    """Return the algorithm used when a request does not name one."""

    algorithm = (os.getenv("DEFAULT_SORT_ALGORITHM") or "merge").strip().lower()
    if algorithm not in ALGORITHMS:
        raise ConfigError(
            "DEFAULT_SORT_ALGORITHM must be one of: "
            + ", ".join(sorted(ALGORITHMS))
            + "."
        )
    return algorithm


__all__ = [
    "ConfigError",
    "get_db_name",
    "get_default_sort_algorithm",
    "get_log_file",
    "get_log_level",
    "get_mongo_uri",
    "get_page_size_limits",
]
