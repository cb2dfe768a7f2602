"""Load sample students and courses into MongoDB, replacing existing ones."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from pymongo import MongoClient
from pymongo.errors import PyMongoError

ROOT_DIR = Path(__file__).resolve().parent.parent
BACKEND_DIR = ROOT_DIR / "backend"
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from src.config import ConfigError, get_db_name, get_mongo_uri  # noqa: E402
from src.logging_setup import configure_logging  # noqa: E402

SEED_PATH = Path(__file__).resolve().parent / "seed.json"
SEEDED_COLLECTIONS = ("students", "courses")

logger = logging.getLogger("seed")


def read_seed_file(path: Path = SEED_PATH) -> Dict[str, List[Dict[str, Any]]]:
    with path.open("r", encoding="utf-8") as seed_file:
        data = json.load(seed_file)
    if not isinstance(data, dict):
        raise ValueError("Seed file must contain an object of collections")

    unknown = sorted(set(data) - set(SEEDED_COLLECTIONS))
    if unknown:
        raise ValueError("Unknown seed collection(s): " + ", ".join(unknown))
    for collection_name, documents in data.items():
        if not isinstance(documents, list):
            raise ValueError(
                f"Seed data for collection '{collection_name}' must be a list"
            )
    return data


def main() -> None:
    configure_logging()
    try:
        uri = get_mongo_uri()
        db_name = get_db_name()
    except ConfigError as exc:  # pragma: no cover - simple CLI utility
        logger.error("Configuration error: %s", exc)
        raise SystemExit(1)

    seed_data = read_seed_file()
    client = MongoClient(uri, serverSelectionTimeoutMS=5000)
    database = client[db_name]

    try:
        for collection_name, documents in seed_data.items():
            collection = database[collection_name]
            collection.delete_many({})
            if documents:
                collection.insert_many(documents)
            logger.info(
                "Loaded %d document(s) into '%s' collection",
                len(documents),
                collection_name,
            )

        logger.info("Seeding complete for database '%s'.", db_name)
    except PyMongoError as exc:  # pragma: no cover - requires Mongo connection
        logger.error("MongoDB error: %s", exc)
        raise SystemExit(1)
    finally:
        client.close()


if __name__ == "__main__":
    main()
