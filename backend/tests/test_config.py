"""Environment-driven configuration and logging setup."""

from __future__ import annotations

import io
import logging
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from src import config, logging_setup
from src.config import ConfigError


class MongoSettingsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        patcher_uri = mock.patch.object(config, "_MONGO_URI_CACHE", None)
        patcher_db = mock.patch.object(config, "_DB_NAME_CACHE", None)
        patcher_uri.start()
        patcher_db.start()
        self.addCleanup(patcher_uri.stop)
        self.addCleanup(patcher_db.stop)

    def test_missing_uri(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigError):
                config.get_mongo_uri()

    def test_db_name_from_uri(self) -> None:
        env = {"MONGODB_URI": "mongodb://localhost:27017/school?retryWrites=true"}
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertEqual("school", config.get_db_name())

    def test_db_name_from_env_wins(self) -> None:
        env = {"MONGODB_URI": "mongodb://localhost/school", "MONGODB_DB": "other"}
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertEqual("other", config.get_db_name())

    def test_db_name_missing(self) -> None:
        env = {"MONGODB_URI": "mongodb://localhost:27017/"}
        with mock.patch.dict(os.environ, env, clear=True):
            with self.assertRaises(ConfigError):
                config.get_db_name()


class ListingSettingsTestCase(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual((10, 100), config.get_page_size_limits())
            self.assertEqual("merge", config.get_default_sort_algorithm())
            self.assertEqual("INFO", config.get_log_level())
            self.assertIsNone(config.get_log_file())

    def test_overrides(self) -> None:
        env = {
            "DEFAULT_PAGE_SIZE": "20",
            "MAX_PAGE_SIZE": "50",
            "DEFAULT_SORT_ALGORITHM": "Quick",
            "LOG_LEVEL": "debug",
        }
        with mock.patch.dict(os.environ, env, clear=True):
            self.assertEqual((20, 50), config.get_page_size_limits())
            self.assertEqual("quick", config.get_default_sort_algorithm())
            self.assertEqual("DEBUG", config.get_log_level())

    def test_invalid_values(self) -> None:
        for env, getter in (
            ({"DEFAULT_PAGE_SIZE": "ten"}, config.get_page_size_limits),
            ({"MAX_PAGE_SIZE": "0"}, config.get_page_size_limits),
            ({"DEFAULT_PAGE_SIZE": "200"}, config.get_page_size_limits),
            ({"DEFAULT_SORT_ALGORITHM": "bubble"}, config.get_default_sort_algorithm),
            ({"LOG_LEVEL": "LOUD"}, config.get_log_level),
        ):
            with self.subTest(env=env):
                with mock.patch.dict(os.environ, env, clear=True):
                    with self.assertRaises(ConfigError):
                        getter()


class LoggingSetupTestCase(unittest.TestCase):
    logger_name = "student_records_test"

    def setUp(self) -> None:
        # The application may already have configured the root logger.
        patcher = mock.patch.object(logging_setup, "_HANDLERS", [])
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_configures_once_and_writes_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp_dir:
            log_path = os.path.join(tmp_dir, "app.log")
            env = {"LOG_FILE": log_path, "LOG_LEVEL": "INFO"}
            with mock.patch.dict(os.environ, env, clear=True), mock.patch.object(
                logging_setup.atexit, "register"
            ):
                logger = logging_setup.configure_logging(self.logger_name)
                again = logging_setup.configure_logging(self.logger_name)
                self.assertIs(logger, again)
                self.assertEqual(2, len(logger.handlers))

                logger.info("sorted %d record(s)", 3)
                logging_setup.shutdown_logging(self.logger_name)

            self.assertEqual([], logger.handlers)
            with open(log_path, encoding="utf-8") as log_file:
                contents = log_file.read()
            self.assertIn("[INFO] student_records_test: sorted 3 record(s)", contents)

    def test_shutdown_tolerates_closed_streams(self) -> None:
        stream = io.StringIO()
        handler = logging.StreamHandler(stream)
        logger = logging.getLogger(self.logger_name)
        logger.addHandler(handler)
        logging_setup._HANDLERS.append(handler)
        stream.close()

        logging_setup.shutdown_logging(self.logger_name)

        self.assertNotIn(handler, logger.handlers)
        self.assertEqual([], logging_setup._HANDLERS)


if __name__ == "__main__":
    unittest.main()
