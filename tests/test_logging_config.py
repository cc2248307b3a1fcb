"""
Tests for the structured logging setup.

Author: xwest
"""

import unittest
import io
import json
import logging
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from slc.logging_config import setup_logging, JSONFormatter, ROOT_LOGGER_NAME
from slc.parser.parser import parse_string


class TestLoggingConfig(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.logger = setup_logging(logging.DEBUG, stream=self.stream)

    def tearDown(self):
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
        self.logger.setLevel(logging.NOTSET)

    def _records(self):
        return [json.loads(line) for line in self.stream.getvalue().splitlines() if line]

    def test_parse_errors_are_logged_as_json(self):
        parse_string("var\n  x 1")

        records = [r for r in self._records() if r.get("kind") == "ExpectedEqualSign"]
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0]["level"], "DEBUG")
        self.assertEqual(records[0]["logger"], "slc.parser.parser")
        self.assertEqual((records[0]["line"], records[0]["column"]), (2, 5))

    def test_setup_replaces_handlers(self):
        logger = setup_logging(logging.INFO, stream=self.stream)
        self.assertIs(logger, logging.getLogger(ROOT_LOGGER_NAME))
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.INFO)

    def test_level_filters_records(self):
        setup_logging(logging.WARNING, stream=self.stream)
        parse_string("var\n  x 1")
        self.assertEqual(self._records(), [])

    def test_formatter_includes_exception(self):
        formatter = JSONFormatter()
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("slc", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())
        entry = json.loads(formatter.format(record))
        self.assertEqual(entry["message"], "failed")
        self.assertIn("ValueError: boom", entry["exception"])


if __name__ == "__main__":
    unittest.main()
