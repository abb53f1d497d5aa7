"""Tests for logging configuration."""

import json
import logging
import unittest

from edge_addon_action.logging_config import StructuredFormatter, logger, set_log_level, setup_logging


class TestSetupLogging(unittest.TestCase):
    def test_logger_name_and_single_handler(self):
        again = setup_logging()
        self.assertIs(again, logger)
        self.assertEqual(logger.name, "edge_addon_action")
        self.assertEqual(len(logger.handlers), 1)

    def test_set_log_level(self):
        original = logger.level
        try:
            set_log_level("debug")
            self.assertEqual(logger.level, logging.DEBUG)
            self.assertTrue(all(h.level == logging.DEBUG for h in logger.handlers))
        finally:
            set_log_level(logging.getLevelName(original))


class TestStructuredFormatter(unittest.TestCase):
    def test_format_as_json(self):
        record = logging.LogRecord("edge_addon_action", logging.INFO, __file__, 1, "Check %s", ("upload",), None)
        entry = json.loads(StructuredFormatter().format(record))
        self.assertEqual(entry["level"], "INFO")
        self.assertEqual(entry["logger"], "edge_addon_action")
        self.assertEqual(entry["message"], "Check upload")
        self.assertIn("timestamp", entry)


if __name__ == "__main__":
    unittest.main()
