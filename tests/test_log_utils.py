"""
Tests for get_logger / resolve_level
"""

import logging
import os
import unittest
from unittest import mock

from soultrap.utils.log_utils import get_logger, resolve_level


class TestResolveLevel(unittest.TestCase):
    """Test cases for log level parsing."""

    def test_names_any_case(self):
        self.assertEqual(resolve_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_level("Warning"), logging.WARNING)
        self.assertEqual(resolve_level(" ERROR "), logging.ERROR)

    def test_numbers(self):
        self.assertEqual(resolve_level("10"), logging.DEBUG)
        self.assertEqual(resolve_level(logging.ERROR), logging.ERROR)

    def test_env_fallback(self):
        """Test $LOG_LEVEL is used when no level is passed."""
        with mock.patch.dict(os.environ, {"LOG_LEVEL": "warning"}):
            self.assertEqual(resolve_level(None), logging.WARNING)
            self.assertEqual(resolve_level("debug"), logging.DEBUG)
        with mock.patch.dict(os.environ, {"LOG_LEVEL": ""}):
            self.assertEqual(resolve_level(None), logging.INFO)

    def test_unknown_name(self):
        self.assertEqual(resolve_level("chatty"), logging.INFO)


class TestGetLogger(unittest.TestCase):
    """Test cases for get_logger."""

    def setUp(self):
        self.name = "soultrap.test_log_utils"
        self.addCleanup(self._reset)

    def _reset(self):
        logger = logging.getLogger(self.name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def test_single_handler(self):
        logger = get_logger(self.name, "debug")
        get_logger(self.name)
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_explicit_level_applied_again(self):
        get_logger(self.name, "info")
        logger = get_logger(self.name, "error")
        self.assertEqual(logger.level, logging.ERROR)
        self.assertEqual(len(logger.handlers), 1)

    def test_default_name(self):
        self.name = "soultrap"
        self.assertEqual(get_logger().name, "soultrap")


if __name__ == "__main__":
    unittest.main()
