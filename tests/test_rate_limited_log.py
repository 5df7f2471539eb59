"""
Tests for the rate-limited logging helper.
"""
from unittest.mock import MagicMock

from dappchain_sdk import _rate_limited_log
from dappchain_sdk._rate_limited_log import rate_limited_log


class TestRateLimitedLog:
    """Tests for the rate-limited logging implementation."""

    def test_repeated_message_suppressed(self):
        logger = MagicMock()

        assert rate_limited_log("Test message", logger_instance=logger) is True
        assert rate_limited_log("Test message", logger_instance=logger) is False

        logger.warning.assert_called_once_with("Test message")

    def test_distinct_messages_logged(self):
        logger = MagicMock()

        rate_limited_log("first", logger_instance=logger)
        rate_limited_log("second", logger_instance=logger)

        assert logger.warning.call_count == 2

    def test_level_selects_method(self):
        logger = MagicMock()

        rate_limited_log("details", level="DEBUG", logger_instance=logger)

        logger.debug.assert_called_once_with("details")
        logger.warning.assert_not_called()

    def test_loggers_do_not_share_limits(self):
        """One client's warning doesn't silence another's"""
        first, second = MagicMock(), MagicMock()

        rate_limited_log("same", logger_instance=first)
        rate_limited_log("same", logger_instance=second)

        first.warning.assert_called_once_with("same")
        second.warning.assert_called_once_with("same")

    def test_reset(self):
        logger = MagicMock()

        rate_limited_log("msg", logger_instance=logger)
        _rate_limited_log.reset()
        rate_limited_log("msg", logger_instance=logger)

        assert logger.warning.call_count == 2
