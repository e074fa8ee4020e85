"""
Logging configuration tests.

Tests for lenstr._logging module.
"""

import logging
import os


class TestSetupLogging:
    """Tests for setup_logging() function."""

    def test_setup_logging_accessible(self, lenstr):
        """setup_logging is accessible from the package root."""
        from lenstr._logging import setup_logging

        assert lenstr.setup_logging is setup_logging

    def test_setup_logging_default_level(self):
        """setup_logging() defaults to INFO level."""
        from lenstr._logging import logger, setup_logging

        setup_logging()

        assert logger.level == logging.INFO

    def test_setup_logging_accepts_string_level(self):
        """setup_logging() accepts string level names."""
        from lenstr._logging import logger, setup_logging

        setup_logging("DEBUG")

        assert logger.level == logging.DEBUG

    def test_setup_logging_accepts_int_level(self):
        """setup_logging() accepts integer level constants."""
        from lenstr._logging import logger, setup_logging

        setup_logging(logging.WARNING)

        assert logger.level == logging.WARNING

    def test_setup_logging_off(self):
        """'off' silences every level."""
        from lenstr._logging import logger, setup_logging

        setup_logging("off")

        assert logger.level > logging.CRITICAL

    def test_setup_logging_replaces_handlers(self):
        """setup_logging() replaces existing handlers."""
        from lenstr._logging import logger, setup_logging

        logger.addHandler(logging.StreamHandler())
        logger.addHandler(logging.StreamHandler())

        setup_logging("INFO")

        assert len(logger.handlers) == 1

    def test_setup_logging_format_json(self, monkeypatch):
        """format='json' installs the JSON formatter."""
        from lenstr._logging import JsonFormatter, logger, setup_logging

        monkeypatch.setenv("LENSTR_LOG_FORMAT", "human")
        setup_logging("INFO", format="json")

        assert isinstance(logger.handlers[0].formatter, JsonFormatter)

    def test_setup_logging_format_human(self, monkeypatch):
        """format='human' installs the human formatter."""
        from lenstr._logging import HumanFormatter, logger, setup_logging

        monkeypatch.setenv("LENSTR_LOG_FORMAT", "json")
        setup_logging("INFO", format="human")

        assert isinstance(logger.handlers[0].formatter, HumanFormatter)


class TestEnvironment:
    """Tests for environment-driven defaults."""

    def test_level_from_env(self, monkeypatch):
        """LENSTR_LOG_LEVEL selects the level."""
        from lenstr._logging import _get_log_level

        monkeypatch.setenv("LENSTR_LOG_LEVEL", "warn")

        assert _get_log_level() == logging.WARNING

    def test_level_defaults_to_info(self, monkeypatch):
        """Without LENSTR_LOG_LEVEL the level is INFO."""
        from lenstr._logging import _get_log_level

        monkeypatch.delenv("LENSTR_LOG_LEVEL", raising=False)

        assert _get_log_level() == logging.INFO

    def test_setup_logging_leaves_environment_alone(self, monkeypatch):
        """An explicit format does not leak into LENSTR_LOG_FORMAT."""
        from lenstr._logging import setup_logging

        monkeypatch.delenv("LENSTR_LOG_FORMAT", raising=False)
        setup_logging("INFO", format="json")

        assert "LENSTR_LOG_FORMAT" not in os.environ

    def test_unknown_level_defaults_to_info(self, monkeypatch):
        """Unknown level names fall back to INFO."""
        from lenstr._logging import _get_log_level

        monkeypatch.setenv("LENSTR_LOG_LEVEL", "chatty")

        assert _get_log_level() == logging.INFO

    def test_format_from_env_is_lowercased(self, monkeypatch):
        """LENSTR_LOG_FORMAT is case insensitive."""
        from lenstr._logging import _get_log_format

        monkeypatch.setenv("LENSTR_LOG_FORMAT", "JSON")

        assert _get_log_format() == "json"


class TestLoggerHierarchy:
    """Tests for logger hierarchy."""

    def test_logger_name_is_lenstr(self):
        """Root lenstr logger has correct name."""
        from lenstr._logging import logger

        assert logger.name == "lenstr"

    def test_scoped_loggers_are_children(self):
        """Scoped loggers are children of the lenstr logger."""
        from lenstr._logging import scoped_logger

        log = scoped_logger("mutate")

        assert log.logger.name == "lenstr.mutate"
        assert log.logger.parent.name == "lenstr"

    def test_child_inherits_level(self):
        """Child loggers inherit level from parent."""
        from lenstr._logging import setup_logging

        setup_logging("DEBUG")

        child = logging.getLogger("lenstr.child")

        assert child.getEffectiveLevel() == logging.DEBUG
