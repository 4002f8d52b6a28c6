"""Tests for pathwise.core.utils.logging."""

import os

from loguru import logger

from pathwise.core.config_schema import LoggingSettings
from pathwise.core.utils.logging import level_for_verbosity, setup_logging


class TestLevelForVerbosity:
    def test_base_level(self):
        assert level_for_verbosity(0) == "WARNING"
        assert level_for_verbosity(0, "error") == "ERROR"

    def test_verbose_flags(self):
        assert level_for_verbosity(1) == "INFO"
        assert level_for_verbosity(2) == "DEBUG"
        assert level_for_verbosity(5, "ERROR") == "DEBUG"


class TestSetupLogging:
    def test_file_sink(self, tmp_dir):
        log_file = os.path.join(tmp_dir, "pathwise.log")
        setup_logging(LoggingSettings(level="info", file=log_file))
        logger.info("hello from the roadmap")
        logger.debug("not written")
        logger.complete()

        with open(log_file) as f:
            content = f.read()
        assert "hello from the roadmap" in content
        assert "not written" not in content

    def test_level_override(self, tmp_dir):
        log_file = os.path.join(tmp_dir, "pathwise.log")
        setup_logging(LoggingSettings(level="WARNING", file=log_file), level="DEBUG")
        logger.debug("debug detail")
        logger.complete()

        with open(log_file) as f:
            assert "debug detail" in f.read()

    def test_defaults(self):
        setup_logging()
        logger.warning("console only")
