"""
Tests for the interpsuite logging helpers.
"""

import io
import logging

import pytest

from interpsuite.libinterpsuite import logger


@pytest.fixture
def root_logger():
    """The interpsuite root logger, restored after each test."""
    root = logging.getLogger(logger.ROOT_NAME)
    handlers = list(root.handlers)
    level = root.level
    root.handlers = []
    yield root
    root.handlers = handlers
    root.setLevel(level)


class TestDebug2:
    def test_level_name(self):
        assert logging.getLevelName(logger.DEBUG2) == "DEBUG2"

    def test_sits_below_debug(self):
        assert logger.DEBUG2 == logging.DEBUG - 1

    def test_module_loggers_have_debug2(self):
        assert callable(logger.get_logger("interpsuite.test.methods").debug2)


class TestGetLogger:
    def test_default_is_root(self):
        assert logger.get_logger().name == "interpsuite"

    def test_child_inherits_level(self, root_logger):
        child = logger.get_logger("interpsuite.core.equispaced")
        logger.set_level(logging.WARNING)
        assert child.getEffectiveLevel() == logging.WARNING


class TestSetLevel:
    def test_level_int(self, root_logger):
        logger.set_level(logger.DEBUG2)
        assert root_logger.level == logger.DEBUG2

    def test_level_name(self, root_logger):
        logger.set_level("DEBUG")
        assert root_logger.level == logging.DEBUG


class TestSetup:
    def test_attaches_one_handler(self, root_logger):
        logger.setup(logging.INFO, stream=io.StringIO())
        logger.setup(logging.DEBUG, stream=io.StringIO())
        assert len(root_logger.handlers) == 1
        assert root_logger.level == logging.INFO

    def test_format(self, root_logger):
        buf = io.StringIO()
        logger.setup(logger.DEBUG2, stream=buf)
        log = logger.get_logger("interpsuite.test.format")
        log.info("standard message")
        log.debug2("inner detail")
        out = buf.getvalue()
        assert "INFO   : interpsuite.test.format: standard message" in out
        assert "DEBUG2 : interpsuite.test.format: inner detail" in out

    def test_debug2_hidden_at_debug(self, root_logger):
        buf = io.StringIO()
        logger.setup(logging.DEBUG, stream=buf)
        log = logger.get_logger("interpsuite.test.filtered")
        log.debug2("hidden")
        log.debug("shown")
        out = buf.getvalue()
        assert "hidden" not in out
        assert "shown" in out
