"""Tests for logging utilities."""

import logging
from io import StringIO

import pytest

from newtonstep.logging import (
    configure_logging,
    get_logger,
    set_log_level,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    configure_logging(level=logging.WARNING)


def test_get_logger_namespaces_names():
    assert get_logger("test_module").name == "newtonstep.test_module"
    assert get_logger("newtonstep.optimize").name == "newtonstep.optimize"
    assert get_logger().name == "newtonstep"


def test_get_logger_caching():
    assert get_logger("test_module") is get_logger("test_module")


def test_get_logger_different_modules():
    logger1 = get_logger("module1")
    logger2 = get_logger("module2")
    assert logger1 is not logger2


def test_logger_does_not_propagate():
    assert get_logger("test_module").propagate is False


def test_configure_logging_redirects_output():
    stream = StringIO()
    configure_logging(level=logging.DEBUG, stream=stream)
    logger = get_logger("test_module")
    logger.debug("Debug message")
    output = stream.getvalue()
    assert "Debug message" in output
    assert "[DEBUG] newtonstep.test_module" in output


def test_configure_logging_applies_to_new_loggers():
    stream = StringIO()
    configure_logging(level=logging.INFO, stream=stream, format_string="%(message)s")
    get_logger("fresh_module_for_config").info("hello")
    assert stream.getvalue().strip() == "hello"


def test_set_log_level_string():
    logger = get_logger("test_module")
    set_log_level("DEBUG")
    assert logger.level == logging.DEBUG
    set_log_level("ERROR")
    assert logger.level == logging.ERROR


def test_set_log_level_rejects_unknown_name():
    with pytest.raises(ValueError):
        set_log_level("LOUD")
