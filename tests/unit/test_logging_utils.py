"""Unit tests for CLI logging configuration."""

import logging

import pytest

from inkreflow import ValidationError
from inkreflow.logging_utils import configure_logging, resolve_log_level


@pytest.fixture
def restore_package_logger():
    package_logger = logging.getLogger("inkreflow")
    saved = (list(package_logger.handlers), package_logger.propagate, package_logger.level)
    yield package_logger
    for handler in package_logger.handlers:
        if handler not in saved[0]:
            handler.close()
    package_logger.handlers[:], package_logger.propagate, package_logger.level = saved


@pytest.mark.unit
class TestLogging:
    """Test log level resolution and handler setup."""

    @pytest.mark.parametrize("value,expected", [("debug", logging.DEBUG), ("WARNING", logging.WARNING), (10, 10)])
    def test_resolve(self, value, expected):
        assert resolve_log_level(value) == expected

    def test_resolve_invalid(self):
        with pytest.raises(ValidationError):
            resolve_log_level("chatty")

    def test_console_handler(self, restore_package_logger):
        logger = configure_logging("INFO")
        assert logger is restore_package_logger
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_log_file(self, tmp_path, restore_package_logger):
        log_path = tmp_path / "render.log"
        logger = configure_logging("DEBUG", log_file=str(log_path), trace_mode=True)
        logger.getChild("api").debug("hello from the renderer")
        for handler in logger.handlers:
            handler.flush()
        text = log_path.read_text(encoding="utf-8")
        assert "hello from the renderer" in text
        assert "[inkreflow.api]" in text
