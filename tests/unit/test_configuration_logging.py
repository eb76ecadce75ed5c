"""Unit tests for the structlog configuration."""

import logging
from typing import Generator

import pytest
import structlog

from release_notes_manager.configuration.logging import configure_logging


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger, None, None]:
    """Restore root logger handlers and level after the test."""
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield root_logger
    root_logger.handlers = handlers
    root_logger.setLevel(level)


@pytest.mark.parametrize("debug,expected_level", [(True, logging.DEBUG), (False, logging.WARNING)])
def test_configure_logging_level(restore_root_logger: logging.Logger, debug: bool, expected_level: int) -> None:
    """Test that --debug lowers the root level."""
    configure_logging(debug)

    assert restore_root_logger.level == expected_level
    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)


def test_configure_logging_renders_events(restore_root_logger: logging.Logger, capsys: pytest.CaptureFixture[str]) -> None:
    """Test that structlog events reach stderr with their key/value pairs."""
    configure_logging(debug=False)

    structlog.get_logger("release_notes_manager.test").warning("Something happened", version="v1.3.0")

    captured = capsys.readouterr()
    assert "Something happened" in captured.err
    assert "version=v1.3.0" in captured.err
