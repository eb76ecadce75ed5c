"""Fixtures for unit tests."""

import json
from pathlib import Path
from typing import Generator

import pytest
import structlog


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project directory with a package.json at version 1.2.0."""
    (tmp_path / "package.json").write_text(json.dumps({"name": "project", "version": "1.2.0"}), encoding="utf-8")
    return tmp_path


@pytest.fixture
def existing_notes() -> str:
    """Release notes with a Development section and one released version."""
    return (
        "# Release Notes\n"
        "\n"
        "## Development\n"
        "\n"
        "[Commits](https://github.com/owner/project/compare/v1.2.0...master)\n"
        "\n"
        "## v1.2.0 - January 1st, 2026\n"
        "- Initial release\n"
        "\n"
        "[Commits](https://github.com/owner/project/compare/v1.1.0...v1.2.0)\n"
    )


@pytest.fixture
def log_records() -> list[list[str]]:
    """Raw git log records, newest first: a pull request merge and a direct commit."""
    return [
        ["b" * 40, "Dev", "Merge pull request #12 from dev/feature", "Add feature flag support"],
        ["a" * 40, "Dev", "Fix typo in README", ""],
    ]
