"""Shared constants used across the application."""

import re

# Version Descriptor Constants
# ----------------------------

VERSION_DESCRIPTOR_FILES = ("bower.json", "package.json")
"""Version descriptor candidates, highest priority first."""

VERSION_MARKER = "v"
"""Leading marker character used by version tags (e.g., v1.2.3)."""

PRERELEASE_PHASE = "rc"
"""Pre-release phase used when a final release is bumped to a pre-release."""

# Release Notes Constants
# -----------------------

RELEASE_NOTES_FILES = ("RELEASE.md", "release-notes.md", "CHANGELOG.md")
"""Release notes candidates, highest priority first. The last one is the default write target."""

RELEASE_STATE_FILE = ".generator-release"
"""Sidecar file persisting an unfinished release between runs."""

DEVELOPMENT_HEADER = "## Development\n"
"""Marker line under which newly drafted notes are inserted."""

UNRELEASED_REF = "master"
"""Branch tip name used by the unreleased comparison link."""

UNRELEASED_COMPARE_MARKER = f"...{UNRELEASED_REF}"
"""Comparison link suffix pointing at the unreleased branch tip."""

TODO_MARKER_PATTERN = re.compile(r"- TODO : ")
"""Placeholder left in drafted notes that must be removed before release."""

RELEASE_NOTES_COMMIT_MESSAGE = "Update release notes"
"""Commit message used when notes are committed automatically."""

# Git Log Constants
# -----------------

MERGE_PULL_REQUEST_PATTERN = re.compile(r"^Merge pull request #(\d+) from (\S+)")
"""Pattern to match GitHub pull request merge commit subjects."""

VERSION_SUBJECT_PATTERN = re.compile(r"^v?\d+\.\d+\.\d+\S*$")
"""Pattern to match bare version bump commit subjects (e.g., v1.2.3)."""

REMOTE_URL_PATTERN = re.compile(r"github\.com[:/]+([^/\s]+/[^/\s]+?)(?:\.git)?/?$")
"""Pattern to extract 'owner/repo' from a GitHub remote URL."""

LOG_FIELD_SEPARATOR = "\x1f"
"""Separator between fields of a single git log record."""

LOG_RECORD_SEPARATOR = "\x1e"
"""Separator between git log records."""
