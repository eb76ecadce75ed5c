"""Release notes file discovery and markdown manipulation."""

import re
from pathlib import Path

import structlog

from ..utils.constants import DEVELOPMENT_HEADER, RELEASE_NOTES_FILES, UNRELEASED_COMPARE_MARKER, UNRELEASED_REF
from .exceptions import FormatError, NotFoundError
from .models import CommitRange, NotesDocument

logger = structlog.get_logger(__name__)


def find_first_existing(directory: Path, candidates: tuple[str, ...]) -> Path | None:
    """Return the first candidate that exists in the directory, if any."""
    for name in candidates:
        path = directory / name
        if path.is_file():
            return path
    return None


def locate_notes_document(directory: Path) -> NotesDocument:
    """Locate the release notes file of a project.

    The first existing candidate is adopted and loaded. When none exists, the
    lowest priority candidate is selected as the target of a new file.
    """
    path = find_first_existing(directory, RELEASE_NOTES_FILES)
    if path is None:
        default_path = directory / RELEASE_NOTES_FILES[-1]
        logger.info("No existing release notes found", path=str(default_path))
        return NotesDocument(path=default_path)

    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise FormatError(f"Release notes file {path.name} is not valid UTF-8 text: {exc}") from exc

    logger.info("Loaded existing release notes", path=str(path))
    return NotesDocument(path=path, content=content)


def find_rebuild_range(document: NotesDocument, prior_version: str) -> CommitRange:
    """Find the commit range of an already released version.

    The comparison link ending in the prior version is preferred; the link
    ending in the unreleased branch tip is used otherwise.

    Raises:
        NotFoundError: If there is no existing document or no matching link.
    """
    if not document.exists:
        raise NotFoundError("Rebuild specified but no existing release notes found")

    for end in (prior_version, UNRELEASED_REF):
        pattern = re.compile(rf"/([^/\s]+)\.\.\.{re.escape(end)}(?![\w.-])")
        for match in pattern.finditer(document.content or ""):
            previous = match.group(1)
            if previous != prior_version:
                logger.info("Found previous release", previous=previous, prior=prior_version)
                return CommitRange(first=previous, last=prior_version)

    raise NotFoundError(f'Unable to find previous version "{prior_version}" in release notes')


class MarkdownWriter:
    """Handles markdown manipulation for release notes."""

    def __init__(self, marker: str = DEVELOPMENT_HEADER) -> None:
        """Initialize with the line new notes are inserted under."""
        self.marker = marker

    def validate_structure(self, content: str) -> bool:
        """Validate that the markdown has the insertion marker."""
        if self.marker not in content:
            logger.error("Missing insertion marker", marker=self.marker.strip())
            return False
        return True

    def has_release(self, content: str, version: str) -> bool:
        """Return True when the notes already hold a section for a version."""
        return re.search(rf"^## {re.escape(version)}(?:\s|$)", content, re.MULTILINE) is not None

    def point_unreleased_link(self, content: str, version: str) -> str:
        """Point the first unreleased comparison link at a new version tag."""
        return content.replace(UNRELEASED_COMPARE_MARKER, f"...{version}", 1)

    def insert_release_notes(self, content: str, fragment: str) -> str:
        """Insert a fragment directly below the first insertion marker."""
        if not self.validate_structure(content):
            raise FormatError(f"Release notes are missing the '{self.marker.strip()}' heading")
        return content.replace(self.marker, self.marker + fragment, 1)

    def merge(self, content: str, fragment: str, version: str) -> str:
        """Merge a release fragment into a notes document."""
        if not self.validate_structure(content):
            raise FormatError(f"Release notes are missing the '{self.marker.strip()}' heading")
        if self.has_release(content, version):
            raise FormatError(f"Release notes already hold a section for {version}")
        updated = self.point_unreleased_link(content, version)
        updated = self.insert_release_notes(updated, fragment)
        logger.info("Merged release notes", version=version)
        return updated
