"""Data models for release notes generation."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, computed_field


class IncrementKind(str, Enum):
    """Version component to bump, or an explicit custom replacement."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    PRERELEASE = "prerelease"
    CUSTOM = "custom"


class ReleaseNotesStatus(str, Enum):
    """Status of release notes generation."""

    SUCCESS = "success"
    DRY_RUN = "dry_run"


@dataclass
class NotesDocument:
    """Resolved release notes file and its existing content, if any."""

    path: Path
    content: str | None = None

    @property
    def exists(self) -> bool:
        """Whether the document was found on disk."""
        return self.content is not None


@dataclass
class CommitRange:
    """Revisions bounding the changes recorded for a release."""

    first: str
    last: str = "HEAD"


class Change(BaseModel):
    """A single change recorded in the git log."""

    sha: str
    subject: str
    body: str = ""
    pull_request: int | None = None
    author: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def short_sha(self) -> str:
        """Abbreviated commit id."""
        return self.sha[:7]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def title(self) -> str:
        """Human readable title, preferring the merge body for pull requests."""
        if self.pull_request is not None and self.body:
            return self.body.splitlines()[0].strip()
        return self.subject


class NotesContext(BaseModel):
    """Named values substituted into the release notes templates."""

    date: str
    version: str | None = None
    prior_version: str
    first_commit: str
    last_commit: str
    origin_name: str
    changes: list[Change] = []


class ReleaseState(BaseModel):
    """Unfinished release persisted in the sidecar state file."""

    note: str | None = None
    increment: IncrementKind | None = None
    version: str | None = None


class ReleaseNotesResult(BaseModel):
    """Result of release notes generation."""

    status: ReleaseNotesStatus
    notes_path: Path | None = None
    version: str | None = None
    generated_content: str | None = None
    committed: bool = False


class ReleaseInteraction(Protocol):
    """Protocol for the operator facing side of a release notes run."""

    def confirm_reuse(self, note: str) -> bool:
        """Whether an unfinished note from a previous run should be reused."""
        ...

    def edit_notes(self, content: str) -> str | None:
        """Let the operator edit drafted notes.

        Returns:
            The edited text, or None when no editor is available.
        """
        ...

    def choose_increment(self, prior_version: str) -> IncrementKind:
        """Pick the version component to bump."""
        ...

    def ask_custom_version(self, prior_version: str) -> str:
        """Ask for an explicit version when the custom increment was chosen."""
        ...
