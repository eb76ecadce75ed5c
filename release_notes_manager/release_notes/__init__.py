"""Release notes generation module."""

from .documents import MarkdownWriter, find_rebuild_range, locate_notes_document
from .exceptions import (
    ConfigurationError,
    FormatError,
    GitError,
    NotFoundError,
    ReleaseNotesError,
    ValidationError,
)
from .extractor import ChangeExtractor
from .generator import NotesUpdater
from .git import GitRepository
from .models import (
    Change,
    CommitRange,
    IncrementKind,
    NotesContext,
    NotesDocument,
    ReleaseInteraction,
    ReleaseNotesResult,
    ReleaseNotesStatus,
    ReleaseState,
)

__all__ = [
    "IncrementKind",
    "ReleaseNotesStatus",
    "NotesDocument",
    "CommitRange",
    "Change",
    "NotesContext",
    "ReleaseState",
    "ReleaseNotesResult",
    "ReleaseInteraction",
    "ReleaseNotesError",
    "ConfigurationError",
    "ValidationError",
    "NotFoundError",
    "FormatError",
    "GitError",
    "GitRepository",
    "ChangeExtractor",
    "MarkdownWriter",
    "locate_notes_document",
    "find_rebuild_range",
    "NotesUpdater",
]
