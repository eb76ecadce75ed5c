"""Main release notes generation orchestration."""

from datetime import date
from pathlib import Path
from typing import TypeVar

import structlog

from ..utils.constants import RELEASE_NOTES_COMMIT_MESSAGE, TODO_MARKER_PATTERN
from ..utils.helpers import format_release_date
from ..utils.templates import load_package_template, render_template_with_model
from .documents import MarkdownWriter, find_rebuild_range, locate_notes_document
from .exceptions import ReleaseNotesError, ValidationError
from .extractor import ChangeExtractor
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
from .state import load_state, save_state
from .versions import read_prior_version, resolve_next_version

logger = structlog.get_logger(__name__)

BASE_TEMPLATE = "release_notes.md.j2"
VERSION_TEMPLATE = "version.md.j2"
LOG_TEMPLATE = "log.md.j2"

T = TypeVar("T")


def _require(value: T | None, name: str) -> T:
    if value is None:
        raise ReleaseNotesError(f"The {name} is not known yet, the earlier steps of the run must come first")
    return value


class NotesUpdater:
    """Drafts the notes of the next release and merges them into the notes file.

    A run walks through the same steps in order: check the repository, read
    the prior version and the existing notes, work out the commit range,
    draft (or resume) the change log, let the operator edit it, pick the next
    version and finally write the notes file and the sidecar state.

    Nothing is written before the final step, except for the sidecar
    checkpoint of an edited note, and dry runs write nothing at all.
    """

    def __init__(
        self,
        directory: Path,
        repository: GitRepository,
        interaction: ReleaseInteraction,
        dry_run: bool = False,
        rebuild: bool = False,
        today: date | None = None,
    ) -> None:
        """Initialize with the project directory and the run's collaborators.

        Args:
            directory: Project directory holding version descriptors and notes
            repository: Git collaborator for the project's working tree
            interaction: Operator facing prompts and editor
            dry_run: If True, compute the notes but write nothing
            rebuild: If True, write notes for the version already released
            today: Release date, defaults to the current date
        """
        self.directory = directory
        self.repository = repository
        self.interaction = interaction
        self.dry_run = dry_run
        self.rebuild = rebuild
        self.release_date = today or date.today()

        self.state: ReleaseState = load_state(directory)
        self.prior_version: str | None = None
        self.document: NotesDocument | None = None
        self.commit_range: CommitRange | None = None
        self.origin_name: str | None = None
        self.changes: list[Change] = []
        self.notes_content: str | None = None
        self.increment: IncrementKind | None = None
        self.version: str | None = None
        self.commit = False

    def ensure_repository_ready(self) -> None:
        """Require a clean working tree that is not behind its upstream."""
        self.repository.ensure_clean()
        self.repository.ensure_fetched()

    def read_versions(self) -> str:
        """Read the prior version from the project's version descriptor."""
        self.prior_version = read_prior_version(self.directory)
        return self.prior_version

    def load_notes(self) -> NotesDocument:
        """Locate the notes file; existing notes start the range at the prior version."""
        self.document = locate_notes_document(self.directory)
        if self.document.exists and self.prior_version is not None:
            self.commit_range = CommitRange(first=self.prior_version)
        return self.document

    def check_rebuild(self) -> None:
        """In rebuild mode, move the range back to cover the already released version."""
        if not self.rebuild:
            return
        document = _require(self.document, "notes document")
        self.commit_range = find_rebuild_range(document, _require(self.prior_version, "prior version"))
        self.release_date = self.repository.commit_time(self.commit_range.last).date()

    def collect_changes(self) -> list[Change]:
        """Collect the changes recorded in the commit range."""
        self.origin_name = self.repository.origin_name()
        if self.commit_range is None:
            self.commit_range = CommitRange(first=self.repository.find_first_commit())

        since = self.repository.commit_time(self.commit_range.first)
        logger.info("Collecting changes", first=self.commit_range.first, last=self.commit_range.last, since=since.isoformat())

        self.changes = ChangeExtractor(self.repository).extract_changes(self.commit_range)
        return self.changes

    def prompt_existing(self) -> None:
        """Offer an unfinished note from a previous run for reuse."""
        if self.state.note and not self.interaction.confirm_reuse(self.state.note):
            logger.info("Discarding unfinished release notes")
            self.state.note = None

    def build_context(self) -> NotesContext:
        """Collect the named values substituted into the templates."""
        commit_range = _require(self.commit_range, "commit range")
        return NotesContext(
            date=format_release_date(self.release_date),
            version=self.version,
            prior_version=_require(self.prior_version, "prior version"),
            first_commit=commit_range.first,
            last_commit=commit_range.last,
            origin_name=_require(self.origin_name, "origin name"),
            changes=self.changes,
        )

    def generate_notes(self) -> str:
        """Draft the change log, or reuse the pending note, and pass it through the editor.

        Raises:
            ValidationError: If the edited notes are empty or still hold a TODO placeholder.
        """
        self.notes_content = self.state.note or render_template_with_model(self.build_context(), load_package_template(LOG_TEMPLATE))

        edited = self.interaction.edit_notes(self.notes_content)
        if edited is None:
            return self.notes_content

        if not edited.strip():
            raise ValidationError("No content entered for notes")

        self.state.note = self.notes_content = edited
        if not self.dry_run:
            save_state(self.directory, self.state)

        if TODO_MARKER_PATTERN.search(self.notes_content):
            raise ValidationError("TODO left in notes. Please remove and try again.")

        self.commit = True
        return self.notes_content

    def ask_versions(self) -> str:
        """Pick the next version; a rebuild keeps the prior version."""
        prior_version = _require(self.prior_version, "prior version")
        if self.rebuild:
            self.version = prior_version
            return self.version

        self.increment = self.interaction.choose_increment(prior_version)
        custom_version = None
        if self.increment is IncrementKind.CUSTOM:
            custom_version = self.interaction.ask_custom_version(prior_version)
        self.version = resolve_next_version(prior_version, self.increment, custom_version)
        logger.info("Resolved next version", prior=prior_version, increment=self.increment.value, version=self.version)
        return self.version

    def render_fragment(self) -> str:
        """Render the release fragment: the version heading followed by the change log."""
        notes_content = _require(self.notes_content, "change log")
        heading = render_template_with_model(self.build_context(), load_package_template(VERSION_TEMPLATE))
        return heading + notes_content

    def merge_into_document(self, fragment: str) -> str:
        """Merge a fragment into the existing notes, seeding a new document when there are none."""
        version = _require(self.version, "next version")
        content = _require(self.document, "notes document").content
        if content is None:
            content = render_template_with_model(self.build_context(), load_package_template(BASE_TEMPLATE))
        return MarkdownWriter().merge(content, fragment, version)

    def persist(self, content: str) -> Path:
        """Write the notes file, record the release in the sidecar state and commit the notes.

        Both files are written before the commit is attempted.
        """
        notes_path = _require(self.document, "notes document").path
        notes_path.write_text(content, encoding="utf-8")
        logger.info("Wrote release notes", path=str(notes_path), version=self.version)

        self.state.increment = self.increment
        self.state.version = self.version
        save_state(self.directory, self.state)

        if self.commit:
            self.repository.add_commit(notes_path, RELEASE_NOTES_COMMIT_MESSAGE)
        return notes_path

    def run(self) -> ReleaseNotesResult:
        """Run every step of a release notes update in order.

        Returns:
            Result of the generation process
        """
        self.ensure_repository_ready()
        self.read_versions()
        self.load_notes()
        self.check_rebuild()
        self.collect_changes()
        self.prompt_existing()
        self.generate_notes()
        self.ask_versions()

        if self.dry_run:
            logger.info("Dry run mode - not writing release notes")
            return ReleaseNotesResult(
                status=ReleaseNotesStatus.DRY_RUN,
                version=self.version,
                generated_content=self.notes_content,
            )

        fragment = self.render_fragment()
        notes_path = self.persist(self.merge_into_document(fragment))
        return ReleaseNotesResult(
            status=ReleaseNotesStatus.SUCCESS,
            notes_path=notes_path,
            version=self.version,
            generated_content=fragment,
            committed=self.commit,
        )
