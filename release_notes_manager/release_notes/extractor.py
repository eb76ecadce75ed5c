"""Extract recorded changes from the git history."""

import structlog

from ..utils.constants import MERGE_PULL_REQUEST_PATTERN, RELEASE_NOTES_COMMIT_MESSAGE, VERSION_SUBJECT_PATTERN
from .git import GitRepository
from .models import Change, CommitRange

logger = structlog.get_logger(__name__)


def is_release_bookkeeping(subject: str) -> bool:
    """Whether a commit only records a previous release (notes update or version bump)."""
    subject = subject.strip()
    return subject == RELEASE_NOTES_COMMIT_MESSAGE or VERSION_SUBJECT_PATTERN.match(subject) is not None


def parse_change(sha: str, author: str, subject: str, body: str) -> Change:
    """Build a change from a single log record."""
    match = MERGE_PULL_REQUEST_PATTERN.match(subject)
    return Change(
        sha=sha,
        subject=subject.strip(),
        body=body.strip(),
        pull_request=int(match.group(1)) if match else None,
        author=author or None,
    )


class ChangeExtractor:
    """Extracts the changes recorded between two revisions."""

    def __init__(self, repository: GitRepository) -> None:
        """Initialize with the git repository to read."""
        self.repository = repository

    def extract_changes(self, commit_range: CommitRange) -> list[Change]:
        """Extract changes in a commit range, oldest first.

        Commits that belong to a merged pull request are folded into the
        pull request entry, and release bookkeeping commits are skipped.
        """
        records = self.repository.log(commit_range.first, commit_range.last)
        changes = [parse_change(*record[:4]) for record in records]

        merged_shas = self._pull_request_member_shas(changes)

        selected = []
        for change in changes:
            if is_release_bookkeeping(change.subject):
                logger.debug("Skipping release bookkeeping commit", sha=change.short_sha, subject=change.subject)
                continue
            if change.pull_request is None and change.sha in merged_shas:
                continue
            selected.append(change)

        selected.reverse()
        logger.info(
            "Extracted changes",
            first=commit_range.first,
            last=commit_range.last,
            total_commits=len(changes),
            pull_requests=sum(1 for change in selected if change.pull_request is not None),
            changes=len(selected),
        )
        return selected

    def _pull_request_member_shas(self, changes: list[Change]) -> set[str]:
        shas: set[str] = set()
        for change in changes:
            if change.pull_request is None:
                continue
            # Commits reachable from the merged branch but not from the merge's first parent.
            members = self.repository.log(f"{change.sha}^1", f"{change.sha}^2")
            shas.update(record[0] for record in members)
        return shas
