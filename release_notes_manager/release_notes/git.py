"""Thin wrapper around the git command line used while drafting release notes."""

import subprocess
from datetime import datetime
from pathlib import Path

import structlog

from ..utils.constants import LOG_FIELD_SEPARATOR, LOG_RECORD_SEPARATOR, REMOTE_URL_PATTERN
from .exceptions import GitError

logger = structlog.get_logger(__name__)

LOG_FORMAT = "%H%x1f%an%x1f%s%x1f%b%x1e"


class GitRepository:
    """Runs git commands against a working tree."""

    def __init__(self, path: Path, remote: str = "origin") -> None:
        """Initialize with the working tree path and the remote to compare against."""
        self.path = path
        self.remote = remote

    def run(self, *args: str) -> str:
        """Run a git command and return its standard output.

        Raises:
            GitError: If git is missing or the command exits with a non-zero status.
        """
        cmd = ["git", *args]
        logger.debug("Running git command", command=" ".join(cmd), cwd=str(self.path))
        try:
            result = subprocess.run(cmd, cwd=self.path, capture_output=True, text=True, check=True)
        except FileNotFoundError as exc:
            raise GitError("git executable not found", command=cmd) from exc
        except subprocess.CalledProcessError as exc:
            stderr = (exc.stderr or "").strip()
            raise GitError(f"Command '{' '.join(cmd)}' failed: {stderr}", command=cmd, stderr=stderr) from exc
        return result.stdout

    def ensure_clean(self) -> None:
        """Fail when the working tree has uncommitted changes."""
        status = self.run("status", "--porcelain", "--untracked-files=no")
        if status.strip():
            logger.error("Working tree has local changes", changes=status.splitlines())
            raise GitError("Local changes detected, please commit or stash them before continuing")

    def ensure_fetched(self) -> None:
        """Fetch the remote and fail when the current branch is behind its upstream."""
        self.run("fetch", self.remote)
        try:
            behind = self.run("rev-list", "--count", "HEAD..@{upstream}").strip()
        except GitError as exc:
            logger.warning("No upstream branch configured, skipping fetch check", error=exc.stderr)
            return
        if behind and int(behind) > 0:
            raise GitError(f"Local branch is {behind} commit(s) behind its upstream, please pull before continuing")

    def origin_name(self) -> str:
        """Return the 'owner/repo' name of the configured remote."""
        url = self.run("remote", "get-url", self.remote).strip()
        match = REMOTE_URL_PATTERN.search(url)
        if match is None:
            raise GitError(f"Unable to determine repository name from remote '{self.remote}' ({url})")
        return match.group(1)

    def find_first_commit(self) -> str:
        """Return the root commit of the current branch."""
        roots = self.run("rev-list", "--max-parents=0", "HEAD").split()
        if not roots:
            raise GitError("Unable to find the first commit of the repository")
        return roots[-1]

    def commit_time(self, revision: str) -> datetime:
        """Return the commit time of a revision."""
        timestamp = self.run("show", "-s", "--format=%cI", f"{revision}^{{commit}}").strip()
        return datetime.fromisoformat(timestamp)

    def log(self, first: str, last: str) -> list[list[str]]:
        """Return raw log records between two revisions, newest first.

        Each record holds the commit id, author name, subject and body.
        """
        output = self.run("log", f"--format={LOG_FORMAT}", f"{first}..{last}")
        records = []
        for raw_record in output.split(LOG_RECORD_SEPARATOR):
            raw_record = raw_record.strip("\n")
            if not raw_record:
                continue
            fields = raw_record.split(LOG_FIELD_SEPARATOR)
            records.append(fields + [""] * (4 - len(fields)))
        return records

    def add_commit(self, path: Path, message: str) -> None:
        """Stage a single file and commit it."""
        self.run("add", str(path))
        self.run("commit", "-m", message)
        logger.info("Committed file", path=str(path), message=message)
