"""Contains exceptions raised while drafting release notes."""


class ReleaseNotesError(Exception):
    """Base class for all fatal release notes errors."""

    pass


class ConfigurationError(ReleaseNotesError):
    """Raised when no usable version descriptor can be found."""

    pass


class ValidationError(ReleaseNotesError):
    """Raised when operator supplied input is rejected."""

    pass


class NotFoundError(ReleaseNotesError):
    """Raised when rebuild mode cannot locate the previous release."""

    pass


class FormatError(ReleaseNotesError):
    """Raised when a notes document lacks the expected structure."""

    pass


class GitError(ReleaseNotesError):
    """Raised when a git command fails or reports an unusable repository state."""

    def __init__(self, message: str, command: list[str] | None = None, stderr: str | None = None) -> None:
        """Initializes the exception with the failing command and its error output."""
        super().__init__(message)
        self.command = command
        self.stderr = stderr
