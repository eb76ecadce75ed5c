"""Defines the Command Line Interface (CLI) using Typer."""

from pathlib import Path

import click
import typer
from dotenv import load_dotenv
from typer import Argument, Option
from typing_extensions import Annotated

from release_notes_manager.configuration.env import settings
from release_notes_manager.configuration.logging import configure_logging
from release_notes_manager.release_notes.exceptions import ReleaseNotesError
from release_notes_manager.release_notes.generator import NotesUpdater
from release_notes_manager.release_notes.git import GitRepository
from release_notes_manager.release_notes.models import IncrementKind, ReleaseNotesStatus

load_dotenv()

typer_app = typer.Typer(pretty_exceptions_show_locals=False)


class TyperInteraction:
    """Operator interaction backed by Typer prompts and the configured editor."""

    def __init__(self, interactive: bool, increment: IncrementKind | None, resume: bool, editor: str | None) -> None:
        """Initialize with the answers fixed on the command line."""
        self.interactive = interactive
        self.increment = increment
        self.resume = resume
        self.editor = editor

    def confirm_reuse(self, note: str) -> bool:
        """Ask whether to reuse unfinished notes, or use --resume when not interactive."""
        if not self.interactive:
            return self.resume
        return typer.confirm("Unfinished notes found. Reuse?", default=True)

    def edit_notes(self, content: str) -> str | None:
        """Open the drafted notes in the editor, if one is configured."""
        if not self.editor:
            return None
        typer.echo(f"Launching editor: {self.editor}")
        return click.edit(content, editor=self.editor, extension=".md", require_save=False)

    def choose_increment(self, prior_version: str) -> IncrementKind:
        """Return the increment given on the command line, or prompt for one."""
        if self.increment is not None:
            return self.increment
        choices = ", ".join(kind.value for kind in IncrementKind)
        while True:
            answer = typer.prompt(f"Version increment from {prior_version} ({choices})", default=IncrementKind.PATCH.value)
            try:
                return IncrementKind(answer.strip().lower())
            except ValueError:
                typer.echo(f"'{answer}' is not one of {choices}", err=True)

    def ask_custom_version(self, prior_version: str) -> str:
        """Prompt for an explicit version."""
        return typer.prompt("Please enter new version", default=prior_version)


@typer_app.command(name="notes")
def notes_cli(
    increment: Annotated[
        IncrementKind | None,
        Argument(help="Version increment (major, minor, patch or prerelease). Required unless --interactive or --rebuild is given."),
    ] = None,
    dry_run: Annotated[bool, Option("--dry-run", help="Find the changes that will be recorded and print them rather than writing to disk.")] = False,
    rebuild: Annotated[bool, Option("--rebuild", help="Create notes for the version that has already been released.")] = False,
    interactive: Annotated[bool, Option("--interactive", help="Prompt for the version increment and for reuse of unfinished notes.")] = False,
    resume: Annotated[bool, Option("--resume/--no-resume", help="Reuse unfinished notes without prompting.")] = False,
    edit: Annotated[bool, Option("--edit/--no-edit", help="Open the drafted notes in the editor before writing them.")] = True,
    directory: Annotated[Path, Option("--directory", "-C", help="Project directory.", file_okay=False, exists=True)] = Path("."),
    remote: Annotated[str, Option("--remote", help="Git remote used for fetch checks and links.")] = settings.GIT_REMOTE,
    editor: Annotated[str | None, Option("--editor", help="Editor command used to review drafted notes.")] = settings.EDITOR,
    debug: Annotated[bool, Option("--debug", help="Enable debug logging.")] = settings.DEBUG,
) -> None:
    """Draft release notes from the git history and merge them into the project's notes file."""
    configure_logging(debug)

    if increment is IncrementKind.CUSTOM and not interactive:
        raise typer.BadParameter("custom versions can only be entered with --interactive", param_hint="'INCREMENT'")
    if increment is None and not interactive and not rebuild:
        raise typer.BadParameter("an increment is required unless --interactive or --rebuild is given", param_hint="'INCREMENT'")

    interaction = TyperInteraction(
        interactive=interactive,
        increment=increment,
        resume=resume,
        editor=editor if edit else None,
    )
    updater = NotesUpdater(
        directory=directory,
        repository=GitRepository(directory, remote=remote),
        interaction=interaction,
        dry_run=dry_run,
        rebuild=rebuild,
    )

    try:
        result = updater.run()
    except ReleaseNotesError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc

    if result.status is ReleaseNotesStatus.DRY_RUN:
        typer.echo(result.generated_content or "", nl=False)
        return

    notes_name = result.notes_path.name if result.notes_path is not None else "Release notes"
    if result.committed:
        typer.echo(f"{notes_name} updated with release notes for {result.version} and committed.")
    else:
        typer.echo(f"{notes_name} updated with latest release notes. Please review and commit prior to final release.")


@typer_app.callback()
def main() -> None:
    """Release notes scaffolding for git projects."""


if __name__ == "__main__":
    typer_app()
