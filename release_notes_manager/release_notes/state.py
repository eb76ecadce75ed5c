"""Sidecar state persisting an unfinished release between runs."""

from pathlib import Path

import structlog
from pydantic import ValidationError as PydanticValidationError

from ..utils.constants import RELEASE_STATE_FILE
from .models import ReleaseState

logger = structlog.get_logger(__name__)


def state_path(directory: Path) -> Path:
    """Return the sidecar state file path of a project."""
    return directory / RELEASE_STATE_FILE


def load_state(directory: Path) -> ReleaseState:
    """Load the sidecar state, returning an empty state when there is none."""
    path = state_path(directory)
    if not path.is_file():
        return ReleaseState()

    try:
        state = ReleaseState.model_validate_json(path.read_text(encoding="utf-8"))
    except PydanticValidationError as exc:
        logger.warning("Ignoring unreadable release state", path=str(path), error=str(exc))
        return ReleaseState()

    logger.debug("Loaded release state", path=str(path), has_note=state.note is not None)
    return state


def save_state(directory: Path, state: ReleaseState) -> Path:
    """Write the sidecar state as a JSON object of note, increment and version."""
    path = state_path(directory)
    path.write_text(state.model_dump_json(), encoding="utf-8")
    logger.debug("Saved release state", path=str(path), increment=state.increment, version=state.version)
    return path
