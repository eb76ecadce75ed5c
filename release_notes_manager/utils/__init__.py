"""Utility modules for shared functionality."""

from .constants import (
    DEVELOPMENT_HEADER,
    RELEASE_NOTES_FILES,
    RELEASE_STATE_FILE,
    VERSION_DESCRIPTOR_FILES,
)
from .helpers import format_release_date

__all__ = [
    "VERSION_DESCRIPTOR_FILES",
    "RELEASE_NOTES_FILES",
    "RELEASE_STATE_FILE",
    "DEVELOPMENT_HEADER",
    "format_release_date",
]
