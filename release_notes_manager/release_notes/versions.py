"""Version detection and arithmetic for release notes."""

import json
from pathlib import Path

import structlog
from semver import Version

from ..utils.constants import PRERELEASE_PHASE, VERSION_DESCRIPTOR_FILES, VERSION_MARKER
from .exceptions import ConfigurationError, ValidationError
from .models import IncrementKind

logger = structlog.get_logger(__name__)


def strip_version_marker(value: str) -> str:
    """Remove a single leading version marker (v1.2.3 -> 1.2.3)."""
    if value.startswith(VERSION_MARKER):
        return value[len(VERSION_MARKER) :]
    return value


def to_tag(value: str) -> str:
    """Return the canonical tag form of a version, with exactly one marker."""
    return VERSION_MARKER + strip_version_marker(value)


def parse_version(value: str) -> Version:
    """Parse a version or tag string as a semantic version.

    Raises:
        ValueError: If the value is not a valid semantic version.
    """
    return Version.parse(strip_version_marker(value))


def read_prior_version(directory: Path) -> str:
    """Read the current project version from the first usable version descriptor.

    Candidates are probed in priority order. A candidate is skipped when it is
    missing, is not a JSON object, or has no valid semantic ``version`` field.

    Args:
        directory: Project directory holding the version descriptors.

    Returns:
        The version in tag form (e.g., v1.2.3).

    Raises:
        ConfigurationError: If no candidate holds a usable version.
    """
    for name in VERSION_DESCRIPTOR_FILES:
        path = directory / name
        if not path.is_file():
            logger.debug("Version descriptor not found", path=str(path))
            continue

        try:
            descriptor = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("Version descriptor is not valid JSON", path=str(path), error=str(exc))
            continue

        raw_version = descriptor.get("version") if isinstance(descriptor, dict) else None
        if not isinstance(raw_version, str) or not raw_version.strip():
            logger.warning("Version descriptor has no version field", path=str(path))
            continue

        try:
            parse_version(raw_version.strip())
        except ValueError:
            logger.warning("Version descriptor holds an invalid version", path=str(path), version=raw_version)
            continue

        prior_version = to_tag(raw_version.strip())
        logger.info("Read prior version", path=str(path), version=prior_version)
        return prior_version

    raise ConfigurationError(f"No usable version found in {' or '.join(VERSION_DESCRIPTOR_FILES)}")


def _bump_prerelease_identifier(prerelease: str) -> str:
    # The last numeric identifier is incremented; without one, a zero is appended.
    identifiers = prerelease.split(".")
    for index in range(len(identifiers) - 1, -1, -1):
        if identifiers[index].isdigit():
            identifiers[index] = str(int(identifiers[index]) + 1)
            return ".".join(identifiers)
    return ".".join(identifiers + ["0"])


def increment_version(value: str, increment: IncrementKind) -> str:
    """Advance a version by one increment kind.

    A pre-release whose lower components are already zero is promoted to its
    final release instead of skipping it (1.3.0-rc.1 + minor -> 1.3.0), so the
    result is always strictly greater than the input. Build metadata is
    dropped.

    Args:
        value: Version or tag to advance.
        increment: Component to bump. Custom increments are not computed.

    Returns:
        The next version in tag form.
    """
    current = parse_version(value)
    in_prerelease = current.prerelease is not None

    if increment is IncrementKind.MAJOR:
        if in_prerelease and current.minor == 0 and current.patch == 0:
            result = current.replace(prerelease=None, build=None)
        else:
            result = current.bump_major()
    elif increment is IncrementKind.MINOR:
        if in_prerelease and current.patch == 0:
            result = current.replace(prerelease=None, build=None)
        else:
            result = current.bump_minor()
    elif increment is IncrementKind.PATCH:
        if in_prerelease:
            result = current.replace(prerelease=None, build=None)
        else:
            result = current.bump_patch()
    elif increment is IncrementKind.PRERELEASE:
        if in_prerelease:
            result = current.replace(prerelease=_bump_prerelease_identifier(current.prerelease), build=None)
        else:
            result = current.bump_patch().replace(prerelease=f"{PRERELEASE_PHASE}.0")
    else:
        raise ValueError(f"Cannot compute a {increment.value} increment; an explicit version is required")

    logger.debug("Incremented version", prior=value, increment=increment.value, version=str(result))
    return to_tag(str(result))


def validate_custom_version(value: str, prior_version: str) -> str:
    """Validate an operator supplied version against the prior version.

    Raises:
        ValidationError: If the value is not a valid semantic version or is
            not larger than the prior version.

    Returns:
        The custom version in tag form.
    """
    candidate = strip_version_marker(value.strip())
    try:
        custom = Version.parse(candidate)
    except ValueError:
        raise ValidationError(f'"{value}" is not a valid version') from None

    if custom.compare(parse_version(prior_version)) <= 0:
        raise ValidationError(f'"{value}" must be larger than "{prior_version}"')

    return to_tag(candidate)


def resolve_next_version(prior_version: str, increment: IncrementKind, custom_version: str | None = None) -> str:
    """Compute the next version for an increment kind, validating custom input."""
    if increment is IncrementKind.CUSTOM:
        if custom_version is None:
            raise ValidationError("A custom increment requires an explicit version")
        return validate_custom_version(custom_version, prior_version)
    return increment_version(prior_version, increment)
