"""Unit tests for release notes file discovery and merging."""

from pathlib import Path

import pytest

from release_notes_manager.release_notes.documents import (
    MarkdownWriter,
    find_first_existing,
    find_rebuild_range,
    locate_notes_document,
)
from release_notes_manager.release_notes.exceptions import FormatError, NotFoundError
from release_notes_manager.release_notes.models import CommitRange, NotesDocument


def test_locate_prefers_highest_priority_candidate(tmp_path: Path) -> None:
    """Test that RELEASE.md wins when every candidate exists."""
    for name in ("RELEASE.md", "release-notes.md", "CHANGELOG.md"):
        (tmp_path / name).write_text(f"# {name}\n", encoding="utf-8")

    document = locate_notes_document(tmp_path)

    assert document.path == tmp_path / "RELEASE.md"
    assert document.content == "# RELEASE.md\n"
    assert document.exists


def test_locate_follows_priority_order(tmp_path: Path) -> None:
    """Test that release-notes.md wins over CHANGELOG.md."""
    (tmp_path / "release-notes.md").write_text("notes\n", encoding="utf-8")
    (tmp_path / "CHANGELOG.md").write_text("changelog\n", encoding="utf-8")

    document = locate_notes_document(tmp_path)

    assert document.path.name == "release-notes.md"
    assert document.content == "notes\n"


def test_locate_without_candidates_uses_lowest_priority_default(tmp_path: Path) -> None:
    """Test that a missing document targets the lowest priority name."""
    document = locate_notes_document(tmp_path)

    assert document.path == tmp_path / "CHANGELOG.md"
    assert document.content is None
    assert not document.exists


def test_find_first_existing_ignores_directories(tmp_path: Path) -> None:
    """Test that directories named like candidates are not adopted."""
    (tmp_path / "RELEASE.md").mkdir()
    (tmp_path / "CHANGELOG.md").write_text("x", encoding="utf-8")

    assert find_first_existing(tmp_path, ("RELEASE.md", "CHANGELOG.md")) == tmp_path / "CHANGELOG.md"


def test_find_rebuild_range_from_released_link() -> None:
    """Test that the link ending in the prior version yields the preceding tag."""
    document = NotesDocument(
        path=Path("RELEASE.md"),
        content="## v1.2.0\n[Commits](https://github.com/owner/project/compare/v1.1.0...v1.2.0)\n",
    )

    assert find_rebuild_range(document, "v1.2.0") == CommitRange(first="v1.1.0", last="v1.2.0")


def test_find_rebuild_range_from_unreleased_link() -> None:
    """Test that the unreleased link is used when the version has no notes yet."""
    document = NotesDocument(
        path=Path("RELEASE.md"),
        content="## Development\n\n[Commits](https://github.com/owner/project/compare/v1.1.0...master)\n",
    )

    assert find_rebuild_range(document, "v1.2.0") == CommitRange(first="v1.1.0", last="v1.2.0")


def test_find_rebuild_range_prefers_released_link(existing_notes: str) -> None:
    """Test that an unreleased link starting at the prior version is not taken as its predecessor."""
    document = NotesDocument(path=Path("RELEASE.md"), content=existing_notes)

    assert find_rebuild_range(document, "v1.2.0") == CommitRange(first="v1.1.0", last="v1.2.0")


def test_find_rebuild_range_does_not_match_longer_versions() -> None:
    """Test that v1.2.0 does not match a link ending in v1.2.0.1."""
    document = NotesDocument(path=Path("RELEASE.md"), content="[Commits](https://x/compare/v1.1.0...v1.2.0.1)\n")

    with pytest.raises(NotFoundError):
        find_rebuild_range(document, "v1.2.0")


def test_find_rebuild_range_without_document() -> None:
    """Test that rebuilding without existing notes fails."""
    with pytest.raises(NotFoundError) as exc_info:
        find_rebuild_range(NotesDocument(path=Path("CHANGELOG.md")), "v1.2.0")

    assert "no existing release notes found" in str(exc_info.value)


def test_find_rebuild_range_without_link() -> None:
    """Test that rebuilding fails when no comparison link matches."""
    document = NotesDocument(path=Path("RELEASE.md"), content="# Release Notes\n\n## Development\n")

    with pytest.raises(NotFoundError) as exc_info:
        find_rebuild_range(document, "v1.2.0")

    assert 'Unable to find previous version "v1.2.0"' in str(exc_info.value)


def test_point_unreleased_link_is_idempotent() -> None:
    """Test that the link replacement has no second match."""
    writer = MarkdownWriter()
    content = "[Commits](https://x/compare/v1.2.0...master)\n"

    once = writer.point_unreleased_link(content, "v1.3.0")
    twice = writer.point_unreleased_link(once, "v1.3.0")

    assert once == "[Commits](https://x/compare/v1.2.0...v1.3.0)\n"
    assert twice == once


def test_point_unreleased_link_replaces_first_match_only() -> None:
    """Test that only the first unreleased link is replaced."""
    content = "a...master\nb...master\n"

    assert MarkdownWriter().point_unreleased_link(content, "v2.0.0") == "a...v2.0.0\nb...master\n"


def test_insert_release_notes_directly_below_marker() -> None:
    """Test that the fragment starts right after the marker and trailing text is preserved."""
    trailing = "\n[Commits](https://x/compare/v1.2.0...v1.3.0)\n\n## v1.2.0\n- Old\n"
    content = "# Release Notes\n\n## Development\n" + trailing

    updated = MarkdownWriter().insert_release_notes(content, "FRAGMENT\n")

    head, _, after = updated.partition("## Development\n")
    assert head == "# Release Notes\n\n"
    assert after == "FRAGMENT\n" + trailing


def test_insert_release_notes_first_marker_only() -> None:
    """Test that only the first marker receives the fragment."""
    content = "## Development\nx\n## Development\n"

    assert MarkdownWriter().insert_release_notes(content, "F\n") == "## Development\nF\nx\n## Development\n"


def test_insert_release_notes_without_marker() -> None:
    """Test that a document without the marker is rejected."""
    with pytest.raises(FormatError):
        MarkdownWriter().insert_release_notes("# Release Notes\n\n## v1.0.0\n", "F\n")


def test_merge_end_to_end() -> None:
    """Test both substitutions on an empty Development section."""
    content = "# Release Notes\n\n[Commits](https://x/compare/v1.2.0...master)\n## Development\n"

    merged = MarkdownWriter().merge(content, "<fragment>", "v1.3.0")

    assert merged == "# Release Notes\n\n[Commits](https://x/compare/v1.2.0...v1.3.0)\n## Development\n<fragment>"


def test_merge_without_marker_leaves_content_untouched() -> None:
    """Test that a missing marker fails before any substitution is applied."""
    writer = MarkdownWriter()

    with pytest.raises(FormatError) as exc_info:
        writer.merge("compare/v1.2.0...master\n", "F", "v1.3.0")

    assert "## Development" in str(exc_info.value)


def test_validate_structure() -> None:
    """Test marker detection."""
    writer = MarkdownWriter()

    assert writer.validate_structure("## Development\n")
    assert not writer.validate_structure("## Development")


def test_merge_rejects_existing_release_section(existing_notes: str) -> None:
    """Test that a version already documented is not merged twice."""
    with pytest.raises(FormatError) as exc_info:
        MarkdownWriter().merge(existing_notes, "## v1.2.0 - October 17th, 2026\n- Again\n", "v1.2.0")

    assert "already hold a section for v1.2.0" in str(exc_info.value)


@pytest.mark.parametrize(
    "content,expected",
    [
        ("## v1.2.0 - January 1st, 2026\n", True),
        ("## v1.2.0\n", True),
        ("## v1.2.0-rc.1 - January 1st, 2026\n", False),
        ("## v1.2.01\n", False),
        ("Mentions ## v1.2.0 inline\n", False),
    ],
)
def test_has_release(content: str, expected: bool) -> None:
    """Test detection of an existing version heading."""
    assert MarkdownWriter().has_release(content, "v1.2.0") is expected


def test_locate_rejects_undecodable_notes(tmp_path: Path) -> None:
    """Test that a notes file that is not UTF-8 text raises a format error."""
    (tmp_path / "RELEASE.md").write_bytes(b"# Release Notes\n\xff\xfe\x80\n")

    with pytest.raises(FormatError) as exc_info:
        locate_notes_document(tmp_path)

    assert "RELEASE.md is not valid UTF-8" in str(exc_info.value)
