"""Tests for entry rendering and entry file creation."""

from __future__ import annotations

import dataclasses
import errno
from pathlib import Path
from typing import Any

import pytest

from changelog_entry.config import Config
from changelog_entry.entries import (
    Entry,
    EntryType,
    entry_file_name,
    render_entry_text,
    write_entry,
)
from changelog_entry.errors import EntryExistsError, EntryWriteError


def test_render_without_references_has_no_suffix() -> None:
    entry = Entry(EntryType.ADDED, "Support foo")

    assert render_entry_text(entry) == "Added: Support foo"


def test_render_merge_request_link() -> None:
    entry = Entry(EntryType.FIXED, "Crash on start", mr_number=12)

    assert render_entry_text(entry) == (
        "Fixed: Crash on start [[MR-!12](http://gitlab/repo/-/merge_requests/12)]"
    )


def test_render_issue_link() -> None:
    entry = Entry(EntryType.SECURITY, "Escape input", issue_number=7)

    assert render_entry_text(entry) == (
        "Security: Escape input [[ISSUE-#7](http://gitlab/repo/-/issues/7)]"
    )


def test_render_places_merge_request_before_issue() -> None:
    entry = Entry(EntryType.CHANGED, "Rework parser", mr_number=3, issue_number=4)

    text = render_entry_text(entry)

    assert text == (
        "Changed: Rework parser"
        " [[MR-!3](http://gitlab/repo/-/merge_requests/3)]"
        " [[ISSUE-#4](http://gitlab/repo/-/issues/4)]"
    )
    assert text.index("MR-!3") < text.index("ISSUE-#4")


def test_render_uses_configured_base_urls() -> None:
    config = Config(
        issue_base_url="https://tracker.example.com/issues/",
        merge_request_base_url="https://git.example.com/mr",
    )
    entry = Entry(EntryType.REMOVED, "Old API", mr_number=5, issue_number=6)

    assert render_entry_text(entry, config) == (
        "Removed: Old API"
        " [[MR-!5](https://git.example.com/mr/5)]"
        " [[ISSUE-#6](https://tracker.example.com/issues/6)]"
    )


def test_render_keeps_zero_references() -> None:
    entry = Entry(EntryType.ADDED, "Zero", mr_number=0, issue_number=0)

    assert "[[MR-!0]" in render_entry_text(entry)
    assert "[[ISSUE-#0]" in render_entry_text(entry)


def test_file_name_without_references() -> None:
    entry = Entry(EntryType.ADDED, "Support foo")

    assert entry_file_name(entry) == "Support_foo.md"


def test_file_name_puts_issue_prefix_before_merge_request_prefix() -> None:
    entry = Entry(EntryType.FIXED, "Fix the bug", mr_number=12, issue_number=7)

    assert entry_file_name(entry) == "IN7_MR12_Fix_the_bug.md"


def test_file_name_replaces_each_whitespace_character() -> None:
    entry = Entry(EntryType.CHANGED, "a  b\tc\nd")

    assert entry_file_name(entry) == "a__b_c_d.md"


def test_file_name_keeps_punctuation() -> None:
    entry = Entry(EntryType.FIXED, "Fix: a, b!", mr_number=1)

    assert entry_file_name(entry) == "MR1_Fix:_a,_b!.md"


def test_file_names_differ_for_different_messages() -> None:
    first = Entry(EntryType.ADDED, "Support foo", issue_number=1)
    second = Entry(EntryType.ADDED, "Support bar", issue_number=1)

    assert entry_file_name(first) != entry_file_name(second)


def test_entry_type_parse_ignores_case_and_accepts_shortcuts() -> None:
    assert EntryType.parse("added") is EntryType.ADDED
    assert EntryType.parse("DEPRECATED") is EntryType.DEPRECATED
    assert EntryType.parse(" Fixed ") is EntryType.FIXED
    assert EntryType.parse("s") is EntryType.SECURITY


def test_entry_type_parse_rejects_unknown_values() -> None:
    with pytest.raises(ValueError, match="Unknown entry type 'feature'"):
        EntryType.parse("feature")


def test_entry_type_display_name() -> None:
    assert str(EntryType.DEPRECATED) == "Deprecated"
    assert [entry_type.label for entry_type in EntryType] == [
        "Added",
        "Changed",
        "Deprecated",
        "Removed",
        "Fixed",
        "Security",
    ]


def test_entry_accepts_type_names() -> None:
    entry = Entry("fixed", "Something")  # type: ignore[arg-type]

    assert entry.entry_type is EntryType.FIXED


def test_entry_is_immutable() -> None:
    entry = Entry(EntryType.ADDED, "Support foo")

    with pytest.raises(dataclasses.FrozenInstanceError):
        entry.message = "other"  # type: ignore[misc]


def test_entry_rejects_empty_message() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        Entry(EntryType.ADDED, "")


def test_entry_rejects_negative_references() -> None:
    with pytest.raises(ValueError, match="mr_number must not be negative"):
        Entry(EntryType.ADDED, "x", mr_number=-1)
    with pytest.raises(ValueError, match="issue_number must be an integer"):
        Entry(EntryType.ADDED, "x", issue_number="7")  # type: ignore[arg-type]


def test_write_entry_creates_file_with_rendered_text(tmp_path: Path) -> None:
    entry = Entry(EntryType.ADDED, "Support foo", mr_number=2)

    path = write_entry(entry, tmp_path)

    assert path == tmp_path / "MR2_Support_foo.md"
    assert path.read_text(encoding="utf-8") == render_entry_text(entry)


def test_write_entry_twice_fails_and_keeps_one_file(tmp_path: Path) -> None:
    entry = Entry(EntryType.FIXED, "Bar baz", mr_number=1, issue_number=2)
    write_entry(entry, tmp_path)

    with pytest.raises(EntryExistsError, match="already exists") as excinfo:
        write_entry(entry, tmp_path)

    assert excinfo.value.path == tmp_path / "IN2_MR1_Bar_baz.md"
    assert [path.name for path in tmp_path.iterdir()] == ["IN2_MR1_Bar_baz.md"]


def test_write_entry_does_not_overwrite_existing_content(tmp_path: Path) -> None:
    existing = tmp_path / "Support_foo.md"
    existing.write_text("Changed: keep me", encoding="utf-8")

    with pytest.raises(EntryExistsError):
        write_entry(Entry(EntryType.ADDED, "Support foo"), tmp_path)

    assert existing.read_text(encoding="utf-8") == "Changed: keep me"


def test_write_entry_reports_missing_directory(tmp_path: Path) -> None:
    missing = tmp_path / "missing"

    with pytest.raises(EntryWriteError, match="failed to write entry file"):
        write_entry(Entry(EntryType.ADDED, "Support foo"), missing)

    assert not missing.exists()


def test_write_entry_rejects_absolute_message(tmp_path: Path) -> None:
    entry_dir = tmp_path / "entries"
    entry_dir.mkdir()
    outside = tmp_path / "outside"

    with pytest.raises(EntryWriteError, match="must not contain a path separator"):
        write_entry(Entry(EntryType.ADDED, str(outside)), entry_dir)

    assert not (tmp_path / "outside.md").exists()
    assert list(entry_dir.iterdir()) == []


def test_write_entry_rejects_parent_directory_message(tmp_path: Path) -> None:
    entry_dir = tmp_path / "entries"
    entry_dir.mkdir()

    with pytest.raises(EntryWriteError, match="must not contain a path separator"):
        write_entry(Entry(EntryType.ADDED, "../escaped"), entry_dir)

    assert not (tmp_path / "escaped.md").exists()
    assert list(entry_dir.iterdir()) == []


def test_write_entry_reports_null_character(tmp_path: Path) -> None:
    with pytest.raises(EntryWriteError, match="failed to write entry file"):
        write_entry(Entry(EntryType.ADDED, "a\x00b"), tmp_path)

    assert list(tmp_path.iterdir()) == []


class _FailingHandle:
    """File handle stand-in whose writes fail like a full disk."""

    def __init__(self, handle: Any) -> None:
        self._handle = handle

    def __enter__(self) -> _FailingHandle:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._handle.close()

    def write(self, text: str) -> int:
        raise OSError(errno.ENOSPC, "No space left on device")


def test_write_entry_removes_partial_file_on_write_failure(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    real_open = Path.open

    def failing_open(self: Path, *args: Any, **kwargs: Any) -> _FailingHandle:
        return _FailingHandle(real_open(self, *args, **kwargs))

    monkeypatch.setattr(Path, "open", failing_open)

    with pytest.raises(EntryWriteError, match="No space left on device"):
        write_entry(Entry(EntryType.FIXED, "Bar baz"), tmp_path)

    monkeypatch.undo()
    assert list(tmp_path.iterdir()) == []
