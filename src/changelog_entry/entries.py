"""Entry rendering and entry file creation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .config import Config
from .errors import EntryExistsError, EntryWriteError
from .utils import replace_whitespace

ENTRY_FILE_SUFFIX = ".md"
ISSUE_PREFIX = "IN"
MERGE_REQUEST_PREFIX = "MR"
FILENAME_SEPARATOR = "_"


class EntryType(str, Enum):
    """Change categories, in the order they appear in a changelog."""

    ADDED = "Added"
    CHANGED = "Changed"
    DEPRECATED = "Deprecated"
    REMOVED = "Removed"
    FIXED = "Fixed"
    SECURITY = "Security"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> EntryType:
        """Return the entry type for a name or shortcut, ignoring case."""
        normalized = value.strip().lower()
        entry_type = ENTRY_TYPE_SHORTCUTS.get(normalized)
        if entry_type is None:
            raise ValueError(
                f"Unknown entry type '{value}'. Expected one of: {', '.join(ENTRY_TYPE_NAMES)}"
            )
        return entry_type


ENTRY_TYPE_NAMES = tuple(entry_type.value for entry_type in EntryType)
ENTRY_TYPE_SHORTCUTS: dict[str, EntryType] = {
    **{entry_type.value.lower(): entry_type for entry_type in EntryType},
    "a": EntryType.ADDED,
    "c": EntryType.CHANGED,
    "d": EntryType.DEPRECATED,
    "r": EntryType.REMOVED,
    "f": EntryType.FIXED,
    "s": EntryType.SECURITY,
}


def _check_reference(name: str, value: Optional[int]) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")


@dataclass(frozen=True)
class Entry:
    """A single changelog item before it is written to disk."""

    entry_type: EntryType
    message: str
    mr_number: Optional[int] = None
    issue_number: Optional[int] = None

    def __post_init__(self) -> None:
        if not isinstance(self.entry_type, EntryType):
            object.__setattr__(self, "entry_type", EntryType.parse(str(self.entry_type)))
        if not self.message:
            raise ValueError("Entry message must not be empty.")
        _check_reference("mr_number", self.mr_number)
        _check_reference("issue_number", self.issue_number)


def render_entry_text(entry: Entry, config: Optional[Config] = None) -> str:
    """Render the single-line entry file content, links included."""
    config = config or Config()
    text = f"{entry.entry_type.label}: {entry.message}"
    if entry.mr_number is not None:
        mr = entry.mr_number
        text += f" [[MR-!{mr}]({config.merge_request_base_url}/{mr})]"
    if entry.issue_number is not None:
        issue = entry.issue_number
        text += f" [[ISSUE-#{issue}]({config.issue_base_url}{issue})]"
    return text


def entry_file_name(entry: Entry) -> str:
    """Return the file name for an entry.

    The issue prefix precedes the merge request prefix. Every whitespace
    character of the message becomes an underscore, so messages that only
    differ in their kind of whitespace map to the same name.
    """
    parts: list[str] = []
    if entry.issue_number is not None:
        parts.append(f"{ISSUE_PREFIX}{entry.issue_number}{FILENAME_SEPARATOR}")
    if entry.mr_number is not None:
        parts.append(f"{MERGE_REQUEST_PREFIX}{entry.mr_number}{FILENAME_SEPARATOR}")
    parts.append(replace_whitespace(entry.message, FILENAME_SEPARATOR))
    parts.append(ENTRY_FILE_SUFFIX)
    return "".join(parts)


def write_entry(entry: Entry, directory: Path, config: Optional[Config] = None) -> Path:
    """Create a new entry file in ``directory`` and return its path.

    Raises EntryExistsError when a file with the same name is present and
    EntryWriteError for any other file system failure, including file names
    that would point outside ``directory``.
    """
    text = render_entry_text(entry, config)
    name = entry_file_name(entry)
    path = directory / name
    if any(separator and separator in name for separator in (os.sep, os.altsep)):
        raise EntryWriteError(path, "file name must not contain a path separator")
    try:
        handle = path.open("x", encoding="utf-8")
    except FileExistsError as exc:
        raise EntryExistsError(path) from exc
    except OSError as exc:
        raise EntryWriteError(path, exc.strerror or str(exc)) from exc
    except ValueError as exc:
        # Raised by the os layer for names with embedded null characters.
        raise EntryWriteError(path, str(exc)) from exc

    try:
        with handle:
            handle.write(text)
    except OSError as exc:
        path.unlink(missing_ok=True)
        raise EntryWriteError(path, exc.strerror or str(exc)) from exc
    return path
