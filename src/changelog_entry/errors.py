"""Exceptions raised by the entry writer and the changelog aggregator."""

from __future__ import annotations

from pathlib import Path


class ChangelogError(Exception):
    """Base class for all changelog-entry failures."""


class EntryExistsError(ChangelogError):
    """An entry file with the synthesized name is already present."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"an entry file named '{path.name}' already exists in {path.parent}")
        self.path = path


class EntryWriteError(ChangelogError):
    """The entry file could not be created or written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"failed to write entry file {path}: {reason}")
        self.path = path
        self.reason = reason


class EntryDirectoryError(ChangelogError):
    """The entry directory could not be listed."""

    def __init__(self, directory: Path, reason: str) -> None:
        super().__init__(f"failed to read entry directory {directory}: {reason}")
        self.directory = directory
        self.reason = reason


class EntryFormatError(ChangelogError, ValueError):
    """Entry file content lacks the category separator."""
