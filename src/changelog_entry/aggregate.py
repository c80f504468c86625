"""Collect entry files from a directory into a grouped changelog."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .config import DEFAULT_TITLE
from .entries import ENTRY_FILE_SUFFIX, ENTRY_TYPE_NAMES
from .errors import EntryDirectoryError, EntryFormatError
from .utils import log_debug

CATEGORY_SEPARATOR = ": "


@dataclass
class SkippedFile:
    """An entry file left out of the report."""

    path: Path
    reason: str


@dataclass
class ChangelogReport:
    """Messages grouped by category, in the order categories were first seen."""

    sections: dict[str, list[str]] = field(default_factory=dict)
    skipped: list[SkippedFile] = field(default_factory=list)

    def add(self, category: str, message: str) -> None:
        self.sections.setdefault(category, []).append(message)

    @property
    def categories(self) -> list[str]:
        return list(self.sections)

    def __len__(self) -> int:
        return sum(len(messages) for messages in self.sections.values())


def scan_entry_files(directory: Path) -> list[Path]:
    """Return the entry files in ``directory``, sorted by name."""
    try:
        candidates = list(directory.iterdir())
    except OSError as exc:
        raise EntryDirectoryError(directory, exc.strerror or str(exc)) from exc
    paths = [
        path for path in candidates if path.suffix == ENTRY_FILE_SUFFIX and path.is_file()
    ]
    return sorted(paths, key=lambda path: path.name)


def parse_entry_text(content: str) -> tuple[str, str]:
    """Split entry file content into its category and message.

    Only the first separator counts, so messages may contain ': '. Trailing
    line breaks are dropped, so a message that itself ends in a line break
    does not survive a write and parse unchanged.
    """
    content = content.rstrip("\r\n")
    category, separator, message = content.partition(CATEGORY_SEPARATOR)
    if not separator:
        raise EntryFormatError(f"missing '{CATEGORY_SEPARATOR}' between category and message")
    return category, message


def aggregate_entries(directory: Path) -> ChangelogReport:
    """Read every entry file in ``directory`` into a report.

    Files that cannot be read or parsed are recorded in ``report.skipped``.
    """
    report = ChangelogReport()
    paths = scan_entry_files(directory)
    log_debug(f"found {len(paths)} entry file(s) in {directory}")
    for path in paths:
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            report.skipped.append(SkippedFile(path, f"unreadable: {exc}"))
            continue
        try:
            category, message = parse_entry_text(content)
        except EntryFormatError as exc:
            report.skipped.append(SkippedFile(path, str(exc)))
            continue
        report.add(category, message)
    return report


def _ordered_categories(report: ChangelogReport, order_by_type: bool) -> list[str]:
    categories = report.categories
    if not order_by_type:
        return categories
    known = [name for name in ENTRY_TYPE_NAMES if name in report.sections]
    unknown = [name for name in categories if name not in ENTRY_TYPE_NAMES]
    return known + unknown


def render_report(
    report: ChangelogReport,
    *,
    title: str = DEFAULT_TITLE,
    order_by_type: bool = False,
) -> str:
    """Render a report as Markdown with one section per category."""
    lines: list[str] = [f"# {title}", ""]

    if not report.sections:
        lines.append("No changes found.")
        return "\n".join(lines).rstrip("\n") + "\n"

    for category in _ordered_categories(report, order_by_type):
        lines.append(f"## {category}")
        lines.append("")
        for message in report.sections[category]:
            lines.append(f"- {message}")
        lines.append("")
    return "\n".join(lines).rstrip("\n") + "\n"
