"""Validate command for checking entry files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import click
from rich.markup import escape
from rich.table import Table

from ..aggregate import parse_entry_text, scan_entry_files
from ..entries import ENTRY_TYPE_NAMES
from ..errors import ChangelogError
from ..utils import console, log_error, log_success, log_warning
from ._core import CLIContext, entry_dir_argument

__all__ = [
    "EntryCheck",
    "check_entries",
    "run_validate",
    "validate_cmd",
]


@dataclass
class EntryCheck:
    """Outcome of checking one entry file."""

    path: Path
    category: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def check_entries(entry_dir: Path) -> list[EntryCheck]:
    """Parse every entry file and record its category or the problem."""
    checks: list[EntryCheck] = []
    for path in scan_entry_files(entry_dir):
        try:
            category, _ = parse_entry_text(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            checks.append(EntryCheck(path, error=str(exc)))
            continue
        checks.append(EntryCheck(path, category=category))
    return checks


def run_validate(ctx: CLIContext, *, entry_dir: Path) -> list[EntryCheck]:
    """Python wrapper for validating entry files."""

    try:
        checks = check_entries(entry_dir)
    except ChangelogError as exc:
        raise click.ClickException(str(exc)) from exc

    if not checks:
        log_warning(f"no entry files found in {entry_dir}")
        return checks

    table = Table(box=None, padding=(0, 2, 0, 0), show_header=True)
    table.add_column("FILE", style="cyan")
    table.add_column("CATEGORY")
    table.add_column("STATUS")
    for check in checks:
        if not check.ok:
            status = "[red]malformed[/red]"
        elif check.category not in ENTRY_TYPE_NAMES:
            status = "[yellow]unknown category[/yellow]"
        else:
            status = "[green]ok[/green]"
        table.add_row(escape(check.path.name), escape(check.category or ""), status)
    console.print(table)

    failures = [check for check in checks if not check.ok]
    if not failures:
        log_success("all entry files look good")
        return checks

    for failure in failures:
        log_error(f"malformed entry at {failure.path}: {failure.error}")
    raise click.exceptions.Exit(1)


@click.command("validate")
@entry_dir_argument()
@click.pass_obj
def validate_cmd(ctx: CLIContext, entry_dir: Path) -> None:
    """Check that every entry file in ENTRY_DIR can be parsed."""

    run_validate(ctx, entry_dir=entry_dir)
