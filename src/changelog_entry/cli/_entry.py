"""Entry command for writing a single changelog entry file."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..entries import ENTRY_TYPE_NAMES, Entry, EntryType, render_entry_text, write_entry
from ..errors import ChangelogError
from ..utils import log_info, log_success
from ._core import CLIContext, entry_dir_argument

__all__ = [
    "create_entry",
    "entry_cmd",
]


def _normalize_entry_type(value: str | EntryType) -> EntryType:
    if isinstance(value, EntryType):
        return value
    try:
        return EntryType.parse(value)
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


def create_entry(
    ctx: CLIContext,
    *,
    entry_type: str | EntryType,
    message: str,
    entry_dir: Path,
    mr_number: Optional[int] = None,
    issue_number: Optional[int] = None,
) -> Path:
    """Python wrapper for writing entries that mirrors the CLI behavior."""

    config = ctx.ensure_config()
    try:
        entry = Entry(
            entry_type=_normalize_entry_type(entry_type),
            message=message,
            mr_number=mr_number,
            issue_number=issue_number,
        )
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc

    try:
        path = write_entry(entry, entry_dir, config)
    except ChangelogError as exc:
        raise click.ClickException(str(exc)) from exc

    log_info(f"message:\n  {render_entry_text(entry, config)}")
    log_success(f"entry written to {path.name}")
    return path


@click.command("entry")
@click.argument(
    "entry_type",
    metavar="TYPE",
    type=click.Choice(ENTRY_TYPE_NAMES, case_sensitive=False),
)
@click.argument("message")
@entry_dir_argument()
@click.option(
    "--mr-number",
    "-m",
    type=click.IntRange(min=0),
    help="Merge request number.",
)
@click.option(
    "--issue-number",
    "-i",
    type=click.IntRange(min=0),
    help="Related issue number.",
)
@click.pass_obj
def entry_cmd(
    ctx: CLIContext,
    entry_type: str,
    message: str,
    entry_dir: Path,
    mr_number: Optional[int],
    issue_number: Optional[int],
) -> None:
    """Add a changelog entry file to ENTRY_DIR."""
    create_entry(
        ctx,
        entry_type=entry_type,
        message=message,
        entry_dir=entry_dir,
        mr_number=mr_number,
        issue_number=issue_number,
    )
