"""Generate command for rendering the changelog from entry files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..aggregate import ChangelogReport, aggregate_entries, render_report
from ..errors import ChangelogError
from ..utils import emit_output, log_success, log_warning
from ._core import CLIContext, entry_dir_argument

__all__ = [
    "collect_report",
    "run_generate",
    "generate_cmd",
]


def collect_report(entry_dir: Path) -> ChangelogReport:
    """Aggregate entry files, warning about every file that was skipped."""
    try:
        report = aggregate_entries(entry_dir)
    except ChangelogError as exc:
        raise click.ClickException(str(exc)) from exc
    for skipped in report.skipped:
        log_warning(f"skipping {skipped.path}: {skipped.reason}")
    return report


def run_generate(
    ctx: CLIContext,
    *,
    entry_dir: Path,
    output: Optional[Path] = None,
    title: Optional[str] = None,
    order_by_type: bool = False,
) -> str:
    """Python wrapper for generating the changelog document."""

    config = ctx.ensure_config()
    report = collect_report(entry_dir)
    document = render_report(
        report,
        title=title or config.title,
        order_by_type=order_by_type,
    )
    if output is None:
        emit_output(document, newline=False)
        return document
    try:
        output.write_text(document, encoding="utf-8")
    except OSError as exc:
        raise click.ClickException(f"failed to write changelog to {output}: {exc}") from exc
    log_success(f"wrote {len(report)} entries to {output}")
    return document


@click.command("generate")
@entry_dir_argument()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    help="Write the changelog to a file instead of stdout.",
)
@click.option("--title", help="Heading of the generated changelog.")
@click.option(
    "--by-type",
    "order_by_type",
    is_flag=True,
    help="Order sections by entry type instead of first appearance.",
)
@click.pass_obj
def generate_cmd(
    ctx: CLIContext,
    entry_dir: Path,
    output: Optional[Path],
    title: Optional[str],
    order_by_type: bool,
) -> None:
    """Generate a changelog from the entry files in ENTRY_DIR."""
    run_generate(
        ctx,
        entry_dir=entry_dir,
        output=output,
        title=title,
        order_by_type=order_by_type,
    )
