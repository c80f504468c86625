"""Python-friendly facade for invoking changelog-entry functionality."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .cli import (
    CLIContext,
    EntryCheck,
    create_cli_context,
    create_entry,
    run_generate,
    run_validate,
)
from .entries import EntryType


class Changelog:
    """High-level helper that mirrors the CLI commands for Python callers."""

    def __init__(
        self,
        entry_dir: Path | str,
        *,
        config: Path | str | None = None,
        debug: bool = False,
    ) -> None:
        self.entry_dir = Path(entry_dir)
        resolved_config = Path(config) if config is not None else None
        self._ctx = create_cli_context(config=resolved_config, debug=debug)

    @property
    def context(self) -> CLIContext:
        """Expose the underlying CLIContext for advanced scenarios."""

        return self._ctx

    def add(
        self,
        entry_type: str | EntryType,
        message: str,
        *,
        mr_number: Optional[int] = None,
        issue_number: Optional[int] = None,
    ) -> Path:
        """Write an entry file and return its path."""

        return create_entry(
            self._ctx,
            entry_type=entry_type,
            message=message,
            entry_dir=self.entry_dir,
            mr_number=mr_number,
            issue_number=issue_number,
        )

    def generate(
        self,
        *,
        output: Path | str | None = None,
        title: Optional[str] = None,
        order_by_type: bool = False,
    ) -> str:
        """Render the changelog, printing it unless ``output`` is given."""

        return run_generate(
            self._ctx,
            entry_dir=self.entry_dir,
            output=Path(output) if output is not None else None,
            title=title,
            order_by_type=order_by_type,
        )

    def validate(self) -> list[EntryCheck]:
        """Check every entry file; exits with status 1 on malformed files."""

        return run_validate(self._ctx, entry_dir=self.entry_dir)
