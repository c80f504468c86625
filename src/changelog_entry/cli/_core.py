"""Core CLI infrastructure: context, the command group, and the entry point."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version as metadata_version
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import click

from .. import __version__ as package_version
from ..config import Config, resolve_config
from ..utils import abort_on_user_interrupt, configure_logging, log_debug

F = TypeVar("F", bound=Callable[..., Any])

__all__ = [
    "CLIContext",
    "PROG_NAME",
    "VERSION_FLAGS",
    "create_cli_context",
    "entry_dir_argument",
    "_create_cli_group",
    "main",
]

PROG_NAME = "changelog-entry"
VERSION_FLAGS = {"--version", "-V"}


def _resolve_cli_version() -> str:
    try:
        return metadata_version(PROG_NAME)
    except PackageNotFoundError:
        return package_version


@dataclass
class CLIContext:
    """Shared command context."""

    config_path: Optional[Path] = None
    _config: Optional[Config] = None

    def ensure_config(self) -> Config:
        if self._config is None:
            try:
                self._config = resolve_config(self.config_path)
            except (FileNotFoundError, ValueError) as error:
                raise click.ClickException(str(error)) from error
            log_debug(f"using config: {self._config}")
        return self._config


def create_cli_context(
    *,
    config: Optional[Path] = None,
    debug: bool = False,
) -> CLIContext:
    """Return a CLIContext using the same resolution logic as the CLI entry point."""

    configure_logging(debug)
    config_path = config.resolve() if config else None
    if config_path is not None:
        log_debug(f"using config path: {config_path}")
    return CLIContext(config_path=config_path)


def entry_dir_argument() -> Callable[[F], F]:
    """Shared ENTRY_DIR argument for commands working on an entry directory.

    The directory has to exist; click reports a usage error otherwise.

    Used by: entry, generate, validate
    """

    def decorator(f: F) -> F:
        return click.argument(
            "entry_dir",
            type=click.Path(path_type=Path, exists=True, file_okay=False),
        )(f)

    return decorator


def _create_cli_group() -> click.Group:
    """Create the main CLI group. Called after all commands are defined."""

    @click.group(context_settings={"help_option_names": ["-h", "--help"]})
    @click.option(
        "--config",
        type=click.Path(path_type=Path, dir_okay=False),
        help="Path to a YAML config file with link base URLs.",
    )
    @click.option(
        "--debug",
        "-d",
        is_flag=True,
        help="Enable debug logging.",
    )
    @click.pass_context
    def _cli(
        ctx: click.Context,
        config: Optional[Path],
        debug: bool,
    ) -> None:
        """Record changelog entries as files and generate a changelog from them."""

        ctx.obj = create_cli_context(config=config, debug=debug)

    return click.version_option(version=_resolve_cli_version())(_cli)


def main(argv: list[str] | None = None) -> int:
    """Entry point for console_scripts."""
    # Import cli here to avoid circular import at module load time
    from . import cli

    args = list(argv) if argv is not None else list(sys.argv[1:])

    if any(flag in args for flag in VERSION_FLAGS):
        click.echo(_resolve_cli_version())
        return 0

    try:
        # Without standalone mode click returns the code of a raised Exit.
        result = cli.main(args=args, prog_name=PROG_NAME, standalone_mode=False)
    except click.ClickException as exc:
        exc.show(file=sys.stderr)
        exit_code = getattr(exc, "exit_code", 1)
        return exit_code if isinstance(exit_code, int) else 1
    except click.exceptions.Abort as exc:
        try:
            abort_on_user_interrupt(exc)
        except click.exceptions.Exit as exit_exc:
            return exit_exc.exit_code
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0
    return result if isinstance(result, int) else 0
