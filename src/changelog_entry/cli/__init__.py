"""CLI package for changelog-entry.

This package contains the modular CLI implementation:
- _core.py: CLIContext, shared arguments, main entry point
- _entry.py: entry command for writing entry files
- _generate.py: generate command for rendering the changelog
- _validate.py: validate command
"""

from __future__ import annotations

from ._core import (
    CLIContext,
    PROG_NAME,
    VERSION_FLAGS,
    create_cli_context,
    entry_dir_argument,
    _create_cli_group,
    main,
)
from ._entry import (
    create_entry,
    entry_cmd,
)
from ._generate import (
    collect_report,
    run_generate,
    generate_cmd,
)
from ._validate import (
    EntryCheck,
    check_entries,
    run_validate,
    validate_cmd,
)

# Create the main CLI group
cli = _create_cli_group()

# Register all commands with the cli group
cli.add_command(entry_cmd)
cli.add_command(generate_cmd)
cli.add_command(validate_cmd)


__all__ = [
    # Core
    "cli",
    "main",
    "CLIContext",
    "PROG_NAME",
    "VERSION_FLAGS",
    "create_cli_context",
    "entry_dir_argument",
    # Entry command
    "create_entry",
    "entry_cmd",
    # Generate command
    "collect_report",
    "run_generate",
    "generate_cmd",
    # Validate command
    "EntryCheck",
    "check_entries",
    "run_validate",
    "validate_cmd",
]
