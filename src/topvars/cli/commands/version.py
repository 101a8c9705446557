# topmark:header:start
#
#   project      : TopVars
#   file         : version.py
#   file_relpath : src/topvars/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TopVars `version` command.

Prints the current TopVars version as installed in the active Python environment.
"""

from __future__ import annotations

import json

import click

from topvars.cli.console import get_console_safely
from topvars.cli.options import output_format_option
from topvars.constants import TOPVARS_VERSION
from topvars.core.formats import OutputFormat, is_machine_format


@click.command(name="version", help="Show the current version of TopVars.")
@output_format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of TopVars."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console = get_console_safely()
    verbosity: int = int(ctx.obj.get("verbosity_level", 0))

    if is_machine_format(output_format):
        console.print(json.dumps({"version": TOPVARS_VERSION}))
    elif verbosity > 0:
        console.print(console.styled("TopVars version:", bold=True, underline=True))
        console.print(f"    {console.styled(TOPVARS_VERSION, bold=True)}")
    else:
        console.print(console.styled(TOPVARS_VERSION, bold=True))
