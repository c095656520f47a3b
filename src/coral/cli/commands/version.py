# topmark:header:start
#
#   project      : Coral
#   file         : version.py
#   file_relpath : src/coral/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coral `version` command.

Prints the current Coral version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from coral.cli.cli_types import EnumChoiceParam
from coral.cli.cmd_common import get_effective_verbosity
from coral.cli.console import get_console
from coral.cli_shared.formats import OutputFormat, is_machine_format
from coral.constants import CORAL_VERSION, TOOL_NAME

if TYPE_CHECKING:
    from coral.cli_shared.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of Coral.",
)
@click.option(
    "--format",
    "output_format",
    type=EnumChoiceParam(OutputFormat),
    default=None,
    help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
)
@click.pass_context
def version_command(ctx: click.Context, *, output_format: OutputFormat | None = None) -> None:
    """Show the current version of Coral.

    Args:
        ctx (click.Context): The Click context.
        output_format (OutputFormat | None): Optional output format.
    """
    console: ConsoleLike = get_console(ctx)

    if is_machine_format(output_format):
        console.print(json.dumps({"tool": TOOL_NAME, "version": CORAL_VERSION}))
    elif get_effective_verbosity(ctx) > 0:
        console.print(f"{TOOL_NAME} {console.styled(CORAL_VERSION, bold=True)}")
    else:
        console.print(console.styled(CORAL_VERSION, bold=True))
