# topmark:header:start
#
#   project      : Coral
#   file         : main.py
#   file_relpath : src/coral/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coral command-line entry point.

Key ideas:
- Group-level options (verbosity, color) are initialized once and placed into
  ``ctx.obj``; subcommands read them back through `cmd_common` helpers.
- Running ``coral`` without a subcommand runs the configured checker
  (``[cargo] checker``, ``check`` by default) with the configured arguments.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from coral.cli.cmd_common import init_color_state
from coral.cli.commands.check import check_command, clippy_command, run_cargo
from coral.cli.commands.parse import parse_command
from coral.cli.commands.version import version_command
from coral.cli.console import ClickConsole
from coral.cli.options import common_color_options, common_verbose_options, resolve_verbosity
from coral.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from coral.cli_shared.color import ColorMode
    from coral.config.logging import CoralLogger

logger: CoralLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.ensure_object(dict)

    # Program-output verbosity
    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging is configured via the environment only
    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    enable_color = init_color_state(ctx, color_mode=color_mode, no_color=no_color)
    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Compact, grouped reports for cargo check/clippy diagnostics.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the Coral CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )

    if ctx.invoked_subcommand is None:
        run_cargo(ctx, checker=None)


cli.add_command(check_command)

cli.add_command(clippy_command)

cli.add_command(parse_command)

cli.add_command(version_command)

if __name__ == "__main__":
    cli()
