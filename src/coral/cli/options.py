# topmark:header:start
#
#   project      : Coral
#   file         : options.py
#   file_relpath : src/coral/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities for Coral.

This module centralizes reusable options (verbosity, color, report and config
options) and their resolution logic, so commands and groups can stay thin. The
helpers here are Click-aware.
"""

from __future__ import annotations

from typing import Callable, ParamSpec, TypeVar

import click

from coral.cli.cli_types import EnumChoiceParam
from coral.cli.errors import CoralUsageError
from coral.cli_shared.color import ColorMode
from coral.cli_shared.formats import OutputFormat
from coral.constants import MIN_MESSAGE_WIDTH
from coral.rendering.formats import ReportLayout

P = ParamSpec("P")
R = TypeVar("R")

#: Click context settings for commands that forward unknown options to cargo.
CARGO_CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "ignore_unknown_options": True,
    "allow_interspersed_args": False,
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v``/``-q`` counts.

    Args:
        verbose_count: Number of times the verbose flag (-v) is passed.
        quiet_count: Number of times the quiet flag (-q) is passed.

    Returns:
        ``-1`` when quiet (report only, cargo's progress output discarded),
        ``0`` by default, or the number of ``-v`` flags.

    Raises:
        CoralUsageError: If both verbose and quiet flags are used simultaneously.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise CoralUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return verbose_count


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (counted, mutually exclusive)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Show message details, secondary spans and suggestions.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Print the report only: no status line, no cargo progress output.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_report_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the report shaping options shared by every reporting command."""
    f = click.option(
        "--width",
        type=click.IntRange(min=MIN_MESSAGE_WIDTH),
        default=None,
        help="Maximum line width (default: terminal width, or 100 when not a terminal).",
    )(f)
    f = click.option(
        "--layout",
        type=EnumChoiceParam(ReportLayout),
        default=None,
        help=f"Human report layout ({', '.join(v.value for v in ReportLayout)}).",
    )(f)
    f = click.option(
        "--children/--no-children",
        "show_children",
        default=None,
        help="Show or hide note/help lines beneath each diagnostic.",
    )(f)
    f = click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config``, ``--no-config`` and ``--dump``."""
    f = click.option(
        "--config",
        "config_files",
        multiple=True,
        metavar="PATH",
        help="Extra config file merged over discovered ones (repeatable).",
    )(f)
    f = click.option(
        "--no-config",
        is_flag=True,
        help="Ignore Cargo.toml metadata and coral.toml in the working directory.",
    )(f)
    f = click.option(
        "--dump",
        "dump_path",
        type=click.Path(dir_okay=False),
        default=None,
        help="Append every raw JSON line read to this file.",
    )(f)
    return f
