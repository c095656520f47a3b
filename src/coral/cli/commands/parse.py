# topmark:header:start
#
#   project      : Coral
#   file         : parse.py
#   file_relpath : src/coral/cli/commands/parse.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coral `parse` command.

Reports on a captured ``cargo --message-format json`` stream instead of running
cargo, e.g.:

    cargo check --message-format json > build.jsonl; coral parse build.jsonl
    cargo clippy --message-format json | coral parse

Without ``--exit-code`` the outcome is taken from the stream's
``build-finished`` record, then from the presence of errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from coral.cli.cmd_common import resolve_config, run_and_report
from coral.cli.errors import CoralSourceUnavailableError
from coral.cli.options import common_config_options, common_report_options
from coral.core.errors import SourceUnavailableError
from coral.driver.sources import STDIN_NAME, open_source

if TYPE_CHECKING:
    from coral.cli_shared.formats import OutputFormat
    from coral.rendering.formats import ReportLayout


@click.command(
    name="parse",
    help="Report on a captured cargo JSON message stream (FILE, or '-' for stdin).",
)
@common_report_options
@common_config_options
@click.option(
    "--exit-code",
    "exit_code",
    type=int,
    default=None,
    help="Exit status of the cargo run that produced the stream.",
)
@click.argument("file", required=False, default=STDIN_NAME, metavar="[FILE|-]")
@click.pass_context
def parse_command(
    ctx: click.Context,
    *,
    file: str,
    exit_code: int | None,
    width: int | None,
    layout: ReportLayout | None,
    show_children: bool | None,
    output_format: OutputFormat | None,
    config_files: tuple[str, ...],
    no_config: bool,
    dump_path: str | None,
) -> None:
    """Read FILE (default: stdin) and print the report."""
    config = resolve_config(
        ctx,
        config_files=config_files,
        no_config=no_config,
        cli_args={"width": width, "layout": layout, "show_children": show_children},
    )
    try:
        source = open_source(file, exit_code=exit_code)
    except SourceUnavailableError as exc:
        raise CoralSourceUnavailableError(str(exc)) from exc

    run_and_report(ctx, source, config=config, output_format=output_format, dump_path=dump_path)
