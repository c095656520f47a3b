# topmark:header:start
#
#   project      : Coral
#   file         : check.py
#   file_relpath : src/coral/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coral `check` and `clippy` commands.

Both run cargo in JSON-message mode and render its diagnostics as a compact
report. Arguments Coral does not recognize (``--all-targets``, ``-p NAME``,
``--`` and anything after it) are forwarded to cargo unchanged.

Exit status mirrors cargo's own exit status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from coral.cli.cmd_common import get_effective_verbosity, resolve_config, run_and_report
from coral.cli.errors import CoralCargoUnavailableError
from coral.cli.options import (
    CARGO_CONTEXT_SETTINGS,
    common_config_options,
    common_report_options,
)
from coral.config.logging import get_logger
from coral.core.errors import SourceUnavailableError
from coral.driver.cargo import CargoSource, Checker

if TYPE_CHECKING:
    from coral.cli_shared.formats import OutputFormat
    from coral.config.logging import CoralLogger
    from coral.rendering.formats import ReportLayout

logger: CoralLogger = get_logger(__name__)


def run_cargo(
    ctx: click.Context,
    *,
    checker: Checker | None,
    cargo_args: tuple[str, ...] = (),
    width: int | None = None,
    layout: ReportLayout | None = None,
    show_children: bool | None = None,
    output_format: OutputFormat | None = None,
    config_files: tuple[str, ...] = (),
    no_config: bool = False,
    dump_path: str | None = None,
) -> None:
    """Run cargo and report on its output.

    ``checker=None`` uses the configured checker (``[cargo] checker``).

    Raises:
        CoralCargoUnavailableError: If cargo cannot be executed.
    """
    config = resolve_config(
        ctx,
        config_files=config_files,
        no_config=no_config,
        cli_args={
            "checker": checker,
            "cargo_args": list(cargo_args),
            "width": width,
            "layout": layout,
            "show_children": show_children,
        },
    )

    source = CargoSource(
        config.checker,
        config.cargo_args,
        quiet=get_effective_verbosity(ctx) < 0,
    )
    try:
        source.start()
    except SourceUnavailableError as exc:
        raise CoralCargoUnavailableError(str(exc)) from exc

    run_and_report(ctx, source, config=config, output_format=output_format, dump_path=dump_path)


@click.command(
    name="check",
    context_settings=CARGO_CONTEXT_SETTINGS,
    help="Run 'cargo check' and print a compact diagnostic report.",
)
@common_report_options
@common_config_options
@click.argument("cargo_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def check_command(
    ctx: click.Context,
    *,
    cargo_args: tuple[str, ...],
    width: int | None,
    layout: ReportLayout | None,
    show_children: bool | None,
    output_format: OutputFormat | None,
    config_files: tuple[str, ...],
    no_config: bool,
    dump_path: str | None,
) -> None:
    """Run ``cargo check --message-format json [CARGO_ARGS]...``."""
    run_cargo(
        ctx,
        checker=Checker.CHECK,
        cargo_args=cargo_args,
        width=width,
        layout=layout,
        show_children=show_children,
        output_format=output_format,
        config_files=config_files,
        no_config=no_config,
        dump_path=dump_path,
    )


@click.command(
    name="clippy",
    context_settings=CARGO_CONTEXT_SETTINGS,
    help="Run 'cargo clippy' and print a compact diagnostic report.",
)
@common_report_options
@common_config_options
@click.argument("cargo_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def clippy_command(
    ctx: click.Context,
    *,
    cargo_args: tuple[str, ...],
    width: int | None,
    layout: ReportLayout | None,
    show_children: bool | None,
    output_format: OutputFormat | None,
    config_files: tuple[str, ...],
    no_config: bool,
    dump_path: str | None,
) -> None:
    """Run ``cargo clippy --message-format json [CARGO_ARGS]...``."""
    run_cargo(
        ctx,
        checker=Checker.CLIPPY,
        cargo_args=cargo_args,
        width=width,
        layout=layout,
        show_children=show_children,
        output_format=output_format,
        config_files=config_files,
        no_config=no_config,
        dump_path=dump_path,
    )
