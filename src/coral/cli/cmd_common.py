# topmark:header:start
#
#   project      : Coral
#   file         : cmd_common.py
#   file_relpath : src/coral/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common command utilities for Click-based commands.

This module holds the plumbing shared by ``coral check``, ``coral clippy`` and
``coral parse``: resolving the layered config, draining a line source through
the pipeline, and emitting the report in the selected format. Command bodies
only decide *which* source to read.
"""

from __future__ import annotations

import shutil
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from coral.cli.console import get_console
from coral.cli.errors import (
    CoralConfigError,
    CoralSourceUnavailableError,
    CoralUnexpectedError,
    CoralUsageError,
)
from coral.cli_shared.color import ColorMode, resolve_color_mode
from coral.cli_shared.formats import OutputFormat
from coral.config.loaders import load_toml_dict
from coral.config.logging import get_logger
from coral.config.model import MutableConfig
from coral.constants import DEFAULT_TERMINAL_WIDTH
from coral.core.errors import SourceUnavailableError
from coral.driver.sources import DumpingSource, run_session
from coral.machine.serializers import serialize_json_report, serialize_ndjson_report
from coral.rendering.api import render_report

if TYPE_CHECKING:
    from collections.abc import Iterable

    from coral.cli_shared.console_api import ConsoleLike
    from coral.config.logging import CoralLogger
    from coral.config.model import Config
    from coral.driver.sources import LineSource
    from coral.pipeline.session import Report
    from coral.rendering.formats import RenderOptions

logger: CoralLogger = get_logger(__name__)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity stored on the context (0 when unset)."""
    obj = ctx.find_root().obj
    return int(obj.get("verbosity_level", 0)) if isinstance(obj, dict) else 0


def check_explicit_config_files(config_files: Iterable[str]) -> list[Path]:
    """Validate ``--config`` paths before the layered load.

    An explicit config file is a direct request, so problems with it are fatal
    rather than downgraded to warnings.

    Raises:
        CoralUsageError: If a path does not exist or is not a file.
        CoralConfigError: If a file cannot be read or parsed as TOML.
    """
    paths: list[Path] = []
    for raw in config_files:
        path = Path(raw)
        if not path.is_file():
            raise CoralUsageError(f"Config file not found: {raw}")
        problems: list[str] = []
        load_toml_dict(path, warnings=problems)
        if problems:
            raise CoralConfigError(problems[0])
        paths.append(path)
    return paths


def resolve_config(
    ctx: click.Context,
    *,
    config_files: Iterable[str] = (),
    no_config: bool = False,
    cli_args: dict[str, Any] | None = None,
) -> Config:
    """Build the effective config: defaults, discovered files, ``--config``, CLI flags.

    Config warnings are echoed to stderr unless quiet.
    """
    extra = check_explicit_config_files(config_files)
    draft = MutableConfig.load_merged(extra_config_files=extra, no_config=no_config)

    args: dict[str, Any] = dict(cli_args or {})
    if get_effective_verbosity(ctx) > 0:
        args["verbose"] = True
    config = draft.apply_cli_args(args).freeze()
    logger.debug("Effective config from %s: %s", config.config_files, config.to_toml_dict())

    if get_effective_verbosity(ctx) >= 0:
        console = get_console(ctx)
        for warning in config.warnings:
            console.warn(f"warning: {warning}")
    return config


def terminal_width() -> int:
    """Return the width of the attached terminal, or the default when piped."""
    try:
        isatty = sys.stdout.isatty()
    except (OSError, ValueError):
        isatty = False
    if not isatty:
        return DEFAULT_TERMINAL_WIDTH
    return shutil.get_terminal_size((DEFAULT_TERMINAL_WIDTH, 24)).columns


def build_render_options(
    ctx: click.Context,
    config: Config,
    output_format: OutputFormat,
) -> RenderOptions:
    """Resolve color and width for this run into renderer options."""
    obj = ctx.find_root().obj or {}
    color = resolve_color_mode(
        color_mode_override=obj.get("color_mode"),
        output_format=output_format,
    )
    return config.render_options(color=color, fallback_width=terminal_width())


def emit_report(
    ctx: click.Context,
    report: Report,
    *,
    config: Config,
    output_format: OutputFormat,
) -> None:
    """Write ``report`` to stdout in the selected format, plus a status line to stderr."""
    console: ConsoleLike = get_console(ctx)

    if output_format is OutputFormat.JSON:
        console.print(serialize_json_report(report))
    elif output_format is OutputFormat.NDJSON:
        console.print(serialize_ndjson_report(report), nl=False)
    else:
        for line in render_report(report, build_render_options(ctx, config, output_format)):
            console.print(line)

    if get_effective_verbosity(ctx) >= 0:
        console.status(style_status(console, report))


def style_status(console: ConsoleLike, report: Report) -> str:
    """Return the final status wording, colored by outcome."""
    text = report.status_message
    if report.interrupted:
        return console.styled(text, fg="yellow", bold=True)
    if report.failed:
        return console.styled(text, fg="bright_red", bold=True)
    if report.stats.n_warning > 0:
        return console.styled(text, fg="bright_yellow", bold=True)
    return console.styled(text, fg="bright_green", bold=True)


def run_and_report(
    ctx: click.Context,
    source: LineSource,
    *,
    config: Config,
    output_format: OutputFormat | None,
    dump_path: str | None = None,
) -> None:
    """Drain ``source``, emit the report and exit with the report's status.

    Core failures are expected to be translated by the caller; anything else
    escaping the pipeline becomes `CoralUnexpectedError`.
    """
    fmt = output_format or OutputFormat.TEXT
    if dump_path is not None:
        try:
            source = DumpingSource(source, dump_path)
        except SourceUnavailableError as exc:
            source.close()
            raise CoralSourceUnavailableError(str(exc)) from exc

    try:
        report = run_session(source)
        emit_report(ctx, report, config=config, output_format=fmt)
    except click.ClickException:
        raise
    except Exception as exc:
        logger.exception("Unexpected error while reading %s", source.name)
        raise CoralUnexpectedError(f"{type(exc).__name__}: {exc}") from exc
    finally:
        source.close()

    ctx.exit(report.tool_exit_code)


def init_color_state(ctx: click.Context, *, color_mode: ColorMode | None, no_color: bool) -> bool:
    """Store the color intent on the context and return whether stderr output is colored."""
    effective: ColorMode | None = ColorMode.NEVER if no_color else color_mode
    ctx.obj["color_mode"] = effective
    enabled = resolve_color_mode(color_mode_override=effective, output_format=None)
    ctx.obj["color_enabled"] = enabled
    ctx.color = enabled
    return enabled
