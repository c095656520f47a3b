# topmark:header:start
#
#   project      : Coral
#   file         : table.py
#   file_relpath : src/coral/rendering/table.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Columnar report layout.

    Level               File    Line     Message
    error        src/main.rs at 4:5      mismatched types
     note        src/main.rs at 2:9      expected due to this

The file column is right-aligned and keeps the *end* of long paths
(``...ong/path/lib.rs``), which is the part that identifies the file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from coral.constants import MIN_MESSAGE_WIDTH, NO_LOCATION
from coral.rendering.compact import render_footer, truncate

if TYPE_CHECKING:
    from coral.diagnostic.model import Diagnostic, DiagnosticGroup
    from coral.pipeline.session import Report
    from coral.rendering.formats import RenderOptions

LEVEL_COLUMN_WIDTH: int = 7
FILE_COLUMN_WIDTH: int = 18
LINE_COLUMN_WIDTH: int = 8
# Separators: " " + " at " + " "
SEPARATOR_WIDTH: int = 6
FILE_ELLIPSIS: str = "..."


def message_column_width(width: int) -> int:
    """Return the columns left for the message at a given line width."""
    return max(
        width - LEVEL_COLUMN_WIDTH - FILE_COLUMN_WIDTH - LINE_COLUMN_WIDTH - SEPARATOR_WIDTH,
        MIN_MESSAGE_WIDTH,
    )


def shorten_path(path: str, width: int = FILE_COLUMN_WIDTH) -> str:
    """Keep the tail of ``path`` so it fits ``width`` columns."""
    if len(path) <= width:
        return path
    return FILE_ELLIPSIS + path[len(path) - width + len(FILE_ELLIPSIS) :]


def render_headers(options: RenderOptions) -> str:
    """Return the column header row."""
    text = (
        f"{'Level':>{LEVEL_COLUMN_WIDTH}} {'File':>{FILE_COLUMN_WIDTH}}    "
        f"{'Line':<{LINE_COLUMN_WIDTH}} Message"
    )
    return click.style(text, bold=True) if options.color else text


def render_row(diagnostic: Diagnostic, options: RenderOptions, *, fallback: str = "") -> str:
    """Render one table row for a diagnostic (top-level or child)."""
    level = f"{diagnostic.severity.label:>{LEVEL_COLUMN_WIDTH}}"
    location = diagnostic.location
    if location is not None:
        file_col = f"{shorten_path(location.file_name):>{FILE_COLUMN_WIDTH}}"
        line_col = f"{location.line_start}:{location.column_start}"
    else:
        file_col = f"{shorten_path(fallback):>{FILE_COLUMN_WIDTH}}"
        line_col = ""
    line_col = f"{line_col:<{LINE_COLUMN_WIDTH}}"
    message = truncate(diagnostic.headline, message_column_width(options.width))
    if options.color:
        level = diagnostic.severity.color(level)
        file_col = click.style(file_col, fg="bright_cyan")
        line_col = click.style(line_col, fg="bright_cyan")
    return f"{level} {file_col} at {line_col} {message}".rstrip()


def render_table_group(group: DiagnosticGroup, options: RenderOptions) -> list[str]:
    """Render a group's row plus one row per child."""
    fallback = group.origin_targets[0] if group.origin_targets else NO_LOCATION
    lines = [render_row(group.representative, options, fallback=fallback)]
    if options.show_children:
        lines.extend(render_row(child, options) for child in group.children)
    return lines


def render_table(report: Report, options: RenderOptions) -> list[str]:
    """Render the full table layout, header row first and counts last."""
    lines = [render_headers(options)]
    for group in report.groups:
        lines.extend(render_table_group(group, options))
    return lines + render_footer(report, options)
