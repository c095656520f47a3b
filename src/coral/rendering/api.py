# topmark:header:start
#
#   project      : Coral
#   file         : api.py
#   file_relpath : src/coral/rendering/api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Entry point for rendering a finished report as human-readable lines."""

from __future__ import annotations

from typing import TYPE_CHECKING

from coral.rendering.compact import render_compact
from coral.rendering.formats import RenderOptions, ReportLayout
from coral.rendering.rendered import render_rendered
from coral.rendering.table import render_table

if TYPE_CHECKING:
    from collections.abc import Callable

    from coral.pipeline.session import Report

_RENDERERS: dict[ReportLayout, Callable[[Report, RenderOptions], list[str]]] = {
    ReportLayout.COMPACT: render_compact,
    ReportLayout.TABLE: render_table,
    ReportLayout.RENDERED: render_rendered,
}


def render_report(report: Report, options: RenderOptions | None = None) -> list[str]:
    """Render ``report`` with the layout selected in ``options``.

    Args:
        report: The finished report.
        options: Rendering options (defaults: compact, 100 columns, no color).

    Returns:
        Display lines, without trailing newlines.
    """
    options = options or RenderOptions()
    return _RENDERERS[options.layout](report, options)


def render_text(report: Report, options: RenderOptions | None = None) -> str:
    """Render ``report`` as a single newline-terminated string."""
    return "\n".join(render_report(report, options)) + "\n"
