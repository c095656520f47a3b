# topmark:header:start
#
#   project      : Coral
#   file         : rendered.py
#   file_relpath : src/coral/rendering/rendered.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pass-through layout: the compiler's own rendering, once per group.

Useful when a diagnostic needs the full source snippet, while still benefiting
from Coral's cross-target deduplication. Groups whose representative carries no
``rendered`` text fall back to the compact summary line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from coral.rendering.compact import render_footer, render_group

if TYPE_CHECKING:
    from coral.pipeline.session import Report
    from coral.rendering.formats import RenderOptions


def render_rendered(report: Report, options: RenderOptions) -> list[str]:
    """Render each group with the compiler's text, then the counts footer."""
    lines: list[str] = []
    for group in report.groups:
        rendered = group.representative.rendered
        if rendered:
            lines.extend(rendered.rstrip("\n").splitlines())
        else:
            lines.extend(render_group(group, options))
    return lines + render_footer(report, options)
