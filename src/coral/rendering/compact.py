# topmark:header:start
#
#   project      : Coral
#   file         : compact.py
#   file_relpath : src/coral/rendering/compact.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Compact, one-line-per-diagnostic rendering.

Per group:

    ✗ src/main.rs:4:5: mismatched types
        note: expected `u32`, found `&str`

followed, after all groups, by the counts line:

    1 error, 0 warnings

Lines never wrap. Text that does not fit ``RenderOptions.width`` is cut and
ends in an ellipsis. Truncation is measured on the plain text, so enabling
color never changes where a line is cut.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from coral.constants import ELLIPSIS, MIN_MESSAGE_WIDTH, NO_LOCATION
from coral.core.problems import ProblemKind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from coral.diagnostic.model import Diagnostic, DiagnosticGroup, DiagnosticStats
    from coral.pipeline.session import Report
    from coral.rendering.formats import RenderOptions

CHILD_INDENT: str = "    "
DETAIL_INDENT: str = "      "


def truncate(text: str, width: int) -> str:
    """Cut ``text`` to at most ``width`` characters, ending in an ellipsis.

    Args:
        text: Single-line text.
        width: Maximum length of the result.

    Returns:
        ``text`` unchanged when it fits, else a prefix plus the ellipsis marker.
    """
    if len(text) <= width:
        return text
    if width <= len(ELLIPSIS):
        return ELLIPSIS[:width]
    return text[: width - len(ELLIPSIS)] + ELLIPSIS


def fit(prefix: str, text: str, width: int) -> str:
    """Return the part of ``text`` that fits after ``prefix`` on one line.

    The message always keeps at least ``MIN_MESSAGE_WIDTH`` columns, even when
    the prefix alone is wider than the line.
    """
    return truncate(text, max(width - len(prefix), MIN_MESSAGE_WIDTH))


def pluralize(count: int, noun: str) -> str:
    """Return ``"<count> <noun>"``, adding an ``s`` unless count is exactly 1."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def group_location(group: DiagnosticGroup) -> str:
    """Return ``file:line:col`` for a group, or a placeholder without a span.

    The placeholder is the first origin target when known, else an em dash.
    """
    location = group.representative.location
    if location is not None:
        return location.short()
    if group.origin_targets:
        return group.origin_targets[0]
    return NO_LOCATION


def render_summary_line(group: DiagnosticGroup, options: RenderOptions) -> str:
    """Render the one summary line of a group."""
    severity = group.severity
    location = group_location(group)
    prefix = f"{severity.glyph} {location}: "
    message = fit(prefix, group.representative.headline, options.width)
    if not options.color:
        return prefix + message
    return (
        f"{severity.color(severity.glyph)} "
        f"{click.style(location, fg='cyan')}: {message}"
    )


def render_child_line(child: Diagnostic, options: RenderOptions) -> str:
    """Render one indented child line (``note:``/``help:`` marker + first line)."""
    label = f"{child.severity.label}:"
    prefix = f"{CHILD_INDENT}{label} "
    message = fit(prefix, child.headline, options.width)
    if not options.color:
        return prefix + message
    return f"{CHILD_INDENT}{child.severity.color(label)} {message}"


def render_verbose_lines(group: DiagnosticGroup, options: RenderOptions) -> list[str]:
    """Render the extra lines verbose mode shows under a summary line."""
    rep = group.representative
    lines: list[str] = []

    for detail in rep.detail_lines:
        lines.append(DETAIL_INDENT + fit(DETAIL_INDENT, detail.strip(), options.width))

    if rep.code:
        lines.append(DETAIL_INDENT + f"code: {rep.code}")

    for span in rep.secondary_spans:
        text = f"also: {span.location.short()}"
        if span.label:
            text += f": {span.label}"
        lines.append(DETAIL_INDENT + fit(DETAIL_INDENT, text, options.width))

    for span in rep.suggestions:
        replacement = (span.suggested_replacement or "").replace("\n", "⏎")
        text = f"suggestion: {span.location.short()}: replace with `{replacement}`"
        if span.suggestion_applicability:
            text += f" ({span.suggestion_applicability})"
        lines.append(DETAIL_INDENT + fit(DETAIL_INDENT, text, options.width))

    if len(group.origin_targets) > 1:
        text = "targets: " + ", ".join(group.origin_targets)
        lines.append(DETAIL_INDENT + fit(DETAIL_INDENT, text, options.width))

    if not options.color:
        return lines
    return [click.style(line, dim=True) for line in lines]


def render_group(group: DiagnosticGroup, options: RenderOptions) -> list[str]:
    """Render a group: summary line, verbose extras, then children."""
    lines = [render_summary_line(group, options)]
    if options.verbose:
        lines.extend(render_verbose_lines(group, options))
    if options.show_children:
        lines.extend(render_child_line(child, options) for child in group.children)
    return lines


def render_counts(stats: DiagnosticStats) -> str:
    """Return the aggregate counts line, e.g. ``"1 error, 0 warnings"``."""
    return f"{pluralize(stats.n_error, 'error')}, {pluralize(stats.n_warning, 'warning')}"


def render_footer(report: Report, options: RenderOptions) -> list[str]:
    """Render the trailing counts line, plus an unparsable-lines line if any."""
    counts = render_counts(report.stats)
    lines = [click.style(counts, bold=True) if options.color else counts]
    n_problems = len(report.problems)
    if n_problems:
        text = f"{pluralize(n_problems, 'line')} unparsable"
        n_schema = report.problems.count(ProblemKind.SCHEMA)
        if options.verbose and n_schema:
            text += f" ({n_schema} with missing fields)"
        lines.append(click.style(text, fg="yellow") if options.color else text)
    return lines


def render_groups(groups: Iterable[DiagnosticGroup], options: RenderOptions) -> list[str]:
    """Render every group in order (no footer)."""
    lines: list[str] = []
    for group in groups:
        lines.extend(render_group(group, options))
    return lines


def render_compact(report: Report, options: RenderOptions) -> list[str]:
    """Render a full compact report.

    Args:
        report: The finished report.
        options: Rendering options.

    Returns:
        Display lines without trailing newlines.
    """
    return render_groups(report.groups, options) + render_footer(report, options)
