# topmark:header:start
#
#   project      : Coral
#   file         : payloads.py
#   file_relpath : src/coral/machine/payloads.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Payload builders for Coral machine output.

Payloads are plain, JSON-serializable dicts. They are:
- Console-free (no printing)
- Click-free
- serialization-free (no `json.dumps`)

A group payload re-emits its representative in cargo's own ``message`` shape
(`diagnostic_to_message`), so a consumer can feed it back into Coral's decoder
as a ``compiler-message`` record.
"""

from __future__ import annotations

import platform
from typing import TYPE_CHECKING, Any, TypedDict

from coral.constants import CORAL_VERSION, TOOL_NAME

if TYPE_CHECKING:
    from coral.core.problems import Problem
    from coral.diagnostic.model import Diagnostic, DiagnosticGroup, Span
    from coral.pipeline.session import Report


class MetaPayload(TypedDict):
    """Metadata describing the Coral runtime environment for machine output."""

    tool: str
    version: str
    platform: str


def build_meta_payload() -> MetaPayload:
    """Return the `meta` block shared by every envelope and record."""
    return {
        "tool": TOOL_NAME,
        "version": CORAL_VERSION,
        "platform": platform.system().lower(),
    }


def span_to_dict(span: Span) -> dict[str, Any]:
    """Return a span in cargo's span-object shape."""
    loc = span.location
    out: dict[str, Any] = {
        "file_name": loc.file_name,
        "line_start": loc.line_start,
        "line_end": loc.line_end,
        "column_start": loc.column_start,
        "column_end": loc.column_end,
        "is_primary": span.is_primary,
        "label": span.label,
        "suggested_replacement": span.suggested_replacement,
        "suggestion_applicability": span.suggestion_applicability,
    }
    if span.macro_name is not None:
        out["expansion"] = {"macro_decl_name": span.macro_name}
    return out


def diagnostic_to_message(diagnostic: Diagnostic) -> dict[str, Any]:
    """Return ``diagnostic`` in cargo's ``message`` object shape.

    The primary span is written first and flagged ``is_primary``. Flattened
    children are written as a single-level ``children`` list.
    """
    spans = [span_to_dict(s) for s in diagnostic.spans]
    if diagnostic.primary_span is not None and spans:
        spans[0]["is_primary"] = True
    return {
        "level": diagnostic.severity.value,
        "message": diagnostic.message,
        "code": {"code": diagnostic.code} if diagnostic.code else None,
        "spans": spans,
        "children": [diagnostic_to_message(c) for c in diagnostic.children],
        "rendered": diagnostic.rendered,
    }


def build_group_payload(group: DiagnosticGroup) -> dict[str, Any]:
    """Return the payload for one diagnostic group."""
    location = group.representative.location
    return {
        "severity": group.severity.value,
        "location": location.short() if location is not None else None,
        "occurrences": group.occurrences,
        "targets": list(group.origin_targets),
        "message": diagnostic_to_message(group.representative),
    }


def build_problem_payload(problem: Problem) -> dict[str, Any]:
    """Return the payload for one skipped line."""
    return {
        "kind": problem.kind.value,
        "line": problem.line_no,
        "message": problem.message,
        "excerpt": problem.excerpt,
    }


def build_summary_payload(report: Report) -> dict[str, Any]:
    """Return the run summary: counts, outcome and exit status."""
    return {
        "counts": report.stats.to_dict(),
        "groups": len(report.groups),
        "diagnostics": report.n_diagnostics,
        "lines": report.n_lines,
        "unparsable": len(report.problems),
        "status": report.status_message,
        "exit_code": report.tool_exit_code,
        "interrupted": report.interrupted,
    }
