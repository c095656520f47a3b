# topmark:header:start
#
#   project      : Coral
#   file         : __init__.py
#   file_relpath : src/coral/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic model, extraction and grouping.

Design:
    - Diagnostics are immutable `Diagnostic` instances produced by the
      [`Extractor`][coral.diagnostic.extractor.Extractor] from decoded records.
    - The [`Grouper`][coral.diagnostic.grouping.Grouper] merges per-target
      duplicates into `DiagnosticGroup` clusters, preserving first-seen order.
    - `DiagnosticStats` aggregates group counts for the summary line.
"""

from __future__ import annotations

from coral.diagnostic.extractor import Extractor, extract_span, split_spans
from coral.diagnostic.grouping import Grouper, group_diagnostics
from coral.diagnostic.model import (
    Diagnostic,
    DiagnosticGroup,
    DiagnosticStats,
    Severity,
    Span,
    SpanLocation,
    compute_stats,
)

__all__ = [
    "Diagnostic",
    "DiagnosticGroup",
    "DiagnosticStats",
    "Extractor",
    "Grouper",
    "Severity",
    "Span",
    "SpanLocation",
    "compute_stats",
    "extract_span",
    "group_diagnostics",
    "split_spans",
]
