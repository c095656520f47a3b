# topmark:header:start
#
#   project      : Coral
#   file         : __init__.py
#   file_relpath : src/coral/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human-readable rendering of Coral reports (compact, table, rendered)."""

from __future__ import annotations

from coral.rendering.api import render_report, render_text
from coral.rendering.formats import RenderOptions, ReportLayout

__all__ = ["RenderOptions", "ReportLayout", "render_report", "render_text"]
