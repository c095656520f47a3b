# topmark:header:start
#
#   project      : Coral
#   file         : __init__.py
#   file_relpath : src/coral/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coral's line-to-report pipeline (decode → extract → group)."""

from __future__ import annotations

from coral.pipeline.session import Report, Session, analyze

__all__ = ["Report", "Session", "analyze"]
