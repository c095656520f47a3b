# topmark:header:start
#
#   project      : Coral
#   file         : __init__.py
#   file_relpath : src/coral/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coral package.

Coral reads the JSON message stream emitted by ``cargo check --message-format json``
(or ``cargo clippy``), deduplicates the diagnostics that cargo re-emits once per
build target, and renders them as a compact, one-line-per-diagnostic report.
"""

from __future__ import annotations
