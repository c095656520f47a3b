# topmark:header:start
#
#   project      : Coral
#   file         : __init__.py
#   file_relpath : src/coral/driver/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Input sources for Coral: cargo processes, captured files and streams."""

from __future__ import annotations

from coral.driver.cargo import CargoSource, Checker, build_command
from coral.driver.sources import (
    DumpingSource,
    FileSource,
    LineSource,
    StreamSource,
    open_source,
    run_session,
)

__all__ = [
    "CargoSource",
    "Checker",
    "DumpingSource",
    "FileSource",
    "LineSource",
    "StreamSource",
    "build_command",
    "open_source",
    "run_session",
]
