# topmark:header:start
#
#   project      : Coral
#   file         : formats.py
#   file_relpath : src/coral/cli_shared/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output formats selectable with ``--format``."""

from __future__ import annotations

from enum import Enum


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
        TEXT: Human-friendly report (layout chosen with ``--layout``).
        JSON: A single JSON document (envelope).
        NDJSON: One JSON object per line (records).
    """

    TEXT = "text"
    JSON = "json"
    NDJSON = "ndjson"


def is_machine_format(fmt: OutputFormat | None) -> bool:
    """Return True for JSON and NDJSON output."""
    return fmt in (OutputFormat.JSON, OutputFormat.NDJSON)
