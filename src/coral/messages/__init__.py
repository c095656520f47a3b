# topmark:header:start
#
#   project      : Coral
#   file         : __init__.py
#   file_relpath : src/coral/messages/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Decoding of cargo's newline-delimited JSON message stream.

Each line becomes one of a closed set of record types
([`coral.messages.records`][coral.messages.records]); everything about schema
drift tolerance is confined to [`coral.messages.decoder`][coral.messages.decoder].
"""

from __future__ import annotations

from coral.messages.decoder import decode_line, iter_records
from coral.messages.records import (
    BuildFinishedRecord,
    BuildScriptRecord,
    CompilerArtifactRecord,
    CompilerMessageRecord,
    RawRecord,
    Reason,
    TargetInfo,
    UnknownRecord,
)

__all__ = [
    "BuildFinishedRecord",
    "BuildScriptRecord",
    "CompilerArtifactRecord",
    "CompilerMessageRecord",
    "RawRecord",
    "Reason",
    "TargetInfo",
    "UnknownRecord",
    "decode_line",
    "iter_records",
]
