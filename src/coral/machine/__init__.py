# topmark:header:start
#
#   project      : Coral
#   file         : __init__.py
#   file_relpath : src/coral/machine/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Machine-readable (JSON / NDJSON) output for Coral reports.

Where things live:
- [`coral.machine.payloads`][coral.machine.payloads]: build *payload* dicts
  (domain data, no envelope).
- [`coral.machine.serializers`][coral.machine.serializers]: wrap payloads in
  envelopes/records and serialize them to strings.

Machine output is always colorless.
"""

from __future__ import annotations

from coral.machine.payloads import (
    MetaPayload,
    build_group_payload,
    build_meta_payload,
    build_problem_payload,
    build_summary_payload,
    diagnostic_to_message,
)
from coral.machine.serializers import serialize_json_report, serialize_ndjson_report

__all__ = [
    "MetaPayload",
    "build_group_payload",
    "build_meta_payload",
    "build_problem_payload",
    "build_summary_payload",
    "diagnostic_to_message",
    "serialize_json_report",
    "serialize_ndjson_report",
]
