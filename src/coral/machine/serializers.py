# topmark:header:start
#
#   project      : Coral
#   file         : serializers.py
#   file_relpath : src/coral/machine/serializers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

r"""Envelope shaping and JSON/NDJSON serialization for Coral reports.

Conventions:
- JSON: one envelope object ``{"meta": ..., "groups": [...], "problems": [...],
  "summary": {...}}``, pretty-printed, no trailing newline.
- NDJSON: one record per line, each ``{"kind": <kind>, "meta": ..., <kind>: ...}``;
  groups first, then problems, then exactly one summary record. The returned
  string ends with a final ``\n``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from coral.machine.payloads import (
    build_group_payload,
    build_meta_payload,
    build_problem_payload,
    build_summary_payload,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from coral.machine.payloads import MetaPayload
    from coral.pipeline.session import Report


def build_json_envelope(*, meta: MetaPayload, **payloads: object) -> dict[str, object]:
    """Build a JSON envelope with `meta` plus one or more named payloads."""
    out: dict[str, object] = {"meta": dict(meta)}
    out.update(payloads)
    return out


def build_ndjson_record(*, kind: str, meta: MetaPayload, payload: object) -> dict[str, object]:
    """Build a single NDJSON record: ``{"kind": kind, "meta": meta, kind: payload}``."""
    return {"kind": kind, "meta": dict(meta), kind: payload}


def serialize_json_report(report: Report) -> str:
    """Serialize ``report`` as one pretty-printed JSON envelope."""
    envelope = build_json_envelope(
        meta=build_meta_payload(),
        groups=[build_group_payload(g) for g in report.groups],
        problems=[build_problem_payload(p) for p in report.problems],
        summary=build_summary_payload(report),
    )
    # json.dumps() doesn't append a trailing newline
    return json.dumps(envelope, indent=2, ensure_ascii=False)


def iter_ndjson_records(report: Report) -> Iterator[dict[str, object]]:
    """Yield the shaped NDJSON records of ``report``."""
    meta = build_meta_payload()
    for group in report.groups:
        yield build_ndjson_record(kind="group", meta=meta, payload=build_group_payload(group))
    for problem in report.problems:
        yield build_ndjson_record(kind="problem", meta=meta, payload=build_problem_payload(problem))
    yield build_ndjson_record(kind="summary", meta=meta, payload=build_summary_payload(report))


def serialize_ndjson_report(report: Report) -> str:
    """Serialize ``report`` as newline-delimited JSON (ends with a newline)."""
    return "\n".join(json.dumps(r, ensure_ascii=False) for r in iter_ndjson_records(report)) + "\n"
