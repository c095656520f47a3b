# topmark:header:start
#
#   project      : Coral
#   file         : decoder.py
#   file_relpath : src/coral/messages/decoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Decode one line of cargo JSON output into a typed record.

Contract:
    - Blank or whitespace-only lines decode to ``None`` (cargo and wrappers emit
      blank separators).
    - Text that is not a JSON object raises [`DecodeError`][coral.core.errors.DecodeError].
    - A JSON object without a string ``reason`` raises
      [`SchemaError`][coral.core.errors.SchemaError].
    - Fields Coral does not model are ignored; an unrecognized ``reason`` yields an
      [`UnknownRecord`][coral.messages.records.UnknownRecord].

Only the envelope is validated here. The ``message`` object of a
``compiler-message`` record is checked by the extractor, which knows which of
its fields are required.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, cast

from coral.config.logging import get_logger
from coral.core.errors import DecodeError, SchemaError
from coral.messages.records import (
    BuildFinishedRecord,
    BuildScriptRecord,
    CompilerArtifactRecord,
    CompilerMessageRecord,
    Reason,
    TargetInfo,
    UnknownRecord,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from coral.config.logging import CoralLogger
    from coral.messages.records import RawRecord

logger: CoralLogger = get_logger(__name__)


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _opt_bool(data: Mapping[str, Any], key: str) -> bool | None:
    value = data.get(key)
    return value if isinstance(value, bool) else None


def decode_target(data: object, *, profile: object = None) -> TargetInfo | None:
    """Decode a cargo ``target`` object.

    Args:
        data: The raw ``target`` value (anything; non-objects yield ``None``).
        profile: The record's ``profile`` value; ``profile.test`` marks test builds.

    Returns:
        The decoded target, or ``None`` when ``data`` has no usable ``name``.
    """
    if not isinstance(data, dict):
        return None
    target = cast("dict[str, Any]", data)
    name = _opt_str(target, "name")
    if not name:
        return None

    kinds_raw = target.get("kind")
    kinds: tuple[str, ...] = ()
    if isinstance(kinds_raw, list):
        kinds = tuple(k for k in cast("list[object]", kinds_raw) if isinstance(k, str))
    elif isinstance(kinds_raw, str):
        kinds = (kinds_raw,)

    is_test = "test" in kinds
    if isinstance(profile, dict):
        is_test = is_test or cast("dict[str, Any]", profile).get("test") is True

    return TargetInfo(
        name=name,
        kinds=kinds,
        src_path=_opt_str(target, "src_path"),
        test=is_test,
    )


def decode_object(data: Mapping[str, Any], *, line_no: int | None = None) -> RawRecord:
    """Decode an already-parsed JSON object into a record.

    Args:
        data: The top-level JSON object of one line.
        line_no: 1-based line number, for error reporting.

    Returns:
        The typed record.

    Raises:
        SchemaError: If ``reason`` is missing, or a ``compiler-message`` has no
            ``message`` object.
    """
    reason_raw = data.get("reason")
    if not isinstance(reason_raw, str):
        raise SchemaError(
            "missing string field 'reason'",
            line_no=line_no,
            excerpt=json.dumps(data)[:80],
        )

    package_id = _opt_str(data, "package_id")
    reason = Reason.parse(reason_raw)

    if reason is Reason.COMPILER_MESSAGE:
        message = data.get("message")
        if not isinstance(message, dict):
            raise SchemaError(
                "compiler-message without a 'message' object",
                line_no=line_no,
                excerpt=json.dumps(data)[:80],
            )
        return CompilerMessageRecord(
            message=cast("dict[str, Any]", message),
            package_id=package_id,
            target=decode_target(data.get("target")),
            payload=data,
        )

    if reason is Reason.COMPILER_ARTIFACT:
        return CompilerArtifactRecord(
            package_id=package_id,
            target=decode_target(data.get("target"), profile=data.get("profile")),
            fresh=_opt_bool(data, "fresh"),
            payload=data,
        )

    if reason is Reason.BUILD_SCRIPT_EXECUTED:
        return BuildScriptRecord(package_id=package_id, payload=data)

    if reason is Reason.BUILD_FINISHED:
        return BuildFinishedRecord(success=_opt_bool(data, "success"), payload=data)

    logger.debug("Unknown reason %r on line %s", reason_raw, line_no)
    return UnknownRecord(raw_reason=reason_raw, package_id=package_id, payload=data)


def decode_line(text: str, *, line_no: int | None = None) -> RawRecord | None:
    """Decode one line of cargo output.

    Args:
        text: The raw line (trailing newline allowed).
        line_no: 1-based line number, for error reporting.

    Returns:
        The decoded record, or ``None`` for a blank line.

    Raises:
        DecodeError: If the line is not a JSON object.
        SchemaError: If the JSON object misses a required envelope field.
    """
    stripped = text.strip()
    if not stripped:
        return None

    try:
        data: Any = json.loads(stripped)
    except ValueError as exc:
        # json.JSONDecodeError subclasses ValueError
        raise DecodeError(f"invalid JSON: {exc}", line_no=line_no, excerpt=stripped) from exc

    if not isinstance(data, dict):
        raise DecodeError(
            f"expected a JSON object, got {type(data).__name__}",
            line_no=line_no,
            excerpt=stripped,
        )

    record = decode_object(cast("dict[str, Any]", data), line_no=line_no)
    logger.trace("Decoded line %s as %s", line_no, type(record).__name__)
    return record


def iter_records(lines: Iterable[str]) -> Iterator[RawRecord]:
    """Decode ``lines`` strictly, skipping blanks.

    Unlike the pipeline session, this helper does not collect problems: the first
    undecodable line raises. It is meant for tests and for callers that trust
    their input.

    Args:
        lines: Raw text lines.

    Yields:
        One record per non-blank line.
    """
    for line_no, line in enumerate(lines, start=1):
        record = decode_line(line, line_no=line_no)
        if record is not None:
            yield record
