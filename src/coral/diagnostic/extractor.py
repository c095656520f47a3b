# topmark:header:start
#
#   project      : Coral
#   file         : extractor.py
#   file_relpath : src/coral/diagnostic/extractor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Turn decoded records into normalized diagnostics.

Only ``compiler-message`` records yield a [`Diagnostic`][coral.diagnostic.model.Diagnostic].
Artifact and build-script records are dropped, but the target they name is
remembered per ``package_id``: cargo interleaves per-target artifact records with
per-target messages, so the last target seen for a package is the best guess
for a message that does not carry its own ``target``.

That correlation is kept on the `Extractor` instance. One extractor serves one
invocation; nothing is shared across runs.

Extraction rules:
    - severity from ``message.level`` (unknown levels map to ``unknown``);
    - primary span: first span with ``is_primary``, else the first span;
    - secondary spans: the remaining spans in source order;
    - children: nested messages, flattened to at most depth 2;
    - code from ``message.code.code``.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, cast

from coral.config.logging import get_logger
from coral.core.errors import SchemaError
from coral.diagnostic.model import Diagnostic, Severity, Span, SpanLocation
from coral.messages.records import (
    BuildScriptRecord,
    CompilerArtifactRecord,
    CompilerMessageRecord,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from coral.config.logging import CoralLogger
    from coral.messages.records import RawRecord

logger: CoralLogger = get_logger(__name__)

# Children of children are flattened to this depth.
MAX_CHILD_DEPTH: int = 2


def _as_int(value: object, default: int = 0) -> int:
    # bool is an int subclass; cargo never sends booleans for positions.
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


def _opt_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    return value if isinstance(value, str) else None


def extract_span(data: Mapping[str, Any]) -> Span | None:
    """Build a `Span` from a cargo span object.

    Args:
        data: One entry of a message's ``spans`` array.

    Returns:
        The span, or None when it has no ``file_name``.
    """
    file_name = _opt_str(data, "file_name")
    if not file_name:
        return None
    line_start = _as_int(data.get("line_start"), 1)
    column_start = _as_int(data.get("column_start"), 1)
    location = SpanLocation(
        file_name=file_name,
        line_start=line_start,
        column_start=column_start,
        line_end=_as_int(data.get("line_end"), line_start),
        column_end=_as_int(data.get("column_end"), column_start),
    )

    macro_name: str | None = None
    expansion = data.get("expansion")
    if isinstance(expansion, dict):
        macro_name = _opt_str(cast("dict[str, Any]", expansion), "macro_decl_name")

    return Span(
        location=location,
        is_primary=data.get("is_primary") is True,
        label=_opt_str(data, "label"),
        suggested_replacement=_opt_str(data, "suggested_replacement"),
        suggestion_applicability=_opt_str(data, "suggestion_applicability"),
        macro_name=macro_name,
    )


def split_spans(spans: list[Span]) -> tuple[Span | None, tuple[Span, ...]]:
    """Pick the primary span and return it with the remaining spans.

    The first span flagged primary wins (cargo should never flag two, but the
    tie-break must be deterministic). Without a flagged span, the first span is
    promoted. The remaining spans keep their source order.

    Args:
        spans: Spans in source order.

    Returns:
        ``(primary, secondary)``; ``primary`` is None when ``spans`` is empty.
    """
    if not spans:
        return None, ()
    index = next((i for i, s in enumerate(spans) if s.is_primary), 0)
    return spans[index], tuple(spans[:index] + spans[index + 1 :])


def _extract_spans(message: Mapping[str, Any]) -> list[Span]:
    raw = message.get("spans")
    if not isinstance(raw, list):
        return []
    spans: list[Span] = []
    for item in cast("list[object]", raw):
        if isinstance(item, dict):
            span = extract_span(cast("dict[str, Any]", item))
            if span is not None:
                spans.append(span)
    return spans


def _extract_code(message: Mapping[str, Any]) -> str | None:
    code = message.get("code")
    if isinstance(code, dict):
        value = cast("dict[str, Any]", code).get("code")
        return value if isinstance(value, str) and value else None
    return None


class Extractor:
    """Stateful record-to-diagnostic converter for one invocation.

    Attributes:
        targets_by_package: Last target identifier seen per ``package_id``.
        skipped_children: Number of child messages dropped for lacking text.
    """

    def __init__(self) -> None:
        self.targets_by_package: dict[str, str] = {}
        self.skipped_children: int = 0

    def observe(self, record: RawRecord) -> None:
        """Remember the target named by an artifact or build-script record."""
        if isinstance(record, CompilerArtifactRecord):
            if record.package_id and record.target is not None:
                self.targets_by_package[record.package_id] = record.target.identifier
        elif isinstance(record, BuildScriptRecord) and record.package_id:
            # Build scripts compile as a separate "build-script-build" target.
            self.targets_by_package.setdefault(record.package_id, "build-script")

    def resolve_target(self, record: CompilerMessageRecord) -> str | None:
        """Return the origin target of a compiler message.

        Precedence: the record's own ``target``, then the cached target for its
        package, then the raw ``package_id``.
        """
        if record.target is not None:
            return record.target.identifier
        if record.package_id:
            return self.targets_by_package.get(record.package_id, record.package_id)
        return None

    def extract(self, record: RawRecord, *, line_no: int | None = None) -> Diagnostic | None:
        """Return the diagnostic carried by ``record``, if any.

        Non-message records return None after updating the target cache.

        Args:
            record: A decoded record.
            line_no: 1-based source line number, for error reporting.

        Returns:
            The extracted diagnostic, or None for records that carry none.

        Raises:
            SchemaError: If a compiler message lacks ``level`` or ``message`` text.
        """
        if not isinstance(record, CompilerMessageRecord):
            self.observe(record)
            return None

        message = record.message
        level = message.get("level")
        text = message.get("message")
        if not isinstance(level, str) or not isinstance(text, str):
            missing = "level" if not isinstance(level, str) else "message"
            raise SchemaError(
                f"compiler-message without 'message.{missing}'",
                line_no=line_no,
                excerpt=json.dumps(dict(message))[:80],
            )

        origin = self.resolve_target(record)
        primary, secondary = split_spans(_extract_spans(message))
        severity = Severity.from_level(level)
        if severity is Severity.UNKNOWN:
            logger.info("Unknown level %r on line %s; keeping as 'unknown'", level, line_no)

        diagnostic = Diagnostic(
            severity=severity,
            message=text,
            primary_span=primary,
            secondary_spans=secondary,
            children=tuple(self._flatten_children(message, depth=1, origin=origin)),
            code=_extract_code(message),
            origin_target=origin,
            rendered=_opt_str(message, "rendered"),
        )
        logger.trace(
            "Extracted %s %r at %s", severity.value, diagnostic.headline, diagnostic.location
        )
        return diagnostic

    def _flatten_children(
        self,
        message: Mapping[str, Any],
        *,
        depth: int,
        origin: str | None,
    ) -> list[Diagnostic]:
        raw = message.get("children")
        if not isinstance(raw, list):
            return []

        out: list[Diagnostic] = []
        for item in cast("list[object]", raw):
            if not isinstance(item, dict):
                continue
            child = cast("dict[str, Any]", item)
            text = child.get("message")
            if not isinstance(text, str):
                self.skipped_children += 1
                logger.debug("Dropping child message without text at depth %d", depth)
                continue
            level = child.get("level")
            severity = Severity.from_level(level) if isinstance(level, str) else Severity.UNKNOWN
            primary, secondary = split_spans(_extract_spans(child))
            out.append(
                Diagnostic(
                    severity=severity,
                    message=text,
                    primary_span=primary,
                    secondary_spans=secondary,
                    code=_extract_code(child),
                    origin_target=origin,
                    rendered=_opt_str(child, "rendered"),
                    depth=depth,
                )
            )
            # Grandchildren (and deeper) are demoted into the same flat list.
            out.extend(
                self._flatten_children(child, depth=min(depth + 1, MAX_CHILD_DEPTH), origin=origin)
            )
        return out
