# topmark:header:start
#
#   project      : Coral
#   file         : test_problems.py
#   file_relpath : tests/core/test_problems.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the per-run problem log."""

from __future__ import annotations

import logging

import pytest

from coral.core.errors import DecodeError, SchemaError
from coral.core.problems import EXCERPT_WIDTH, ProblemKind, ProblemLog, make_excerpt


def test_exceptions_are_classified_by_type() -> None:
    """Schema errors and plain decode errors land in different kinds."""
    log = ProblemLog()
    log.add_exception(DecodeError("invalid JSON", line_no=2, excerpt="nope"))
    log.add_exception(SchemaError("missing 'reason'", line_no=5, excerpt="{}"))

    assert len(log) == 2
    assert log.count(ProblemKind.DECODE) == 1
    assert log.count(ProblemKind.SCHEMA) == 1
    assert [p.line_no for p in log] == [2, 5]


def test_describe_mentions_line_and_kind() -> None:
    """Descriptions name the line (or the stream) and the failure class."""
    log = ProblemLog()
    log.add_decode_error("invalid JSON", line_no=3)
    log.add_schema_error("missing field")

    first, second = list(log)
    assert first.describe() == "line 3: decode error: invalid JSON"
    assert second.describe() == "stream: schema error: missing field"


def test_excerpts_are_stripped_and_cut() -> None:
    """Long offending lines are shortened for display."""
    long_line = "x" * (EXCERPT_WIDTH * 2)

    assert make_excerpt("  short \n") == "short"
    cut = make_excerpt(long_line)
    assert len(cut) == EXCERPT_WIDTH
    assert cut.endswith("…")


def test_freeze_snapshots_items() -> None:
    """A frozen log is unaffected by later additions."""
    log = ProblemLog()
    log.add_decode_error("a", line_no=1)
    frozen = log.freeze()
    log.add_decode_error("b", line_no=2)

    assert len(frozen) == 1
    assert frozen.count() == 1
    assert frozen.count(ProblemKind.SCHEMA) == 0


def test_additions_are_logged_at_warning(caplog: pytest.LogCaptureFixture) -> None:
    """Each skipped line also goes to the WARNING side channel."""
    log = ProblemLog()
    with caplog.at_level(logging.WARNING, logger="coral.core.problems"):
        log.add_decode_error("invalid JSON", line_no=7)

    (record,) = [r for r in caplog.records if r.name == "coral.core.problems"]
    assert record.levelno == logging.WARNING
    assert "line 7: decode error: invalid JSON" in record.getMessage()
