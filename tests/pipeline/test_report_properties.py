# topmark:header:start
#
#   project      : Coral
#   file         : test_report_properties.py
#   file_relpath : tests/pipeline/test_report_properties.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Property tests for the decode → group → render pipeline.

Generated cargo streams check that:
1) every summary line names the diagnostic's ``file:line:col``,
2) no human line exceeds the configured width,
3) groups come out in first-seen order, one per distinct diagnostic, and
4) regrouping the representatives is a no-op.
"""

from __future__ import annotations

from typing import Any

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from coral.diagnostic.grouping import group_diagnostics
from coral.pipeline.session import analyze
from coral.rendering.api import render_report
from coral.rendering.formats import RenderOptions
from tests.cargo_messages import jsonl
from tests.strategies_coral import s_compiler_message, s_stream_with_repeats

# Mark the entire test module
pytestmark: pytest.MarkDecorator = pytest.mark.hypothesis_slow


@settings(deadline=None, max_examples=60)
@given(record=s_compiler_message())
def test_summary_line_names_location(record: dict[str, Any]) -> None:
    """The first line of a one-diagnostic report carries its location."""
    primary = record["message"]["spans"][0]
    lines = render_report(analyze(jsonl(record)))

    location = f"{primary['file_name']}:{primary['line_start']}:{primary['column_start']}"
    assert f" {location}: " in lines[0]


@settings(deadline=None, max_examples=60)
@given(
    records=st.lists(s_compiler_message(), max_size=5),
    width=st.integers(min_value=60, max_value=160),
    verbose=st.booleans(),
)
def test_lines_fit_width(records: list[dict[str, Any]], width: int, verbose: bool) -> None:
    """Truncation keeps every rendered line within the width."""
    lines = render_report(analyze(jsonl(*records)), RenderOptions(width=width, verbose=verbose))

    assert all(len(line) <= width for line in lines)


@settings(deadline=None, max_examples=60)
@given(sample=s_stream_with_repeats())
def test_groups_follow_first_seen_order(sample: tuple[list[dict[str, Any]], list[int]]) -> None:
    """One group per distinct message, in order of first appearance."""
    distinct, order = sample
    report = analyze(jsonl(*(distinct[i] for i in order)))

    expected = [distinct[i]["message"]["message"] for i in dict.fromkeys(order)]
    assert [g.representative.message for g in report.groups] == expected
    assert sum(g.occurrences for g in report.groups) == len(order)


@settings(deadline=None, max_examples=60)
@given(sample=s_stream_with_repeats())
def test_regrouping_is_idempotent(sample: tuple[list[dict[str, Any]], list[int]]) -> None:
    """Grouping representatives again changes nothing."""
    distinct, order = sample
    groups = analyze(jsonl(*(distinct[i] for i in order))).groups

    regrouped = group_diagnostics(g.representative for g in groups)

    assert [g.key for g in regrouped] == [g.key for g in groups]
