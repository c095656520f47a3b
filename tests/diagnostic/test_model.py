# topmark:header:start
#
#   project      : Coral
#   file         : test_model.py
#   file_relpath : tests/diagnostic/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the core diagnostic value types and per-severity counts."""

from __future__ import annotations

import click

from coral.diagnostic.model import (
    Diagnostic,
    DiagnosticGroup,
    Severity,
    Span,
    SpanLocation,
    compute_stats,
)
from tests.conftest import parametrize


def _loc(file_name: str = "src/main.rs", line: int = 4, col: int = 5) -> SpanLocation:
    return SpanLocation(file_name, line, col, line, col + 3)


@parametrize(
    "severity, glyph",
    [
        (Severity.ERROR, "✗"),
        (Severity.WARNING, "⚠"),
        (Severity.NOTE, "•"),
        (Severity.HELP, "➜"),
        (Severity.UNKNOWN, "?"),
    ],
)
def test_glyphs(severity: Severity, glyph: str) -> None:
    """Each severity has a distinct one-character marker."""
    assert severity.glyph == glyph


def test_ice_is_an_error_with_long_label() -> None:
    """Internal compiler errors count as errors and say so on child lines."""
    assert Severity.ICE.is_error
    assert Severity.ERROR.is_error
    assert not Severity.WARNING.is_error
    assert Severity.ICE.label == "internal compiler error"
    assert Severity.NOTE.label == "note"


def test_from_level_is_case_and_space_insensitive() -> None:
    """Level strings are normalized before lookup."""
    assert Severity.from_level("  Warning ") is Severity.WARNING
    assert Severity.from_level("ICE") is Severity.ICE
    assert Severity.from_level("") is Severity.UNKNOWN


def test_color_function_wraps_text() -> None:
    """Severity colors are click.style partials; unstyling restores the text."""
    styled = Severity.ERROR.color("boom")

    assert styled != "boom"
    assert click.unstyle(styled) == "boom"


def test_headline_and_details() -> None:
    """The first line is the headline; following non-blank lines are details."""
    diagnostic = Diagnostic(Severity.ERROR, "first line  \n\n  second\nthird")

    assert diagnostic.headline == "first line"
    assert diagnostic.detail_lines == ["  second", "third"]


def test_spans_and_suggestions_include_children() -> None:
    """Suggestions are collected from the diagnostic and its children."""
    own = Span(_loc(line=1), is_primary=True, suggested_replacement="a")
    other = Span(_loc(line=2))
    child_span = Span(_loc(line=3), suggested_replacement="b")
    child = Diagnostic(Severity.HELP, "try this", primary_span=child_span, depth=1)
    diagnostic = Diagnostic(
        Severity.ERROR,
        "oops",
        primary_span=own,
        secondary_spans=(other,),
        children=(child,),
    )

    assert diagnostic.spans == (own, other)
    assert diagnostic.suggestions == (own, child_span)


def test_dedup_key_ignores_target_and_rendering() -> None:
    """Only severity, code, location and message identify a diagnostic."""
    a = Diagnostic(Severity.ERROR, "m", Span(_loc()), code="E1", origin_target="a", rendered="x")
    b = Diagnostic(Severity.ERROR, "m", Span(_loc()), code="E1", origin_target="b", rendered="y")

    assert a.dedup_key() == b.dedup_key()


def test_group_start_counts_one_occurrence() -> None:
    """A freshly started group holds exactly its representative."""
    diagnostic = Diagnostic(Severity.WARNING, "w", origin_target="demo (lib)")
    group = DiagnosticGroup.start(diagnostic)

    assert group.occurrences == 1
    assert group.origin_targets == ["demo (lib)"]
    assert group.severity is Severity.WARNING
    assert group.key == diagnostic.dedup_key()


def test_compute_stats_counts_groups_and_ice_as_errors() -> None:
    """ICE groups are counted as errors and separately."""
    groups = [
        DiagnosticGroup.start(Diagnostic(severity, f"m{i}"))
        for i, severity in enumerate(
            [Severity.ERROR, Severity.ICE, Severity.WARNING, Severity.WARNING, Severity.NOTE]
        )
    ]
    stats = compute_stats(groups)

    assert stats.n_error == 2
    assert stats.n_ice == 1
    assert stats.n_warning == 2
    assert stats.n_note == 1
    assert stats.total == 5
    assert stats.to_dict() == {
        "error": 2,
        "warning": 2,
        "note": 1,
        "help": 0,
        "unknown": 0,
        "ice": 1,
    }
