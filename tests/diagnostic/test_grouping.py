# topmark:header:start
#
#   project      : Coral
#   file         : test_grouping.py
#   file_relpath : tests/diagnostic/test_grouping.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for cross-target deduplication of diagnostics."""

from __future__ import annotations

from coral.diagnostic.grouping import Grouper, group_diagnostics
from coral.diagnostic.model import Diagnostic, Severity, Span, SpanLocation


def _diag(
    message: str = "unused variable: `x`",
    *,
    severity: Severity = Severity.WARNING,
    line: int = 3,
    code: str | None = "unused_variables",
    target: str | None = "demo (lib)",
) -> Diagnostic:
    location = SpanLocation("src/lib.rs", line, 9, line, 10)
    return Diagnostic(
        severity=severity,
        message=message,
        primary_span=Span(location, is_primary=True),
        code=code,
        origin_target=target,
    )


def test_duplicates_across_targets_merge() -> None:
    """The same warning from lib and test builds renders once."""
    groups = group_diagnostics([_diag(target="demo (lib)"), _diag(target="demo (test)")])

    assert len(groups) == 1
    group = groups[0]
    assert group.occurrences == 2
    assert group.origin_targets == ["demo (lib)", "demo (test)"]
    assert group.representative.origin_target == "demo (lib)"


def test_repeated_target_is_listed_once() -> None:
    """Occurrences count every merge; targets are a set in first-seen order."""
    groups = group_diagnostics([_diag(), _diag(), _diag(target=None)])

    assert groups[0].occurrences == 3
    assert groups[0].origin_targets == ["demo (lib)"]


def test_any_key_difference_keeps_groups_apart() -> None:
    """Severity, code, location and message all take part in identity."""
    base = _diag()
    variants = [
        base,
        _diag(severity=Severity.ERROR),
        _diag(code=None),
        _diag(line=4),
        _diag(message="unused variable: `y`"),
    ]

    assert len(group_diagnostics(variants)) == len(variants)


def test_first_seen_order_is_preserved() -> None:
    """Groups are not sorted: errors after warnings stay after them."""
    a = _diag("a", line=10)
    b = _diag("b", severity=Severity.ERROR, line=1)
    c = _diag("c", line=5)

    groups = group_diagnostics([a, b, a, c, b])

    assert [g.representative.message for g in groups] == ["a", "b", "c"]


def test_unknown_severity_forms_its_own_group() -> None:
    """Unknown-level diagnostics are kept rather than dropped."""
    groups = group_diagnostics([_diag(), _diag(severity=Severity.UNKNOWN)])

    assert [g.severity for g in groups] == [Severity.WARNING, Severity.UNKNOWN]


def test_grouper_is_incremental() -> None:
    """`Grouper.add` returns the group each diagnostic landed in."""
    grouper = Grouper()
    first = grouper.add(_diag(target="demo (lib)"))
    second = grouper.add(_diag(target="demo (bin)"))

    assert first is second
    assert len(grouper) == 1
    assert grouper.groups() == [first]


def test_regrouping_representatives_is_stable() -> None:
    """Grouping the representatives again yields the same number of groups."""
    groups = group_diagnostics([_diag("a"), _diag("b"), _diag("a"), _diag("c", line=9)])
    regrouped = group_diagnostics([g.representative for g in groups])

    assert len(regrouped) == len(groups)
    assert [g.key for g in regrouped] == [g.key for g in groups]
