# topmark:header:start
#
#   project      : Coral
#   file         : grouping.py
#   file_relpath : src/coral/diagnostic/grouping.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Collapse per-target duplicates into ordered diagnostic groups.

Cargo compiles a crate once per target (lib, bin, tests, ...) and repeats the
same diagnostic for each. Two diagnostics with the same
[`dedup_key`][coral.diagnostic.model.Diagnostic.dedup_key] (severity, code,
primary location, message) become one `DiagnosticGroup`.

Groups come out in first-seen order of their representative. Nothing is sorted:
the compiler's emission order is kept so output stays diffable across runs.
Diagnostics of unknown severity are kept, in their own groups.

Grouping is closed: regrouping the representatives of a grouped set yields the
same number of groups.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from coral.config.logging import get_logger
from coral.diagnostic.model import DiagnosticGroup

if TYPE_CHECKING:
    from collections.abc import Iterable

    from coral.config.logging import CoralLogger
    from coral.diagnostic.model import DedupKey, Diagnostic

logger: CoralLogger = get_logger(__name__)


class Grouper:
    """Incremental grouping of diagnostics for one invocation.

    Uses an insertion-ordered dict, so iteration order is first-seen order.
    """

    def __init__(self) -> None:
        self._groups: dict[DedupKey, DiagnosticGroup] = {}

    def add(self, diagnostic: Diagnostic) -> DiagnosticGroup:
        """Place ``diagnostic`` into its group, opening one if needed.

        Args:
            diagnostic: A top-level diagnostic.

        Returns:
            The group the diagnostic now belongs to.
        """
        key = diagnostic.dedup_key()
        group = self._groups.get(key)
        if group is None:
            group = DiagnosticGroup.start(diagnostic)
            self._groups[key] = group
        else:
            group.absorb(diagnostic)
            logger.debug(
                "Merged duplicate %s %r (target %s)",
                diagnostic.severity.value,
                diagnostic.headline,
                diagnostic.origin_target,
            )
        return group

    def groups(self) -> list[DiagnosticGroup]:
        """Return the groups in first-seen order."""
        return list(self._groups.values())

    def __len__(self) -> int:
        return len(self._groups)


def group_diagnostics(diagnostics: Iterable[Diagnostic]) -> list[DiagnosticGroup]:
    """Group a whole sequence of diagnostics.

    Args:
        diagnostics: Top-level diagnostics in emission order.

    Returns:
        Deduplicated groups in first-seen order.
    """
    grouper = Grouper()
    for diagnostic in diagnostics:
        grouper.add(diagnostic)
    return grouper.groups()
