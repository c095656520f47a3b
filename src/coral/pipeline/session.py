# topmark:header:start
#
#   project      : Coral
#   file         : session.py
#   file_relpath : src/coral/pipeline/session.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Streaming-in, batch-out pipeline for one cargo invocation.

A `Session` is fed raw lines as they arrive. Each line is decoded and
extracted immediately; per-line failures land in the session's
[`ProblemLog`][coral.core.problems.ProblemLog] and never interrupt the stream.
Grouping needs the whole stream (a late duplicate may match an early
diagnostic), so nothing is final until `Session.finish` returns a frozen
`Report`.

`finish` may be called at any point, including after an interrupted stream:
whatever was extracted so far is reported.

Typical use:

    session = Session()
    for line in source:
        session.feed(line)
    report = session.finish(exit_code=source.wait())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from coral.config.logging import get_logger
from coral.constants import INTERRUPTED_EXIT_STATUS, SIGNAL_EXIT_BASE
from coral.core.errors import DecodeError
from coral.core.problems import FrozenProblemLog, ProblemLog
from coral.diagnostic.extractor import Extractor
from coral.diagnostic.grouping import Grouper
from coral.diagnostic.model import DiagnosticStats, compute_stats
from coral.messages.decoder import decode_line
from coral.messages.records import BuildFinishedRecord

if TYPE_CHECKING:
    from collections.abc import Iterable

    from coral.config.logging import CoralLogger
    from coral.diagnostic.model import Diagnostic, DiagnosticGroup

logger: CoralLogger = get_logger(__name__)


@dataclass(frozen=True)
class Report:
    """Immutable result of one invocation.

    Attributes:
        groups: Deduplicated diagnostic groups, in first-seen order.
        stats: Per-severity group counts.
        problems: Lines skipped because they could not be decoded or extracted.
        n_lines: Number of lines fed (blank lines included).
        n_diagnostics: Number of diagnostics extracted before deduplication.
        build_success: ``success`` of the ``build-finished`` record, if one arrived.
        exit_code: Exit status of the process that produced the stream, if known.
        interrupted: True when the stream was cut short by the user.
    """

    groups: tuple[DiagnosticGroup, ...]
    stats: DiagnosticStats
    problems: FrozenProblemLog
    n_lines: int = 0
    n_diagnostics: int = 0
    build_success: bool | None = None
    exit_code: int | None = None
    interrupted: bool = False

    @property
    def failed(self) -> bool:
        """Return True when the build failed.

        Precedence: process exit status, then the ``build-finished`` record,
        then the presence of error groups.
        """
        if self.exit_code is not None:
            return self.exit_code != 0
        if self.build_success is not None:
            return not self.build_success
        return self.stats.n_error > 0

    @property
    def tool_exit_code(self) -> int:
        """Return the exit status Coral itself should exit with.

        Mirrors the compiler's status when known; otherwise 1 for a failed
        build and 0 for a successful one. An interrupted run without a process
        status exits with 130.
        """
        if self.exit_code is not None:
            return self.exit_code
        if self.interrupted:
            return INTERRUPTED_EXIT_STATUS
        return 1 if self.failed else 0

    @property
    def status_message(self) -> str:
        """Return the final wording for the build outcome."""
        if self.interrupted:
            return "build interrupted"
        if self.failed:
            return "build failed"
        if self.stats.n_warning > 0:
            return "build succeeded with warnings"
        return "build succeeded"


class Session:
    """Accumulates one invocation's diagnostics, line by line."""

    def __init__(self) -> None:
        self.extractor = Extractor()
        self.grouper = Grouper()
        self.problems = ProblemLog()
        self.n_lines = 0
        self.n_diagnostics = 0
        self.build_success: bool | None = None

    def feed(self, line: str) -> Diagnostic | None:
        """Decode and extract one raw line.

        Decode and schema errors are recorded, never raised.

        Args:
            line: One line of cargo output (trailing newline allowed).

        Returns:
            The extracted top-level diagnostic, or None for any other line.
        """
        self.n_lines += 1
        line_no = self.n_lines
        try:
            record = decode_line(line, line_no=line_no)
            if record is None:
                return None
            if isinstance(record, BuildFinishedRecord):
                self.build_success = record.success
                return None
            diagnostic = self.extractor.extract(record, line_no=line_no)
        except DecodeError as exc:
            self.problems.add_exception(exc)
            return None

        if diagnostic is not None:
            self.n_diagnostics += 1
            self.grouper.add(diagnostic)
        return diagnostic

    def feed_all(self, lines: Iterable[str]) -> None:
        """Feed every line of ``lines``."""
        for line in lines:
            self.feed(line)

    def finish(self, *, exit_code: int | None = None, interrupted: bool = False) -> Report:
        """Freeze everything collected so far into a `Report`.

        Args:
            exit_code: Exit status of the producing process, if known. A negative
                status (killed by signal N, as `subprocess` reports it) becomes
                ``128 + N`` and marks the report interrupted.
            interrupted: Whether the stream ended early (Ctrl-C, killed process).

        Returns:
            The frozen report.
        """
        if exit_code is not None and exit_code < 0:
            logger.warning("Producer was killed by signal %d", -exit_code)
            exit_code = SIGNAL_EXIT_BASE - exit_code
            interrupted = True

        groups = self.grouper.groups()
        report = Report(
            groups=tuple(groups),
            stats=compute_stats(groups),
            problems=self.problems.freeze(),
            n_lines=self.n_lines,
            n_diagnostics=self.n_diagnostics,
            build_success=self.build_success,
            exit_code=exit_code,
            interrupted=interrupted,
        )
        logger.info(
            "Finished: %d lines, %d diagnostics, %d groups, %d problems",
            report.n_lines,
            report.n_diagnostics,
            len(report.groups),
            len(report.problems),
        )
        return report


def analyze(lines: Iterable[str], *, exit_code: int | None = None) -> Report:
    """Run the whole pipeline over a complete line sequence.

    Args:
        lines: Raw cargo output lines.
        exit_code: Exit status of the producing process, if known.

    Returns:
        The frozen report.
    """
    session = Session()
    session.feed_all(lines)
    return session.finish(exit_code=exit_code)
