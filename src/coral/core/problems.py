# topmark:header:start
#
#   project      : Coral
#   file         : problems.py
#   file_relpath : src/coral/core/problems.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Error-collection sink for per-line stream problems.

Coral never aborts a run because one line of cargo output is malformed. Instead,
each failure is recorded here as a `Problem` and the line is skipped. The final
report states how many lines were unparsable, so data loss is never silent.

Sections:
    * ProblemKind: the two non-fatal failure classes (decode, schema).
    * Problem: immutable record of one skipped line.
    * ProblemLog: mutable per-run collection with convenience helpers.
    * FrozenProblemLog: immutable snapshot attached to a finished report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from coral.config.logging import get_logger
from coral.core.errors import DecodeError, SchemaError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from coral.config.logging import CoralLogger

logger: CoralLogger = get_logger(__name__)

# Maximum excerpt length kept for a skipped line.
EXCERPT_WIDTH: int = 60


class ProblemKind(Enum):
    """Classification of a skipped line."""

    DECODE = "decode"
    SCHEMA = "schema"


@dataclass(frozen=True)
class Problem:
    """One skipped line of the message stream."""

    kind: ProblemKind
    message: str
    line_no: int | None = None
    excerpt: str = ""

    def describe(self) -> str:
        """Return a one-line, human-readable description."""
        where = f"line {self.line_no}" if self.line_no is not None else "stream"
        return f"{where}: {self.kind.value} error: {self.message}"


def make_excerpt(text: str, width: int = EXCERPT_WIDTH) -> str:
    """Return ``text`` stripped and cut to ``width`` characters."""
    text = text.strip()
    return text if len(text) <= width else text[: width - 1] + "…"


@dataclass
class ProblemLog:
    """Mutable, per-run collection of problems.

    Every addition is also logged at WARNING level, the side error channel.
    Users see it on stderr when ``CORAL_LOG_LEVEL`` is WARNING or lower; the
    report itself only counts the skipped lines.
    """

    items: list[Problem] = field(default_factory=lambda: [])

    def _add(self, problem: Problem) -> None:
        self.items.append(problem)
        logger.warning("Skipped %s", problem.describe())

    def add_decode_error(
        self, message: str, *, line_no: int | None = None, excerpt: str = ""
    ) -> None:
        """Record a line that is not valid JSON.

        Args:
            message: Parser error text.
            line_no: 1-based line number, when known.
            excerpt: The offending text (cut to a short excerpt).
        """
        self._add(Problem(ProblemKind.DECODE, message, line_no, make_excerpt(excerpt)))

    def add_schema_error(
        self, message: str, *, line_no: int | None = None, excerpt: str = ""
    ) -> None:
        """Record a line whose JSON lacks a required field.

        Args:
            message: What is missing or malformed.
            line_no: 1-based line number, when known.
            excerpt: The offending text (cut to a short excerpt).
        """
        self._add(Problem(ProblemKind.SCHEMA, message, line_no, make_excerpt(excerpt)))

    def add_exception(self, exc: DecodeError) -> None:
        """Record a decoder/extractor exception with the matching kind."""
        if isinstance(exc, SchemaError):
            self.add_schema_error(str(exc), line_no=exc.line_no, excerpt=exc.excerpt)
        else:
            self.add_decode_error(str(exc), line_no=exc.line_no, excerpt=exc.excerpt)

    def count(self, kind: ProblemKind | None = None) -> int:
        """Return the number of problems, optionally restricted to one kind."""
        if kind is None:
            return len(self.items)
        return sum(1 for p in self.items if p.kind == kind)

    def freeze(self) -> FrozenProblemLog:
        """Return an immutable snapshot of this log."""
        return FrozenProblemLog(items=tuple(self.items))

    def __iter__(self) -> Iterator[Problem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class FrozenProblemLog:
    """Immutable counterpart to `ProblemLog`, stored on finished reports."""

    items: tuple[Problem, ...] = ()

    def count(self, kind: ProblemKind | None = None) -> int:
        """Return the number of problems, optionally restricted to one kind."""
        if kind is None:
            return len(self.items)
        return sum(1 for p in self.items if p.kind == kind)

    def __iter__(self) -> Iterator[Problem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)
