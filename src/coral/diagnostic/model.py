# topmark:header:start
#
#   project      : Coral
#   file         : model.py
#   file_relpath : src/coral/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core diagnostic types for Coral.

This module defines the durable unit of Coral's output, the `Diagnostic`, and the
deduplicated cluster the renderer consumes, the `DiagnosticGroup`.

Sections:
    * Severity: closed severity vocabulary with glyphs, labels and terminal colors.
    * SpanLocation / Span: source locations attached to a diagnostic.
    * Diagnostic: immutable, normalized compiler message (with flattened children).
    * DiagnosticGroup: one or more structurally-equal diagnostics, merged across targets.
    * DiagnosticStats: aggregated per-severity group counts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


class Severity(Enum):
    """Severity of a compiler diagnostic.

    The vocabulary is closed. Levels cargo emits that Coral does not know map to
    `UNKNOWN` rather than failing the run.
    """

    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"
    ICE = "ice"
    UNKNOWN = "unknown"

    @classmethod
    def from_level(cls, level: str) -> Severity:
        """Map a cargo ``level`` string onto the vocabulary.

        Args:
            level: The raw ``level`` field, e.g. ``"error"`` or
                ``"error: internal compiler error"``.

        Returns:
            The matching severity, `UNKNOWN` when unrecognized.
        """
        return _LEVEL_ALIASES.get(level.strip().lower(), cls.UNKNOWN)

    @property
    def glyph(self) -> str:
        """Return the one-character marker used on summary lines."""
        return _GLYPHS[self]

    @property
    def label(self) -> str:
        """Return the textual label used on child and table lines."""
        return "internal compiler error" if self is Severity.ICE else self.value

    @property
    def is_error(self) -> bool:
        """Return True for severities that fail the build."""
        return self in (Severity.ERROR, Severity.ICE)

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `click.style` function associated with this severity.

        Intended for human-readable output only; machine formats never use colors.

        Returns:
            Callable[[str], str]: A styling function for this severity.
        """
        return partial(click.style, fg=_COLORS[self], bold=self.is_error)


_LEVEL_ALIASES: dict[str, Severity] = {
    "error": Severity.ERROR,
    "warning": Severity.WARNING,
    "note": Severity.NOTE,
    "failure-note": Severity.NOTE,
    "help": Severity.HELP,
    "ice": Severity.ICE,
    "error: internal compiler error": Severity.ICE,
}

_COLORS: dict[Severity, str] = {
    Severity.ERROR: "bright_red",
    Severity.ICE: "bright_magenta",
    Severity.WARNING: "bright_yellow",
    Severity.NOTE: "bright_cyan",
    Severity.HELP: "bright_green",
    Severity.UNKNOWN: "white",
}

_GLYPHS: dict[Severity, str] = {
    Severity.ERROR: "✗",
    Severity.WARNING: "⚠",
    Severity.ICE: "‼",
    Severity.NOTE: "•",
    Severity.HELP: "➜",
    Severity.UNKNOWN: "?",
}


@dataclass(frozen=True, order=True)
class SpanLocation:
    """The positional part of a span: what makes two spans "the same place".

    Lines and columns are 1-based, as cargo reports them.
    """

    file_name: str
    line_start: int
    column_start: int
    line_end: int
    column_end: int

    def short(self) -> str:
        """Return ``file:line:col`` for the span start."""
        return f"{self.file_name}:{self.line_start}:{self.column_start}"


@dataclass(frozen=True)
class Span:
    """A source range attached to a diagnostic, plus its annotations.

    Attributes:
        location: Where the span is.
        is_primary: Whether cargo marked this span as primary.
        label: Optional inline label (e.g. ``"expected `u32`, found `&str`"``).
        suggested_replacement: Replacement text proposed by the compiler, if any.
        suggestion_applicability: How safe the replacement is
            (``MachineApplicable``, ``MaybeIncorrect``, ...).
        macro_name: Name of the macro this span was expanded from, if any.
    """

    location: SpanLocation
    is_primary: bool = False
    label: str | None = None
    suggested_replacement: str | None = None
    suggestion_applicability: str | None = None
    macro_name: str | None = None

    @property
    def file_name(self) -> str:
        """Return the span's file name."""
        return self.location.file_name

    @property
    def line(self) -> int:
        """Return the 1-based start line."""
        return self.location.line_start

    @property
    def column(self) -> int:
        """Return the 1-based start column."""
        return self.location.column_start

    @property
    def has_suggestion(self) -> bool:
        """Return True when the compiler proposed a replacement for this span."""
        return self.suggested_replacement is not None


# (severity, code, primary location, message)
DedupKey = tuple[Severity, "str | None", "SpanLocation | None", str]


@dataclass(frozen=True)
class Diagnostic:
    """A normalized compiler message.

    Children are stored flat: direct children have ``depth == 1``; anything cargo
    nests deeper is flattened into the same tuple with ``depth == 2``. Children
    never carry children of their own.

    Attributes:
        severity: Severity from the closed vocabulary.
        message: Full message text (first line is used for compact output).
        primary_span: Primary location; None for diagnostics without a source anchor.
        secondary_spans: Other spans, in source order.
        children: Flattened notes/help attached to this diagnostic.
        code: Error or lint code (e.g. ``E0308``, ``unused_variables``), if any.
        origin_target: Identifier of the build target that emitted the message.
        rendered: The compiler's own multi-line rendering, if provided.
        depth: 0 for top-level diagnostics, 1 or 2 for children.
    """

    severity: Severity
    message: str
    primary_span: Span | None = None
    secondary_spans: tuple[Span, ...] = ()
    children: tuple[Diagnostic, ...] = ()
    code: str | None = None
    origin_target: str | None = None
    rendered: str | None = None
    depth: int = 0

    @property
    def headline(self) -> str:
        """Return the first line of the message."""
        return self.message.split("\n", 1)[0].rstrip()

    @property
    def detail_lines(self) -> list[str]:
        """Return the message lines after the first (verbose mode only)."""
        return [line.rstrip() for line in self.message.splitlines()[1:] if line.strip()]

    @property
    def location(self) -> SpanLocation | None:
        """Return the primary span's location, if any."""
        return self.primary_span.location if self.primary_span is not None else None

    @property
    def spans(self) -> tuple[Span, ...]:
        """Return all spans, primary first."""
        if self.primary_span is None:
            return self.secondary_spans
        return (self.primary_span, *self.secondary_spans)

    @property
    def suggestions(self) -> tuple[Span, ...]:
        """Return every span carrying a suggested replacement, children included."""
        own = tuple(s for s in self.spans if s.has_suggestion)
        return own + tuple(s for c in self.children for s in c.spans if s.has_suggestion)

    def dedup_key(self) -> DedupKey:
        """Return the identity used to merge per-target duplicates.

        Two diagnostics with equal keys differ at most in ``origin_target`` (and in
        formatting-only fields) and are rendered once.
        """
        return (self.severity, self.code, self.location, self.message)


@dataclass
class DiagnosticGroup:
    """A deduplicated cluster of structurally-equal diagnostics.

    The first-seen diagnostic is the representative; its children stand for the
    whole group (cargo re-emits identical children per target).

    Attributes:
        representative: The first-seen member.
        origin_targets: Union of members' targets, in first-seen order.
        occurrences: Number of merged diagnostics (>= 1).
    """

    representative: Diagnostic
    origin_targets: list[str] = field(default_factory=lambda: [])
    occurrences: int = 1

    @classmethod
    def start(cls, diagnostic: Diagnostic) -> DiagnosticGroup:
        """Open a new group around ``diagnostic``."""
        group = cls(representative=diagnostic, occurrences=0)
        group.absorb(diagnostic)
        return group

    def absorb(self, diagnostic: Diagnostic) -> None:
        """Merge a duplicate into this group (only its target is retained)."""
        self.occurrences += 1
        target = diagnostic.origin_target
        if target is not None and target not in self.origin_targets:
            self.origin_targets.append(target)

    @property
    def severity(self) -> Severity:
        """Return the group's severity."""
        return self.representative.severity

    @property
    def children(self) -> tuple[Diagnostic, ...]:
        """Return the representative's flattened children."""
        return self.representative.children

    @property
    def key(self) -> DedupKey:
        """Return the dedup key shared by all members."""
        return self.representative.dedup_key()


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated group counts by severity.

    ICEs are counted as errors: both fail the build.
    """

    n_error: int = 0
    n_warning: int = 0
    n_note: int = 0
    n_help: int = 0
    n_unknown: int = 0
    n_ice: int = 0

    @property
    def total(self) -> int:
        """Return the total number of groups."""
        return self.n_error + self.n_warning + self.n_note + self.n_help + self.n_unknown

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by severity."""
        return {
            "error": self.n_error,
            "warning": self.n_warning,
            "note": self.n_note,
            "help": self.n_help,
            "unknown": self.n_unknown,
            "ice": self.n_ice,
        }


def compute_stats(groups: Iterable[DiagnosticGroup]) -> DiagnosticStats:
    """Return per-severity counts for a sequence of groups.

    Args:
        groups: The deduplicated groups of one run.

    Returns:
        The aggregated counts.
    """
    counts: dict[Severity, int] = dict.fromkeys(Severity, 0)
    for group in groups:
        counts[group.severity] += 1
    return DiagnosticStats(
        n_error=counts[Severity.ERROR] + counts[Severity.ICE],
        n_warning=counts[Severity.WARNING],
        n_note=counts[Severity.NOTE],
        n_help=counts[Severity.HELP],
        n_unknown=counts[Severity.UNKNOWN],
        n_ice=counts[Severity.ICE],
    )
