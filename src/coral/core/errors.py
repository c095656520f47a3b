# topmark:header:start
#
#   project      : Coral
#   file         : errors.py
#   file_relpath : src/coral/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exception taxonomy for the Coral core.

Per-line failures (`DecodeError`, `SchemaError`) are raised by the decoder and
extractor and caught by the pipeline session, which records them in a
[`ProblemLog`][coral.core.problems.ProblemLog] and keeps going. Only
`SourceUnavailableError` is meant to reach the caller: without an input source
there is nothing to report on.

These exceptions are Click-free; the CLI maps them onto
[`coral.cli.errors`][coral.cli.errors] at its boundary.
"""

from __future__ import annotations


class CoralError(Exception):
    """Base class for all Coral core errors."""


class DecodeError(CoralError):
    """A line of the message stream could not be decoded.

    Attributes:
        line_no: 1-based line number within the stream, when known.
        excerpt: A short excerpt of the offending line.
    """

    def __init__(self, message: str, *, line_no: int | None = None, excerpt: str = "") -> None:
        super().__init__(message)
        self.line_no = line_no
        self.excerpt = excerpt


class SchemaError(DecodeError):
    """Valid JSON whose shape misses a field Coral requires."""


class SourceUnavailableError(CoralError):
    """The input source (cargo process, file, stream) cannot be opened.

    Attributes:
        source: Human-readable name of the source that failed.
    """

    def __init__(self, message: str, *, source: str = "") -> None:
        super().__init__(message)
        self.source = source
