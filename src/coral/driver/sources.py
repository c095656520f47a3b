# topmark:header:start
#
#   project      : Coral
#   file         : sources.py
#   file_relpath : src/coral/driver/sources.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line sources feeding the pipeline.

A line source is anything that yields raw text lines and, once exhausted, can
report the exit status of whatever produced them:

- [`StreamSource`][coral.driver.sources.StreamSource]: an already-open text stream
  (stdin, a pipe, a `StringIO` in tests). No exit status.
- [`FileSource`][coral.driver.sources.FileSource]: a captured stream on disk.
- [`CargoSource`][coral.driver.cargo.CargoSource]: a live ``cargo`` child process.
- [`DumpingSource`][coral.driver.sources.DumpingSource]: wraps another source and
  appends every raw line to a file, for debugging what cargo actually emitted.

`run_session` drains a source into a pipeline
[`Session`][coral.pipeline.session.Session] and handles ``Ctrl-C``: ingestion
stops, the source is closed, and the partial report is returned.
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, TYPE_CHECKING, Protocol, runtime_checkable

import click

from coral.config.logging import get_logger
from coral.core.errors import SourceUnavailableError
from coral.pipeline.session import Session

if TYPE_CHECKING:
    from collections.abc import Iterator
    from types import TracebackType

    from coral.config.logging import CoralLogger
    from coral.pipeline.session import Report

logger: CoralLogger = get_logger(__name__)

STDIN_NAME: str = "-"


@runtime_checkable
class LineSource(Protocol):
    """Structural protocol for anything the pipeline can read lines from."""

    name: str

    def __iter__(self) -> Iterator[str]: ...

    def wait(self) -> int | None:
        """Return the producer's exit status once drained, or None if unknown."""
        ...

    def close(self) -> None:
        """Release the source (close files, stop processes). Idempotent."""
        ...


class BaseSource:
    """Context-manager plumbing shared by the concrete sources."""

    name: str = "<source>"
    # Exit status of the producer, when known by other means (e.g. `--exit-code`).
    exit_code: int | None = None

    def __enter__(self) -> BaseSource:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def wait(self) -> int | None:
        return self.exit_code

    def close(self) -> None:
        return None


class StreamSource(BaseSource):
    """Read lines from an open text stream.

    The stream is not closed by `close()`: its owner (usually the interpreter,
    for stdin) is responsible for it.
    """

    def __init__(self, stream: IO[str], *, name: str = "<stream>") -> None:
        self.stream = stream
        self.name = name

    @classmethod
    def stdin(cls) -> StreamSource:
        """Return a source reading the process's standard input as UTF-8.

        Invalid bytes are replaced, whatever the locale, so they surface as one
        unparsable line instead of aborting the read.
        """
        stream = click.get_text_stream("stdin", encoding="utf-8", errors="replace")
        return cls(stream, name="<stdin>")

    def __iter__(self) -> Iterator[str]:
        yield from self.stream


class FileSource(BaseSource):
    """Read lines from a captured message stream on disk.

    The file is opened eagerly so a missing or unreadable path fails before any
    output is produced. Invalid UTF-8 is replaced rather than fatal: a single
    bad byte must not sink the whole report.

    Raises:
        SourceUnavailableError: If the file cannot be opened.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        self.name = str(self.path)
        try:
            self._fh: IO[str] | None = self.path.open(encoding="utf-8", errors="replace")
        except OSError as exc:
            raise SourceUnavailableError(
                f"Cannot read {self.path}: {exc.strerror or exc}",
                source=self.name,
            ) from exc
        logger.debug("Opened message stream %s", self.path)

    def __iter__(self) -> Iterator[str]:
        if self._fh is None:
            return
        yield from self._fh

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None


class DumpingSource(BaseSource):
    """Wrap a source and append every raw line it yields to ``dump_path``.

    Raises:
        SourceUnavailableError: If the dump file cannot be opened for appending.
    """

    def __init__(self, inner: LineSource, dump_path: Path | str) -> None:
        self.inner = inner
        self.name = inner.name
        self.dump_path = Path(dump_path)
        try:
            self._dump: IO[str] | None = self.dump_path.open("a", encoding="utf-8")
        except OSError as exc:
            raise SourceUnavailableError(
                f"Cannot open dump file {self.dump_path}: {exc.strerror or exc}",
                source=str(self.dump_path),
            ) from exc
        logger.info("Dumping raw messages to %s", self.dump_path)

    def __iter__(self) -> Iterator[str]:
        for line in self.inner:
            if self._dump is not None:
                self._dump.write(line if line.endswith("\n") else line + "\n")
            yield line

    def wait(self) -> int | None:
        return self.inner.wait()

    def close(self) -> None:
        if self._dump is not None:
            self._dump.close()
            self._dump = None
        self.inner.close()


def open_source(path: str | None, *, exit_code: int | None = None) -> BaseSource:
    """Return a source for ``path``; ``None`` or ``"-"`` means standard input.

    Args:
        path: File to read, or ``"-"``.
        exit_code: Exit status of the process that produced the stream, if known.

    Raises:
        SourceUnavailableError: If ``path`` cannot be opened.
    """
    source: BaseSource = (
        StreamSource.stdin() if path is None or path == STDIN_NAME else FileSource(path)
    )
    source.exit_code = exit_code
    return source


def run_session(source: LineSource, session: Session | None = None) -> Report:
    """Drain ``source`` through a pipeline session and return the report.

    ``KeyboardInterrupt`` while reading is not propagated: the source is closed
    and the report covers whatever was read, flagged as interrupted. The
    producer's exit status is discarded in that case (a terminated child's
    status says nothing about the build).

    A failed read (``OSError``, or undecodable input from a strict stream) ends
    ingestion too. It is recorded as one more problem and the report covers
    the lines read before it.

    Args:
        source: The line source to drain.
        session: An existing session to feed; a fresh one by default.

    Returns:
        The frozen report.
    """
    session = session if session is not None else Session()
    interrupted = False
    try:
        try:
            for line in source:
                session.feed(line)
        except KeyboardInterrupt:
            interrupted = True
            logger.warning("Interrupted after %d lines from %s", session.n_lines, source.name)
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Reading %s failed after %d lines: %s", source.name, session.n_lines, exc)
            session.problems.add_decode_error(f"read failed: {exc}", line_no=session.n_lines + 1)
        exit_code = None if interrupted else source.wait()
    finally:
        source.close()
    return session.finish(exit_code=exit_code, interrupted=interrupted)
