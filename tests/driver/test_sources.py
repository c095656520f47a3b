# topmark:header:start
#
#   project      : Coral
#   file         : test_sources.py
#   file_relpath : tests/driver/test_sources.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for line sources, the cargo driver and draining sessions."""

from __future__ import annotations

import io
import subprocess
import sys
from typing import TYPE_CHECKING

import pytest

from coral.constants import INTERRUPTED_EXIT_STATUS
from coral.core.errors import SourceUnavailableError
from coral.core.problems import ProblemKind
from coral.driver.cargo import CargoSource, Checker, build_command
from coral.driver.sources import (
    BaseSource,
    DumpingSource,
    FileSource,
    LineSource,
    StreamSource,
    open_source,
    run_session,
)
from tests.cargo_messages import build_finished, compiler_message, jsonl, jsonl_text
from tests.conftest import parametrize
from tests.driver.fake_cargo import FakeCargoProcess

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


class InterruptingSource(BaseSource):
    """Yields some lines, then behaves as if the user pressed Ctrl-C."""

    name = "<interrupting>"

    def __init__(self, lines: list[str]) -> None:
        self.lines = lines
        self.closed = False
        self.exit_code = 0

    def __iter__(self) -> Iterator[str]:
        yield from self.lines
        raise KeyboardInterrupt

    def close(self) -> None:
        self.closed = True


class FailingSource(BaseSource):
    """Yields some lines, then the underlying read fails."""

    name = "<failing>"

    def __init__(self, lines: list[str], error: Exception) -> None:
        self.lines = lines
        self.error = error
        self.closed = False
        self.exit_code = 101

    def __iter__(self) -> Iterator[str]:
        yield from self.lines
        raise self.error

    def close(self) -> None:
        self.closed = True


def test_sources_satisfy_protocol(tmp_path: Path) -> None:
    """Every concrete source is a `LineSource`."""
    path = tmp_path / "build.jsonl"
    path.write_text("", encoding="utf-8")

    with FileSource(path) as file_source:
        assert isinstance(file_source, LineSource)
    assert isinstance(StreamSource(io.StringIO()), LineSource)
    assert isinstance(CargoSource(), LineSource)


def test_stream_source_reports_unknown_exit() -> None:
    """Streams have no producer status unless one is supplied."""
    source = StreamSource(io.StringIO(jsonl_text(compiler_message())))
    report = run_session(source)

    assert report.exit_code is None
    assert len(report.groups) == 1


def test_file_source_reads_lines(tmp_path: Path) -> None:
    """A captured stream on disk is read line by line."""
    path = tmp_path / "build.jsonl"
    path.write_text(jsonl_text(compiler_message(), build_finished(False)), encoding="utf-8")

    report = run_session(open_source(str(path), exit_code=101))

    assert report.n_lines == 2
    assert report.exit_code == 101
    assert report.tool_exit_code == 101


def test_file_source_replaces_invalid_utf8(tmp_path: Path) -> None:
    """Undecodable bytes become a problem on their line, not a crash."""
    path = tmp_path / "build.jsonl"
    path.write_bytes(b"\xff\xfe garbage\n" + jsonl_text(compiler_message()).encode())

    report = run_session(FileSource(path))

    assert len(report.problems) == 1
    assert len(report.groups) == 1


def test_missing_file_is_unavailable(tmp_path: Path) -> None:
    """Opening a missing file fails before any output."""
    with pytest.raises(SourceUnavailableError) as excinfo:
        FileSource(tmp_path / "missing.jsonl")

    assert "missing.jsonl" in excinfo.value.source


def test_open_source_dash_means_stdin(monkeypatch: pytest.MonkeyPatch) -> None:
    """`-` and None select standard input, decoded leniently."""
    monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"\xff\n"), encoding="utf-8"))

    source = open_source("-")
    assert isinstance(source, StreamSource)
    assert list(source) == ["\ufffd\n"]
    assert isinstance(open_source(None), StreamSource)


def test_dumping_source_copies_raw_lines(tmp_path: Path) -> None:
    """Every line read is appended verbatim to the dump file."""
    dump = tmp_path / "raw.jsonl"
    dump.write_text("previous\n", encoding="utf-8")
    inner = StreamSource(io.StringIO("one\n{}\nlast-without-newline"))

    with DumpingSource(inner, dump) as source:
        report = run_session(source)

    assert dump.read_text(encoding="utf-8") == "previous\none\n{}\nlast-without-newline\n"
    assert len(report.problems) == 3


def test_dumping_source_unwritable_path(tmp_path: Path) -> None:
    """A dump path that cannot be opened is reported as unavailable."""
    with pytest.raises(SourceUnavailableError):
        DumpingSource(StreamSource(io.StringIO()), tmp_path / "no-such-dir" / "raw.jsonl")


def test_keyboard_interrupt_returns_partial_report() -> None:
    """Ctrl-C stops ingestion, closes the source and flags the report."""
    source = InterruptingSource(jsonl(compiler_message()))
    report = run_session(source)

    assert source.closed
    assert report.interrupted
    assert len(report.groups) == 1
    assert report.exit_code is None
    assert report.tool_exit_code == INTERRUPTED_EXIT_STATUS


@parametrize(
    "error",
    [
        OSError(5, "Input/output error"),
        UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"),
    ],
)
def test_failed_read_returns_partial_report(error: Exception) -> None:
    """A read error mid-stream is recorded as a problem; earlier lines still count."""
    source = FailingSource(jsonl(compiler_message()), error)
    report = run_session(source)

    assert source.closed
    assert not report.interrupted
    assert len(report.groups) == 1
    (problem,) = report.problems
    assert problem.kind is ProblemKind.DECODE
    assert problem.line_no == 2
    assert report.tool_exit_code == 101


def test_unexpected_error_still_closes_source() -> None:
    """Errors that are not read failures propagate after the source is closed."""
    source = FailingSource(jsonl(compiler_message()), RuntimeError("boom"))

    with pytest.raises(RuntimeError):
        run_session(source)
    assert source.closed


def test_build_command() -> None:
    """Cargo always runs in JSON message mode; extra args come last."""
    assert build_command(Checker.CLIPPY, ["--all-targets"]) == [
        "cargo",
        "clippy",
        "--message-format",
        "json",
        "--all-targets",
    ]


def test_cargo_source_streams_output_and_status(fake_cargo: type[FakeCargoProcess]) -> None:
    """The child's stdout feeds the session; its exit status is the report's."""
    fake_cargo.configure(jsonl_text(compiler_message(), build_finished(False)), returncode=101)
    source = CargoSource(Checker.CHECK, ["-p", "demo"], quiet=True)

    report = run_session(source)

    (proc,) = fake_cargo.launched
    assert proc.args == ["cargo", "check", "--message-format", "json", "-p", "demo"]
    assert proc.kwargs["stdin"] == subprocess.DEVNULL
    assert proc.kwargs["stdout"] == subprocess.PIPE
    assert proc.kwargs["stderr"] == subprocess.DEVNULL
    assert report.exit_code == 101
    assert len(report.groups) == 1


def test_cargo_source_inherits_stderr_by_default(fake_cargo: type[FakeCargoProcess]) -> None:
    """Cargo's progress output reaches the user unless quiet."""
    CargoSource().start()

    assert fake_cargo.launched[0].kwargs["stderr"] is None


def test_cargo_source_start_is_idempotent(fake_cargo: type[FakeCargoProcess]) -> None:
    """Starting twice spawns one process."""
    source = CargoSource()
    source.start()
    source.start()
    list(source)

    assert len(fake_cargo.launched) == 1


def test_cargo_source_close_terminates_running_child(fake_cargo: type[FakeCargoProcess]) -> None:
    """Closing a source whose child is still running terminates it."""
    fake_cargo.configure(keep_running=True)
    source = CargoSource()
    source.start()
    assert source.running

    source.close()

    assert fake_cargo.launched[0].terminated
    assert fake_cargo.launched[0].stdout.closed


def test_cargo_source_never_started() -> None:
    """A source that never ran has no status and closes cleanly."""
    source = CargoSource()

    assert source.wait() is None
    assert not source.running
    source.close()


def test_missing_cargo_is_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    """No cargo on PATH is reported as an unavailable source."""

    def _missing(*args: object, **kwargs: object) -> None:
        raise FileNotFoundError(2, "No such file or directory", "cargo")

    monkeypatch.setattr(subprocess, "Popen", _missing)

    with pytest.raises(SourceUnavailableError) as excinfo:
        CargoSource(Checker.CLIPPY).start()

    assert "cargo" in str(excinfo.value)
    assert excinfo.value.source == "cargo clippy"


def test_cargo_killed_by_signal(fake_cargo: type[FakeCargoProcess]) -> None:
    """A cargo killed by SIGTERM ends an interrupted report with status 143."""
    fake_cargo.configure(jsonl_text(compiler_message()), returncode=-15)

    report = run_session(CargoSource())

    assert report.interrupted
    assert report.tool_exit_code == 143
    assert report.status_message == "build interrupted"
    assert len(report.groups) == 1
