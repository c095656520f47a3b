# topmark:header:start
#
#   project      : Coral
#   file         : test_parse_command.py
#   file_relpath : tests/cli/test_parse_command.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI tests: `coral parse` on captured message streams."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from coral.cli_shared.exit_codes import ExitCode
from tests.cargo_messages import (
    build_finished,
    compiler_artifact,
    compiler_message,
    jsonl_text,
    message,
    span,
)
from tests.cli.conftest import assert_FAILURE, assert_SUCCESS, assert_USAGE_ERROR, run_cli_in
from tests.conftest import mark_cli, parametrize

if TYPE_CHECKING:
    from pathlib import Path

SINGLE_ERROR = jsonl_text(compiler_artifact(), compiler_message(), build_finished(False))


@mark_cli
def test_parse_stdin_single_error(tmp_path: Path) -> None:
    """The canonical scenario: one summary line, counts, failed status."""
    result = run_cli_in(tmp_path, ["--no-color", "parse", "-"], input_text=SINGLE_ERROR)

    assert_FAILURE(result)
    assert result.stdout == "✗ src/main.rs:4:5: mismatched types\n1 error, 0 warnings\n"
    assert "build failed" in result.stderr


@mark_cli
def test_parse_defaults_to_stdin(tmp_path: Path) -> None:
    """Without a FILE argument, stdin is read."""
    result = run_cli_in(tmp_path, ["parse"], input_text=SINGLE_ERROR)

    assert_FAILURE(result)
    assert "mismatched types" in result.stdout


@mark_cli
def test_parse_empty_stream(tmp_path: Path) -> None:
    """An empty stream is a successful, empty report."""
    result = run_cli_in(tmp_path, ["parse", "-"], input_text="")

    assert_SUCCESS(result)
    assert result.stdout == "0 errors, 0 warnings\n"
    assert "build succeeded" in result.stderr


@mark_cli
def test_parse_file_with_malformed_line(tmp_path: Path) -> None:
    """A bad line between two diagnostics is counted, not fatal."""
    stream = jsonl_text(
        compiler_message(message("first", level="warning", spans=[span(line=1)])),
        "{ this is not json",
        compiler_message(message("second", level="warning", spans=[span(line=2)])),
    )
    (tmp_path / "build.jsonl").write_text(stream, encoding="utf-8")

    result = run_cli_in(tmp_path, ["parse", "build.jsonl"])

    assert_SUCCESS(result)
    lines = result.stdout.splitlines()
    assert lines == [
        "⚠ src/main.rs:1:5: first",
        "⚠ src/main.rs:2:5: second",
        "0 errors, 2 warnings",
        "1 line unparsable",
    ]
    assert "build succeeded with warnings" in result.stderr


@mark_cli
def test_parse_stdin_with_invalid_utf8(tmp_path: Path) -> None:
    """Undecodable bytes on stdin cost one line, not the whole report."""
    first = jsonl_text(compiler_message(message("first", spans=[span(line=1)])))
    second = jsonl_text(compiler_message(message("second", spans=[span(line=2)])))
    stream = first.encode("utf-8") + b"\xff\xfe garbage\n" + second.encode("utf-8")

    result = run_cli_in(tmp_path, ["--no-color", "parse", "-"], input_text=stream)

    assert_FAILURE(result)
    assert result.stdout.splitlines() == [
        "✗ src/main.rs:1:5: first",
        "✗ src/main.rs:2:5: second",
        "2 errors, 0 warnings",
        "1 line unparsable",
    ]
    assert "build failed" in result.stderr


@mark_cli
@parametrize("status", [0, 101])
def test_parse_exit_code_overrides_stream(tmp_path: Path, status: int) -> None:
    """`--exit-code` is the producing run's status and decides Coral's."""
    argv = ["parse", "--exit-code", str(status), "-"]
    result = run_cli_in(tmp_path, argv, input_text=SINGLE_ERROR)

    assert result.exit_code == status, result.output


@mark_cli
def test_parse_missing_file(tmp_path: Path) -> None:
    """An unreadable input file exits with SOURCE_UNAVAILABLE and no report."""
    result = run_cli_in(tmp_path, ["parse", "missing.jsonl"])

    assert result.exit_code == ExitCode.SOURCE_UNAVAILABLE, result.output
    assert result.stdout == ""
    assert "missing.jsonl" in result.stderr


@mark_cli
def test_parse_quiet_suppresses_status(tmp_path: Path) -> None:
    """`-q` prints the report only."""
    result = run_cli_in(tmp_path, ["-q", "parse", "-"], input_text=SINGLE_ERROR)

    assert_FAILURE(result)
    assert result.stderr == ""
    assert result.stdout.endswith("1 error, 0 warnings\n")


@mark_cli
def test_verbose_and_quiet_conflict(tmp_path: Path) -> None:
    """`-v` and `-q` together are a usage error."""
    result = run_cli_in(tmp_path, ["-v", "-q", "parse", "-"], input_text="")

    assert_USAGE_ERROR(result)


@mark_cli
def test_parse_verbose_shows_details(tmp_path: Path) -> None:
    """`-v` turns on the verbose report."""
    stream = jsonl_text(compiler_message(message("mismatched types", code="E0308", spans=[span()])))
    result = run_cli_in(tmp_path, ["-v", "parse", "-"], input_text=stream)

    assert "      code: E0308" in result.stdout.splitlines()


@mark_cli
def test_parse_width_and_layout_flags(tmp_path: Path) -> None:
    """`--width` truncates lines; `--layout table` switches layouts."""
    long_text = "x" * 200
    stream = jsonl_text(compiler_message(message(long_text, spans=[span()])))

    narrow = run_cli_in(tmp_path, ["parse", "--width", "40", "-"], input_text=stream)
    assert len(narrow.stdout.splitlines()[0]) == 40

    table = run_cli_in(tmp_path, ["parse", "--layout", "table", "-"], input_text=SINGLE_ERROR)
    assert table.stdout.splitlines()[0].split() == ["Level", "File", "Line", "Message"]


@mark_cli
def test_parse_width_below_minimum_is_rejected(tmp_path: Path) -> None:
    """Widths below the minimum message width are refused by Click."""
    result = run_cli_in(tmp_path, ["parse", "--width", "5", "-"], input_text="")

    assert result.exit_code != ExitCode.SUCCESS


@mark_cli
def test_parse_no_children(tmp_path: Path) -> None:
    """`--no-children` hides note/help lines."""
    note = message("expected due to this", level="note")
    stream = jsonl_text(compiler_message(message(spans=[span()], children=[note])))

    shown = run_cli_in(tmp_path, ["parse", "-"], input_text=stream)
    hidden = run_cli_in(tmp_path, ["parse", "--no-children", "-"], input_text=stream)

    assert "    note: expected due to this" in shown.stdout
    assert "note:" not in hidden.stdout


@mark_cli
def test_parse_json_format(tmp_path: Path) -> None:
    """`--format json` writes one envelope and no color."""
    argv = ["--color", "always", "parse", "--format", "json", "-"]
    result = run_cli_in(tmp_path, argv, input_text=SINGLE_ERROR)

    assert_FAILURE(result)
    payload = json.loads(result.stdout)
    assert payload["summary"]["exit_code"] == 1
    assert payload["groups"][0]["location"] == "src/main.rs:4:5"
    assert "\x1b[" not in result.stdout


@mark_cli
def test_parse_ndjson_format(tmp_path: Path) -> None:
    """`--format ndjson` writes one record per line, summary last."""
    result = run_cli_in(tmp_path, ["parse", "--format", "ndjson", "-"], input_text=SINGLE_ERROR)

    kinds = [json.loads(line)["kind"] for line in result.stdout.splitlines()]
    assert kinds == ["group", "summary"]


@mark_cli
def test_parse_color_always(tmp_path: Path) -> None:
    """`--color always` styles the human report."""
    result = run_cli_in(tmp_path, ["--color", "always", "parse", "-"], input_text=SINGLE_ERROR)

    assert "\x1b[" in result.stdout


@mark_cli
def test_parse_dump_appends_raw_lines(tmp_path: Path) -> None:
    """`--dump` keeps a copy of every raw line read."""
    result = run_cli_in(tmp_path, ["parse", "--dump", "raw.jsonl", "-"], input_text=SINGLE_ERROR)

    assert_FAILURE(result)
    assert (tmp_path / "raw.jsonl").read_text(encoding="utf-8") == SINGLE_ERROR
