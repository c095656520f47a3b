# topmark:header:start
#
#   project      : Coral
#   file         : cargo.py
#   file_relpath : src/coral/driver/cargo.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run ``cargo check`` / ``cargo clippy`` and stream its JSON messages.

The child runs as ``cargo <checker> --message-format json [args...]`` with
stdin closed and stdout piped. Its stderr (cargo's progress lines) is inherited
so the user still sees ``Compiling ...``, unless ``quiet`` silences it.
"""

from __future__ import annotations

import subprocess
from enum import Enum
from typing import TYPE_CHECKING

from coral.config.logging import get_logger
from coral.core.errors import SourceUnavailableError
from coral.driver.sources import BaseSource

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path

    from coral.config.logging import CoralLogger

logger: CoralLogger = get_logger(__name__)

CARGO_EXECUTABLE: str = "cargo"

# Seconds to wait for cargo to exit after SIGTERM before killing it.
TERMINATE_TIMEOUT: float = 5.0


class Checker(str, Enum):
    """The cargo subcommand that produces diagnostics."""

    CHECK = "check"
    CLIPPY = "clippy"


def build_command(
    checker: Checker,
    args: Sequence[str] = (),
    *,
    cargo: str = CARGO_EXECUTABLE,
) -> list[str]:
    """Return the argv for a JSON-mode cargo run."""
    return [cargo, checker.value, "--message-format", "json", *args]


class CargoSource(BaseSource):
    """A line source backed by a cargo child process.

    The process is spawned by `start()` (or lazily on first iteration), so
    constructing a source never has side effects.

    Attributes:
        command: The full argv that is (or will be) executed.
        cwd: Working directory for the child, if not the current one.
        quiet: Discard cargo's stderr instead of inheriting it.
    """

    def __init__(
        self,
        checker: Checker = Checker.CHECK,
        args: Sequence[str] = (),
        *,
        cwd: Path | str | None = None,
        quiet: bool = False,
        cargo: str = CARGO_EXECUTABLE,
    ) -> None:
        self.command: list[str] = build_command(checker, args, cargo=cargo)
        self.cwd = cwd
        self.quiet = quiet
        self.name = " ".join(self.command[:2])
        self._proc: subprocess.Popen[str] | None = None

    def start(self) -> None:
        """Spawn the cargo process (no-op when already running).

        Raises:
            SourceUnavailableError: If cargo cannot be executed.
        """
        if self._proc is not None:
            return
        logger.info("Running: %s", " ".join(self.command))
        try:
            self._proc = subprocess.Popen(
                self.command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL if self.quiet else None,
                cwd=self.cwd,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as exc:
            raise SourceUnavailableError(
                f"'{self.command[0]}' not found; is the Rust toolchain installed?",
                source=self.name,
            ) from exc
        except OSError as exc:
            raise SourceUnavailableError(
                f"Cannot run '{self.command[0]}': {exc.strerror or exc}",
                source=self.name,
            ) from exc

    @property
    def running(self) -> bool:
        """Return True while the child process has not exited."""
        return self._proc is not None and self._proc.poll() is None

    def __iter__(self) -> Iterator[str]:
        self.start()
        assert self._proc is not None and self._proc.stdout is not None
        yield from self._proc.stdout

    def wait(self) -> int | None:
        """Wait for cargo to exit and return its status (None if never started)."""
        if self._proc is None:
            return None
        status = self._proc.wait()
        logger.debug("%s exited with status %d", self.name, status)
        return status

    def close(self) -> None:
        """Terminate a still-running child and close its pipe."""
        proc = self._proc
        if proc is None:
            return
        if self.running:
            logger.debug("Terminating %s (pid %s)", self.name, proc.pid)
            proc.terminate()
            try:
                proc.wait(timeout=TERMINATE_TIMEOUT)
            except subprocess.TimeoutExpired:
                proc.kill()
                proc.wait()
        if proc.stdout is not None:
            proc.stdout.close()
