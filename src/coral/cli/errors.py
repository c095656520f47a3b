# topmark:header:start
#
#   project      : Coral
#   file         : errors.py
#   file_relpath : src/coral/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Coral CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Core exceptions from
    [`coral.core.errors`][coral.core.errors] are translated into these at the
    command boundary.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from coral.cli_shared.exit_codes import ExitCode


class CoralCliError(click.ClickException):
    """Base class for all Coral CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text.

        Unlike Click's default, this method does not add color; colorization is
        applied in `show()` when a project console is present.
        """
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"error: {self.format_message()}")
                return
        # Fallback to Click's default behavior (includes its own styling)
        super().show(file)


class CoralUsageError(CoralCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class CoralSourceUnavailableError(CoralCliError):
    """Error when the input file or stream cannot be read."""

    exit_code = ExitCode.SOURCE_UNAVAILABLE


class CoralCargoUnavailableError(CoralCliError):
    """Error when ``cargo`` cannot be executed."""

    exit_code = ExitCode.CARGO_UNAVAILABLE


class CoralConfigError(CoralCliError):
    """Error for an explicitly requested config file that cannot be used."""

    exit_code = ExitCode.CONFIG_ERROR


class CoralUnexpectedError(CoralCliError):
    """Error for unhandled/unknown errors (last-resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR
