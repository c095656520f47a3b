# topmark:header:start
#
#   project      : Coral
#   file         : console.py
#   file_relpath : src/coral/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-backed console: the report on stdout, everything else on stderr."""

from __future__ import annotations

import sys
from typing import Any, TextIO

import click

from coral.cli_shared.console_api import ConsoleLike


class ClickConsole(ConsoleLike):
    """Writes Coral's user-facing output through `click.echo`.

    Args:
        enable_color: Keep ANSI styling; when False every styled string is
            returned plain and click strips any escape codes left in the text.
        out: Report stream (default `sys.stdout`).
        err: Status, warning and error stream (default `sys.stderr`).
    """

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def status(self, text: str, *, nl: bool = True) -> None:
        click.echo(text, nl=nl, file=self.err, color=self.enable_color)

    def warn(self, text: str, *, nl: bool = True) -> None:
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="yellow")

    def error(self, text: str, *, nl: bool = True) -> None:
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="bright_red")

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` passed through `click.style`, or unchanged without color."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)


def get_console(ctx: click.Context | None = None) -> ConsoleLike:
    """Return the console the `cli` group stored on the context.

    Commands invoked outside the group (a command object called directly)
    get a plain console.
    """
    ctx = ctx or click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.obj, dict) and "console" in ctx.obj:
        console: ConsoleLike = ctx.obj["console"]
        return console
    return ClickConsole(enable_color=False)
