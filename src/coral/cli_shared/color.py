# topmark:header:start
#
#   project      : Coral
#   file         : color.py
#   file_relpath : src/coral/cli_shared/color.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Deciding whether the report is colored."""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import TYPE_CHECKING

from coral.cli_shared.formats import OutputFormat, is_machine_format
from coral.config.logging import get_logger

if TYPE_CHECKING:
    from coral.config.logging import CoralLogger


logger: CoralLogger = get_logger(__name__)


class ColorMode(str, Enum):
    """Value of ``--color``."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    color_mode_override: ColorMode | None,
    output_format: OutputFormat | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Return True when human output should carry ANSI colors.

    JSON and NDJSON output is never colored. Otherwise ``--color always`` and
    ``--color never`` win, then ``FORCE_COLOR`` (anything but ``"0"``) and
    ``NO_COLOR``, and finally whether stdout is a terminal.

    Args:
        color_mode_override: ``--color`` value; None or ``AUTO`` when not forced.
        output_format: Selected ``--format``.
        stdout_isatty: Terminal detection result; probed from `sys.stdout`
            when None.

    Examples:
        >>> resolve_color_mode(color_mode_override=ColorMode.NEVER, output_format=None)
        False
        >>> resolve_color_mode(color_mode_override=None, output_format=OutputFormat.NDJSON)
        False
    """
    if is_machine_format(output_format):
        return False

    if color_mode_override == ColorMode.ALWAYS:
        return True
    if color_mode_override == ColorMode.NEVER:
        return False

    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False

    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (OSError, ValueError):
            stdout_isatty = False
    logger.trace("Color auto-detection: stdout_isatty=%s", stdout_isatty)
    return bool(stdout_isatty)
