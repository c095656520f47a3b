# topmark:header:start
#
#   project      : Coral
#   file         : constants.py
#   file_relpath : src/coral/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coral Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version

try:
    CORAL_VERSION: str = get_version("coral-report")
except PackageNotFoundError:  # running from a source checkout
    CORAL_VERSION = "0.0.0+unknown"

TOOL_NAME: str = "coral"

# Project-local configuration file (highest-precedence discovered source).
CORAL_TOML_NAME: str = "coral.toml"
# Cargo manifest; Coral settings live under [package.metadata.coral].
CARGO_TOML_NAME: str = "Cargo.toml"

# Fallback terminal width when the real width cannot be determined.
DEFAULT_TERMINAL_WIDTH: int = 100
# Messages are never truncated below this many columns.
MIN_MESSAGE_WIDTH: int = 20

ELLIPSIS: str = "…"
NO_LOCATION: str = "—"

# Shells report a process killed by signal N as 128 + N.
SIGNAL_EXIT_BASE: int = 128

# Exit status reported for a Ctrl-C interrupted run (128 + SIGINT).
INTERRUPTED_EXIT_STATUS: int = SIGNAL_EXIT_BASE + 2
