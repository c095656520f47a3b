# topmark:header:start
#
#   project      : Coral
#   file         : exit_codes.py
#   file_relpath : src/coral/cli_shared/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the Coral CLI.

On a completed run Coral exits with the status of the cargo process that
produced the stream, so ``coral check`` can stand in for ``cargo check`` in
scripts and CI. The codes below cover Coral's own failures and align with the
BSD `sysexits` convention where practical.
"""

from enum import IntEnum

from coral.constants import INTERRUPTED_EXIT_STATUS


class ExitCode(IntEnum):
    """Standardized exit codes for the Coral CLI.

    Attributes:
        SUCCESS: The build (or captured stream) succeeded.
        FAILURE: The build failed and no process exit status was available.
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        SOURCE_UNAVAILABLE: The input file or stream cannot be read. Mirrors BSD
            ``EX_NOINPUT (66)``.
        CARGO_UNAVAILABLE: ``cargo`` could not be executed. Mirrors BSD
            ``EX_UNAVAILABLE (69)``.
        CONFIG_ERROR: An explicitly requested config file is malformed. Mirrors BSD
            ``EX_CONFIG (78)``.
        INTERRUPTED: The run was stopped with Ctrl-C (128 + SIGINT).
        UNEXPECTED_ERROR: Unhandled/unknown error (last-resort).
    """

    SUCCESS = 0
    FAILURE = 1

    # sysexits-aligned values for better interoperability
    USAGE_ERROR = 64  # EX_USAGE
    SOURCE_UNAVAILABLE = 66  # EX_NOINPUT
    CARGO_UNAVAILABLE = 69  # EX_UNAVAILABLE
    CONFIG_ERROR = 78  # EX_CONFIG

    INTERRUPTED = INTERRUPTED_EXIT_STATUS

    UNEXPECTED_ERROR = 255
