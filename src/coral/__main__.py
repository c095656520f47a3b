# topmark:header:start
#
#   project      : Coral
#   file         : __main__.py
#   file_relpath : src/coral/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running Coral via ``python -m coral``.

It delegates directly to :func:`coral.cli.main.cli`, ensuring a single,
authoritative CLI entry point regardless of how Coral is launched.

Examples:
    Check the crate in the current directory::

        python -m coral check
"""

from __future__ import annotations

from coral.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
