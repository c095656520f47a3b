# topmark:header:start
#
#   project      : Coral
#   file         : keys.py
#   file_relpath : src/coral/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for Coral configuration.

The same keys are read from ``coral.toml`` (top level) and from the
``[package.metadata.coral]`` / ``[workspace.metadata.coral]`` tables of
``Cargo.toml``.

Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by Coral configuration.

    The ordering of constants mirrors `load_defaults_dict` in
    [`coral.config.loaders`][coral.config.loaders].
    """

    # [report]
    SECTION_REPORT: Final[str] = "report"

    KEY_WIDTH: Final[str] = "width"
    KEY_LAYOUT: Final[str] = "layout"
    KEY_VERBOSE: Final[str] = "verbose"
    KEY_SHOW_CHILDREN: Final[str] = "show_children"

    # [cargo]
    SECTION_CARGO: Final[str] = "cargo"

    KEY_CHECKER: Final[str] = "checker"
    KEY_ARGS: Final[str] = "args"

    # Cargo.toml embedding: [package.metadata.coral] / [workspace.metadata.coral]
    CARGO_PACKAGE: Final[str] = "package"
    CARGO_WORKSPACE: Final[str] = "workspace"
    CARGO_METADATA: Final[str] = "metadata"
    CARGO_TOOL_TABLE: Final[str] = "coral"
