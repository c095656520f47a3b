# topmark:header:start
#
#   project      : Coral
#   file         : loaders.py
#   file_relpath : src/coral/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module provides I/O helpers for reading Coral configuration from:
- the runtime defaults defined in code, and
- on-disk TOML files (``coral.toml`` / ``Cargo.toml``).

Parsing is done with `tomlkit` and returned as plain `dict` structures. The
``*_checked`` getters read typed values out of those dicts, recording a warning
for every value of the wrong shape instead of failing.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Final, TypeVar, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from coral.config.keys import Toml
from coral.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from coral.config.logging import CoralLogger

logger: CoralLogger = get_logger(__name__)

TomlTable = dict[str, Any]

E = TypeVar("E", bound=Enum)


def load_defaults_dict() -> TomlTable:
    """Return Coral's runtime defaults as a Python dict.

    This function performs **no I/O**. ``report.width`` is deliberately absent:
    an unset width means "follow the terminal".

    Returns:
        A new dict, safe for callers to mutate.
    """
    return {
        Toml.SECTION_REPORT: {
            Toml.KEY_LAYOUT: "compact",
            Toml.KEY_VERBOSE: False,
            Toml.KEY_SHOW_CHILDREN: True,
        },
        Toml.SECTION_CARGO: {
            Toml.KEY_CHECKER: "check",
            Toml.KEY_ARGS: [],
        },
    }


def load_toml_dict(path: Path, *, warnings: list[str] | None = None) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (``coral.toml`` or ``Cargo.toml``).
        warnings: Optional sink; a message is appended for each failure.

    Returns:
        The parsed TOML content, or an empty dict on failure.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    message: str
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        message = f"Error loading TOML from {path}: {e}"
    except TomlkitParseError as e:
        message = f"Error decoding TOML from {path}: {e}"
    except (TypeError, ValueError) as e:
        message = f"Unknown error while reading TOML from {path}: {e}"
    logger.error("%s", message)
    if warnings is not None:
        warnings.append(message)
    return {}


def extract_cargo_metadata(data: TomlTable) -> TomlTable | None:
    """Return the ``coral`` table embedded in a parsed ``Cargo.toml``.

    ``[package.metadata.coral]`` wins over ``[workspace.metadata.coral]`` when a
    manifest carries both.

    Returns:
        The embedded table, or None when the manifest has none.
    """
    for section in (Toml.CARGO_PACKAGE, Toml.CARGO_WORKSPACE):
        outer = data.get(section)
        if not isinstance(outer, dict):
            continue
        metadata = cast("TomlTable", outer).get(Toml.CARGO_METADATA)
        if not isinstance(metadata, dict):
            continue
        table = cast("TomlTable", metadata).get(Toml.CARGO_TOOL_TABLE)
        if isinstance(table, dict):
            return cast("TomlTable", table)
    return None


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table at ``key``, or an empty dict when absent or not a table."""
    value = table.get(key)
    return cast("TomlTable", value) if isinstance(value, dict) else {}


# --- Schema/shape validation helpers (checked) ---


def _warn(warnings: list[str], message: str) -> None:
    logger.warning("%s", message)
    warnings.append(message)


def get_bool_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    warnings: list[str],
) -> bool | None:
    """Return an optional boolean value, warning when present but not `bool`."""
    value: Any | None = table.get(key)
    if value is None or isinstance(value, bool):
        return value
    _warn(warnings, f"Expected bool in {where}.{key}, got {type(value).__name__}: {value!r}")
    return None


def get_int_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    warnings: list[str],
    minimum: int | None = None,
) -> int | None:
    """Return an optional int value, warning when present but not a valid `int`.

    Notes:
        - `bool` is rejected (since `bool` is a subclass of `int`).
        - Values below ``minimum`` are rejected with a warning.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"
    if isinstance(value, bool) or not isinstance(value, int):
        _warn(warnings, f"Expected int in {loc}, got {type(value).__name__}: {value!r}")
        return None
    if minimum is not None and value < minimum:
        _warn(warnings, f"Value for {loc} must be >= {minimum}, got {value}")
        return None
    return value


def get_string_list_value_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    warnings: list[str],
) -> list[str] | None:
    """Return a list of strings, dropping non-string entries with a warning.

    Returns:
        The filtered list, or None when the key is missing or not a list.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"
    if not isinstance(value, list):
        _warn(warnings, f"Expected list in {loc}, got {type(value).__name__}: {value!r}")
        return None

    out: list[str] = []
    for v in cast("list[Any]", value):
        if isinstance(v, str):
            out.append(v)
        else:
            _warn(warnings, f"Ignoring non-string entry in {loc}: {v!r}")
    return out


def get_enum_value_checked(
    table: TomlTable,
    key: str,
    enum_cls: type[E],
    *,
    where: str,
    warnings: list[str],
) -> E | None:
    """Parse an enum value from TOML.

    Expected input is a `str` matching one of the Enum values.

    - Missing key -> None
    - Wrong type -> warning + None
    - Unknown enum value -> warning + None
    """
    raw: Any | None = table.get(key)
    if raw is None:
        return None

    loc: Final[str] = f"{where}.{key}"
    if not isinstance(raw, str):
        _warn(warnings, f"Expected string enum value in {loc}, got {type(raw).__name__}: {raw!r}")
        return None

    try:
        return enum_cls(raw)
    except ValueError:
        allowed: str = ", ".join(str(e.value) for e in enum_cls)
        _warn(warnings, f"Invalid value for {loc}: {raw!r} (allowed: {allowed})")
        return None
