# topmark:header:start
#
#   project      : Coral
#   file         : model.py
#   file_relpath : src/coral/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Coral configuration: a mutable builder and an immutable runtime snapshot.

Layers, lowest to highest precedence:

    1) Built-in defaults (`load_defaults_dict`)
    2) ``Cargo.toml`` in the working directory
       (``[package.metadata.coral]`` or ``[workspace.metadata.coral]``)
    3) ``coral.toml`` in the working directory
    4) Each ``--config PATH``, in the order given
    5) CLI flags (`MutableConfig.apply_cli_args`)

Every field of `MutableConfig` is tri-state: ``None`` means "not set by this
layer" and is filled from lower layers by `MutableConfig.merge_with`.
`MutableConfig.freeze` resolves what is still unset to its default.

Bad values never abort loading: each is logged and recorded in
``warnings`` so the CLI can report them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from coral.config.keys import Toml
from coral.config.loaders import (
    extract_cargo_metadata,
    get_bool_value_or_none_checked,
    get_enum_value_checked,
    get_int_value_or_none_checked,
    get_string_list_value_checked,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from coral.config.logging import get_logger
from coral.constants import CARGO_TOML_NAME, CORAL_TOML_NAME, MIN_MESSAGE_WIDTH
from coral.driver.cargo import Checker
from coral.rendering.formats import ReportLayout, RenderOptions

if TYPE_CHECKING:
    from collections.abc import Iterable

    from coral.config.loaders import TomlTable
    from coral.config.logging import CoralLogger

# ArgsLike: generic mapping accepted by `apply_cli_args` (CLI namespaces and API dicts).
ArgsLike = Mapping[str, Any]

logger: CoralLogger = get_logger(__name__)

CLI_OVERRIDE_STR: str = "<CLI overrides>"
DEFAULTS_STR: str = "<defaults>"


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True)
class Config:
    """Immutable runtime configuration for Coral.

    Attributes:
        width: Report width in columns; None means "follow the terminal".
        layout: Human report layout.
        verbose: Show message details, secondary spans and suggestions.
        show_children: Show notes/help beneath each diagnostic.
        checker: Which cargo subcommand to run.
        cargo_args: Extra arguments passed to cargo after ``--message-format json``.
        config_files: Sources that contributed to this config, lowest first.
        warnings: Problems met while loading config files (non-fatal).
    """

    width: int | None
    layout: ReportLayout
    verbose: bool
    show_children: bool
    checker: Checker
    cargo_args: tuple[str, ...]
    config_files: tuple[str, ...]
    warnings: tuple[str, ...]

    def render_options(self, *, color: bool, fallback_width: int) -> RenderOptions:
        """Return the renderer options for this config.

        Args:
            color: Whether to emit ANSI styles.
            fallback_width: Width to use when ``width`` is unset.
        """
        return RenderOptions(
            width=self.width if self.width is not None else fallback_width,
            color=color,
            verbose=self.verbose,
            show_children=self.show_children,
            layout=self.layout,
        )

    def to_toml_dict(self) -> TomlTable:
        """Return the effective settings in TOML table shape."""
        report: TomlTable = {
            Toml.KEY_LAYOUT: self.layout.value,
            Toml.KEY_VERBOSE: self.verbose,
            Toml.KEY_SHOW_CHILDREN: self.show_children,
        }
        if self.width is not None:
            report[Toml.KEY_WIDTH] = self.width
        return {
            Toml.SECTION_REPORT: report,
            Toml.SECTION_CARGO: {
                Toml.KEY_CHECKER: self.checker.value,
                Toml.KEY_ARGS: list(self.cargo_args),
            },
        }


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    See `Config` for the meaning of each field; here every setting may be
    ``None`` (unset in this layer).
    """

    width: int | None = None
    layout: ReportLayout | None = None
    verbose: bool | None = None
    show_children: bool | None = None
    checker: Checker | None = None
    cargo_args: list[str] | None = None
    config_files: list[str] = field(default_factory=lambda: [])
    warnings: list[str] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`, resolving unset values."""
        return Config(
            width=self.width,
            layout=self.layout or ReportLayout.COMPACT,
            verbose=bool(self.verbose),
            show_children=self.show_children if self.show_children is not None else True,
            checker=self.checker or Checker.CHECK,
            cargo_args=tuple(self.cargo_args or ()),
            config_files=tuple(self.config_files),
            warnings=tuple(self.warnings),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a draft holding Coral's built-in defaults."""
        return cls.from_toml_dict(load_defaults_dict(), source=DEFAULTS_STR)

    @classmethod
    def from_toml_dict(cls, data: TomlTable, *, source: str | None = None) -> MutableConfig:
        """Create a draft config from a parsed TOML table.

        Args:
            data: Table holding ``[report]`` and ``[cargo]`` sub-tables.
            source: Name of the config source, recorded in ``config_files`` and
                used as the location prefix of warnings.

        Returns:
            The resulting draft.
        """
        draft = cls()
        prefix = f"{source}: " if source else ""

        report_tbl: TomlTable = get_table_value(data, Toml.SECTION_REPORT)
        logger.trace("TOML [report]: %s", report_tbl)
        cargo_tbl: TomlTable = get_table_value(data, Toml.SECTION_CARGO)
        logger.trace("TOML [cargo]: %s", cargo_tbl)

        where_report = f"{prefix}[{Toml.SECTION_REPORT}]"
        draft.width = get_int_value_or_none_checked(
            report_tbl,
            Toml.KEY_WIDTH,
            where=where_report,
            warnings=draft.warnings,
            minimum=MIN_MESSAGE_WIDTH,
        )
        draft.layout = get_enum_value_checked(
            report_tbl, Toml.KEY_LAYOUT, ReportLayout, where=where_report, warnings=draft.warnings
        )
        draft.verbose = get_bool_value_or_none_checked(
            report_tbl, Toml.KEY_VERBOSE, where=where_report, warnings=draft.warnings
        )
        draft.show_children = get_bool_value_or_none_checked(
            report_tbl, Toml.KEY_SHOW_CHILDREN, where=where_report, warnings=draft.warnings
        )

        where_cargo = f"{prefix}[{Toml.SECTION_CARGO}]"
        draft.checker = get_enum_value_checked(
            cargo_tbl, Toml.KEY_CHECKER, Checker, where=where_cargo, warnings=draft.warnings
        )
        draft.cargo_args = get_string_list_value_checked(
            cargo_tbl, Toml.KEY_ARGS, where=where_cargo, warnings=draft.warnings
        )

        if source:
            draft.config_files.append(source)
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        ``Cargo.toml`` manifests contribute only their embedded ``coral`` table;
        a manifest without one yields None. Unreadable or malformed files yield a
        draft that carries only the load warning.

        Args:
            path: Path to ``coral.toml``, ``Cargo.toml`` or any TOML file with the
                ``coral.toml`` shape.

        Returns:
            The draft, or None when a ``Cargo.toml`` carries no Coral table.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        warnings: list[str] = []
        data: TomlTable = load_toml_dict(path, warnings=warnings)

        if path.name == CARGO_TOML_NAME and not warnings:
            embedded = extract_cargo_metadata(data)
            if embedded is None:
                logger.debug("No [package.metadata.coral] table in %s", path)
                return None
            data = embedded

        draft = cls.from_toml_dict(data, source=str(path))
        draft.warnings[:0] = warnings
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found in ``start``, lowest precedence first.

        Only the given directory is searched: ``Cargo.toml`` first, then
        ``coral.toml`` so the dedicated file overrides the manifest.
        """
        found: list[Path] = []
        for name in (CARGO_TOML_NAME, CORAL_TOML_NAME):
            candidate = start / name
            if candidate.is_file():
                found.append(candidate)
        logger.debug("Discovered config files in %s: %s", start, found)
        return found

    @classmethod
    def load_merged(
        cls,
        *,
        cwd: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft.

        Args:
            cwd: Directory searched for ``Cargo.toml`` and ``coral.toml``
                (current working directory by default).
            extra_config_files: Explicit config files merged after discovery,
                in the order given.
            no_config: Skip discovered files (explicit files are still read).

        Returns:
            A draft ready for `apply_cli_args` and `freeze`.
        """
        draft = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(cwd or Path.cwd()):
                mc = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            mc = cls.from_toml_file(Path(extra))
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Provenance and warnings accumulate from both sides.
        """
        return MutableConfig(
            width=other.width if other.width is not None else self.width,
            layout=other.layout if other.layout is not None else self.layout,
            verbose=other.verbose if other.verbose is not None else self.verbose,
            show_children=other.show_children
            if other.show_children is not None
            else self.show_children,
            checker=other.checker if other.checker is not None else self.checker,
            cargo_args=other.cargo_args if other.cargo_args is not None else self.cargo_args,
            config_files=self.config_files + other.config_files,
            warnings=self.warnings + other.warnings,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply overrides from a parsed arguments mapping (CLI or API).

        Keys that are absent or None leave the draft untouched. Config-file
        discovery flags (``--config``, ``--no-config``) are handled by
        `load_merged`, not here.

        Args:
            args: Mapping with any of ``width``, ``layout``, ``verbose``,
                ``show_children``, ``checker``, ``cargo_args``.

        Returns:
            This draft, updated in place.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)

        if args.get("width") is not None:
            self.width = max(int(args["width"]), MIN_MESSAGE_WIDTH)
        if args.get("layout") is not None:
            self.layout = ReportLayout(args["layout"])
        if args.get("verbose") is not None:
            self.verbose = bool(args["verbose"])
        if args.get("show_children") is not None:
            self.show_children = bool(args["show_children"])
        if args.get("checker") is not None:
            self.checker = Checker(args["checker"])
        cargo_args = args.get("cargo_args")
        if cargo_args:
            # CLI arguments extend configured ones.
            self.cargo_args = [*(self.cargo_args or []), *cargo_args]
        return self
