# topmark:header:start
#
#   project      : Coral
#   file         : records.py
#   file_relpath : src/coral/messages/records.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Typed records for one line of cargo's JSON message stream.

Cargo tags every line with a ``reason`` discriminant. Coral models the reasons
it understands as frozen dataclasses and keeps an explicit `UnknownRecord` for
anything else, so newer cargo versions never break decoding.

Records are transient: they live from decode until the extractor has consumed
them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from collections.abc import Mapping


class Reason(str, Enum):
    """Known values of the top-level ``reason`` field."""

    COMPILER_MESSAGE = "compiler-message"
    COMPILER_ARTIFACT = "compiler-artifact"
    BUILD_SCRIPT_EXECUTED = "build-script-executed"
    BUILD_FINISHED = "build-finished"

    @classmethod
    def parse(cls, value: str) -> Reason | None:
        """Return the matching member, or None for an unrecognized reason."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class TargetInfo:
    """The build target (lib, bin, test, ...) a record belongs to.

    Attributes:
        name: Target name as declared in the manifest.
        kinds: Target kinds (``lib``, ``bin``, ``test``, ``custom-build``, ...).
        src_path: Root source file of the target, when reported.
        test: True when the target was compiled in test mode.
    """

    name: str
    kinds: tuple[str, ...] = ()
    src_path: str | None = None
    test: bool = False

    @property
    def identifier(self) -> str:
        """Stable display identifier, e.g. ``"coral (lib)"`` or ``"coral (test)"``."""
        kind = "test" if self.test else ",".join(self.kinds)
        return f"{self.name} ({kind})" if kind else self.name


@dataclass(frozen=True)
class CompilerMessageRecord:
    """A ``compiler-message`` line; ``message`` is the untouched diagnostic object."""

    message: Mapping[str, Any]
    package_id: str | None = None
    target: TargetInfo | None = None
    payload: Mapping[str, Any] = field(default_factory=lambda: {}, repr=False)

    reason = Reason.COMPILER_MESSAGE


@dataclass(frozen=True)
class CompilerArtifactRecord:
    """A ``compiler-artifact`` line: one target finished compiling."""

    package_id: str | None = None
    target: TargetInfo | None = None
    fresh: bool | None = None
    payload: Mapping[str, Any] = field(default_factory=lambda: {}, repr=False)

    reason = Reason.COMPILER_ARTIFACT


@dataclass(frozen=True)
class BuildScriptRecord:
    """A ``build-script-executed`` line."""

    package_id: str | None = None
    payload: Mapping[str, Any] = field(default_factory=lambda: {}, repr=False)

    reason = Reason.BUILD_SCRIPT_EXECUTED


@dataclass(frozen=True)
class BuildFinishedRecord:
    """The final ``build-finished`` line; ``success`` is None when not reported."""

    success: bool | None = None
    payload: Mapping[str, Any] = field(default_factory=lambda: {}, repr=False)

    package_id = None
    reason = Reason.BUILD_FINISHED


@dataclass(frozen=True)
class UnknownRecord:
    """A line with a ``reason`` Coral does not model."""

    raw_reason: str
    package_id: str | None = None
    payload: Mapping[str, Any] = field(default_factory=lambda: {}, repr=False)

    reason = None


RawRecord = Union[
    CompilerMessageRecord,
    CompilerArtifactRecord,
    BuildScriptRecord,
    BuildFinishedRecord,
    UnknownRecord,
]
