# topmark:header:start
#
#   project      : Coral
#   file         : __init__.py
#   file_relpath : src/coral/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core building blocks shared by every Coral layer.

- [`coral.core.errors`][coral.core.errors]: the exception taxonomy.
- [`coral.core.problems`][coral.core.problems]: the per-line problem sink that
  records decode and schema failures without interrupting the pipeline.
"""

from __future__ import annotations

from coral.core.errors import CoralError, DecodeError, SchemaError, SourceUnavailableError
from coral.core.problems import FrozenProblemLog, Problem, ProblemKind, ProblemLog

__all__ = [
    "CoralError",
    "DecodeError",
    "FrozenProblemLog",
    "Problem",
    "ProblemKind",
    "ProblemLog",
    "SchemaError",
    "SourceUnavailableError",
]
