# topmark:header:start
#
#   project      : Coral
#   file         : formats.py
#   file_relpath : src/coral/rendering/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Human report layouts and rendering options.

`RenderOptions` carries everything a renderer needs. It is resolved once by the
caller (CLI or API), so renderers never look at the terminal, the clock or the
environment and identical input always renders identically.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from coral.constants import DEFAULT_TERMINAL_WIDTH


class ReportLayout(str, Enum):
    """Human report layouts.

    Attributes:
        COMPACT: One line per diagnostic group, children indented beneath.
        TABLE: Aligned columns (level, file, line, message) under a header row.
        RENDERED: The compiler's own multi-line text, once per group.
    """

    COMPACT = "compact"
    TABLE = "table"
    RENDERED = "rendered"


@dataclass(frozen=True)
class RenderOptions:
    """Options shared by all human layouts.

    Attributes:
        width: Maximum line width in columns; longer lines are truncated.
        color: Whether to emit ANSI styles.
        verbose: Show message details, secondary spans, suggestions and targets.
        show_children: Show notes/help beneath each group.
        layout: Which layout to render.
    """

    width: int = DEFAULT_TERMINAL_WIDTH
    color: bool = False
    verbose: bool = False
    show_children: bool = True
    layout: ReportLayout = ReportLayout.COMPACT
