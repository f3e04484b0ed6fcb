"""
Pincel — Incremental Syntax Highlighting Engine for Python

Classifies spans of a multi-line document into named token categories from
user-declared rules (keywords, bounded regions such as comments and strings,
and regions with interpolated code) and keeps that classification correct
and cheap to recompute as the document is edited line by line.

Quick Start:
    >>> from pincel import Highlighter, window
    >>> h = Highlighter(tab_width=4)
    >>> h.keyword("keyword", r"\\b(fn|return)\\b")
    >>> h.bounded("comment", "/*", "*/", escapable=False)
    >>> h.bounded_interp("string", '"', '"', "{", "}")
    >>> doc = ["/* a", "*/ fn"]
    >>> h.run(doc)
    >>> h.line(1, doc[1])
    [Run(text='*/', kind='comment'), Run(text=' ', kind=None), Run(text='fn', kind='keyword')]

    >>> # Editing keeps highlighting current
    >>> doc[0] = "// a"
    >>> h.edit(0, doc[0])

    >>> # Fit a line into a horizontally scrolled 6-column viewport
    >>> window(h.line(1, doc[1]), 1, 6)
    [Run(text='/ ', kind=None), Run(text='fn', kind='keyword'), Run(text='  ', kind=None)]

Shared Rules:
    >>> from pincel import PatternRegistryBuilder
    >>> registry = (
    ...     PatternRegistryBuilder()
    ...     .add_bounded("comment", "/*", "*/", escapable=False)
    ...     .add_keyword("keyword", r"\\bfn\\b")
    ...     .build()
    ... )
    >>> left, right = Highlighter(registry), Highlighter(registry)

Installation:
    pip install pincel              # Core engine (zero deps)
"""

from collections.abc import Iterable

from pincel.atomizer import Atom, atom_shape, atomize, display_columns
from pincel.config import (
    EngineConfig,
    engine_config_context,
    get_engine_config,
    reset_engine_config,
    set_engine_config,
)
from pincel.engine import Highlighter
from pincel.errors import (
    ConfigError,
    InvalidPatternError,
    InvariantError,
    LineOutOfRangeError,
    PincelError,
)
from pincel.profiling import SweepAccumulator, get_sweep_accumulator, profiled_sweeps
from pincel.projection import Run, expand_tabs, project
from pincel.registry import (
    PatternDef,
    PatternRegistry,
    PatternRegistryBuilder,
    PatternRole,
    RegionDef,
)
from pincel.sweep import (
    FREE,
    Free,
    KeywordToken,
    Location,
    Open,
    OpenInterpolating,
    RegionToken,
    SweepResult,
    SweepState,
    Token,
    sweep,
    sweep_line,
)
from pincel.window import char_width, merge_runs, run_width, text_width, trim, window

__version__ = "0.2.0"


def highlight(
    lines: Iterable[str],
    registry: PatternRegistry,
    *,
    tab_width: int | None = None,
) -> list[list[Run]]:
    """Highlight a whole document in one call.

    Args:
        lines: Lines of the document, without line terminators.
        registry: Rules to highlight with.
        tab_width: Display columns per tab (defaults to the context config).

    Returns:
        One run sequence per line.

    Example:
        >>> registry = PatternRegistryBuilder().add_keyword("kw", "fn").build()
        >>> highlight(["fn x"], registry)
        [[Run(text='fn', kind='kw'), Run(text=' x', kind=None)]]
    """
    lines = list(lines)
    engine = Highlighter(registry, tab_width=tab_width)
    engine.run(lines)
    return [engine.line(y, text) for y, text in enumerate(lines)]


__all__ = [
    # Engine
    "Highlighter",
    "highlight",
    # Registry
    "PatternRegistry",
    "PatternRegistryBuilder",
    "PatternDef",
    "PatternRole",
    "RegionDef",
    # Atomizer
    "Atom",
    "atomize",
    "atom_shape",
    "display_columns",
    # Sweep
    "sweep",
    "sweep_line",
    "SweepResult",
    "SweepState",
    "FREE",
    "Free",
    "Open",
    "OpenInterpolating",
    "Location",
    "Token",
    "KeywordToken",
    "RegionToken",
    # Rendering helpers
    "Run",
    "project",
    "expand_tabs",
    "window",
    "trim",
    "merge_runs",
    "char_width",
    "text_width",
    "run_width",
    # Configuration
    "EngineConfig",
    "get_engine_config",
    "set_engine_config",
    "reset_engine_config",
    "engine_config_context",
    # Profiling
    "SweepAccumulator",
    "get_sweep_accumulator",
    "profiled_sweeps",
    # Errors
    "PincelError",
    "InvalidPatternError",
    "ConfigError",
    "LineOutOfRangeError",
    "InvariantError",
]
