"""Incremental highlighting engine for one document.

Highlighter owns the per-document state: the atom tuple of every line, the
token arena of the last sweep and, per line, the indices of the tokens
touching it. Raw line text is never stored; callers pass it to ``line()``
when they render.

Update policy:
    ``edit(y, text)`` re-atomizes line ``y`` only. When the new atoms have
    the same shape as the old ones (same names, roles, regions, escape
    flags and overlaps, in the same order), no cross-line state can have
    changed and the new atoms are swapped in without a sweep. Any other
    change, and every line insertion or removal, runs a full sweep.

Thread Safety:
    A Highlighter has exactly one writer. Callers serialize edits to an
    instance; separate instances share nothing but their (immutable)
    PatternRegistry and may live on separate threads.

Example:
    >>> h = Highlighter()
    >>> h.keyword("keyword", r"\\bfn\\b")
    >>> h.bounded("comment", "/*", "*/", escapable=False)
    >>> doc = ["/* a", "*/ fn"]
    >>> h.run(doc)
    >>> h.line(1, doc[1])
    [Run(text='*/', kind='comment'), Run(text=' ', kind=None), Run(text='fn', kind='keyword')]

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import replace

from pincel.atomizer import Atom, atom_shape, atomize
from pincel.config import EngineConfig, get_engine_config
from pincel.errors import LineOutOfRangeError
from pincel.profiling import get_sweep_accumulator
from pincel.projection import Run, expand_tabs, project
from pincel.registry import PatternRegistry, PatternRegistryBuilder
from pincel.sweep import KeywordToken, Location, RegionToken, Token, sweep
from pincel.utils.logger import get_logger

logger = get_logger(__name__)


class Highlighter:
    """Highlighting engine for a single document.

    Args:
        registry: Shared pattern registry. Defaults to an empty one that
            can be filled with ``keyword``/``bounded``/``bounded_interp``.
        config: Engine configuration. Defaults to the active context
            config (see ``pincel.config``).
        tab_width: Shortcut overriding ``config.tab_width``.

    """

    __slots__ = ("_registry", "_config", "_atoms", "_tokens", "_line_refs")

    def __init__(
        self,
        registry: PatternRegistry | None = None,
        *,
        config: EngineConfig | None = None,
        tab_width: int | None = None,
    ) -> None:
        config = config or get_engine_config()
        if tab_width is not None:
            config = replace(config, tab_width=tab_width)
        self._config = config
        self._registry = registry if registry is not None else PatternRegistryBuilder().build()
        self._atoms: list[tuple[Atom, ...]] = []
        self._tokens: tuple[Token, ...] = ()
        self._line_refs: list[tuple[int, ...]] = []

    # =========================================================================
    # Registration
    # =========================================================================

    def keyword(self, name: str, pattern: str) -> None:
        """Register a keyword pattern. See PatternRegistryBuilder.add_keyword."""
        self._extend(self._registry.builder().add_keyword(name, pattern))

    def bounded(self, name: str, start: str, end: str, escapable: bool = True) -> None:
        """Register a bounded region. See PatternRegistryBuilder.add_bounded."""
        self._extend(self._registry.builder().add_bounded(name, start, end, escapable))

    def bounded_interp(
        self,
        name: str,
        start: str,
        end: str,
        inner_start: str,
        inner_end: str,
        escapable: bool = True,
    ) -> None:
        """Register an interpolating region. See PatternRegistryBuilder.add_interpolating."""
        builder = self._registry.builder().add_interpolating(
            name, start, end, inner_start, inner_end, escapable
        )
        self._extend(builder)

    def _extend(self, builder: PatternRegistryBuilder) -> None:
        self._registry = builder.build()
        if self._atoms:
            # Stored atoms came from the old rules and the text is gone
            logger.debug("Rules changed; discarding %d highlighted lines", len(self._atoms))
            self._atoms = []
            self._tokens = ()
            self._line_refs = []

    # =========================================================================
    # Document maintenance
    # =========================================================================

    def run(self, lines: Iterable[str]) -> None:
        """Highlight a whole document, replacing any previous state."""
        self._atoms = [self._atomize(line) for line in lines]
        self._resweep()

    def append(self, line: str) -> None:
        """Add a line to the end of the document."""
        self._atoms.append(self._atomize(line))
        self._resweep()

    def edit(self, y: int, text: str) -> None:
        """Replace the contents of line ``y``.

        Raises:
            LineOutOfRangeError: ``y`` is not a line of the document.
        """
        self._check_line(y, len(self._atoms))
        atoms = self._atomize(text)
        previous = self._atoms[y]
        self._atoms[y] = atoms
        if atom_shape(atoms) == atom_shape(previous):
            logger.debug("Line %d keeps its atom shape; sweep skipped", y)
            acc = get_sweep_accumulator()
            if acc is not None:
                acc.record_skip()
            return
        self._resweep()

    replace_line = edit

    def insert_line(self, y: int, text: str) -> None:
        """Insert a line before line ``y`` (``y == line_count`` appends).

        Raises:
            LineOutOfRangeError: ``y`` is outside ``0..line_count``.
        """
        self._check_line(y, len(self._atoms) + 1)
        self._atoms.insert(y, self._atomize(text))
        self._resweep()

    def remove_line(self, y: int) -> None:
        """Remove line ``y``.

        Raises:
            LineOutOfRangeError: ``y`` is not a line of the document.
        """
        self._check_line(y, len(self._atoms))
        del self._atoms[y]
        self._resweep()

    # =========================================================================
    # Queries
    # =========================================================================

    def line(self, y: int, text: str) -> list[Run]:
        """Project line ``y`` into a run sequence.

        Args:
            y: Line index.
            text: Current raw text of the line.

        Returns:
            Runs covering the tab-expanded line, or an empty list when
            ``y`` is not a line of the document.

        """
        if not 0 <= y < len(self._atoms):
            return []
        length = len(expand_tabs(text, self._config.tab_width))
        return project(text, self._spans(y, length), tab_width=self._config.tab_width)

    project = line

    def tokens_on(self, y: int) -> tuple[Token, ...]:
        """Tokens touching line ``y``, in creation order."""
        if not 0 <= y < len(self._line_refs):
            return ()
        return tuple(self._tokens[index] for index in self._line_refs[y])

    def atoms(self, y: int) -> tuple[Atom, ...]:
        """Current atoms of line ``y``."""
        if not 0 <= y < len(self._atoms):
            return ()
        return self._atoms[y]

    @property
    def tokens(self) -> tuple[Token, ...]:
        """Token arena of the last sweep."""
        return self._tokens

    @property
    def registry(self) -> PatternRegistry:
        return self._registry

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def tab_width(self) -> int:
        return self._config.tab_width

    @property
    def line_count(self) -> int:
        return len(self._atoms)

    def __len__(self) -> int:
        return len(self._atoms)

    def __repr__(self) -> str:
        return (
            f"Highlighter(lines={len(self._atoms)}, tokens={len(self._tokens)}, "
            f"patterns={len(self._registry)})"
        )

    # =========================================================================
    # Internals
    # =========================================================================

    def _atomize(self, line: str) -> tuple[Atom, ...]:
        acc = get_sweep_accumulator()
        if acc is not None:
            acc.record_atomize()
        return atomize(line, self._registry, tab_width=self._config.tab_width)

    def _resweep(self) -> None:
        result = sweep(self._atoms, self._registry, strict=self._config.strict)
        self._tokens = result.tokens
        self._line_refs = list(result.line_refs)
        logger.debug(
            "Full sweep: %d lines, %d tokens, final state %r",
            len(self._atoms),
            len(self._tokens),
            result.final_state,
        )
        acc = get_sweep_accumulator()
        if acc is not None:
            acc.record_sweep(sum(len(atoms) for atoms in self._atoms))

    def _spans(self, y: int, length: int) -> Iterator[tuple[int, int, str]]:
        for index in self._line_refs[y]:
            match self._tokens[index]:
                case KeywordToken(name=name, at=at):
                    atom = self._atom_at(at)
                    yield atom.start, atom.end, name
                case RegionToken(name=name, start=start, end=end):
                    begin = self._atom_at(start).start if start.line == y else 0
                    if end is not None and end.line == y:
                        finish = self._atom_at(end).end
                    else:
                        finish = length
                    yield begin, finish, name

    def _atom_at(self, location: Location) -> Atom:
        return self._atoms[location.line][location.atom]

    def _check_line(self, y: int, limit: int) -> None:
        if not 0 <= y < limit:
            raise LineOutOfRangeError(y, len(self._atoms))
