"""Tokenizer sweep: assemble atoms into tokens across lines.

A sweep walks every line's atoms left to right, top to bottom, carrying a
small tagged state:

- ``Free``: outside any bounded region. Keywords emit tokens; region
  delimiters open a region token.
- ``Open(region, token)``: inside a bounded region whose token is still
  open. Only the region's own closing delimiter (or its interpolation
  start marker) is acted upon.
- ``OpenInterpolating(region)``: inside an interpolation of a region.
  Keywords fire again; the region's interpolation end marker opens a new
  continuation token.

Regions never nest, so a single open region is all the state needs. The
state is threaded through ``sweep_line`` as an explicit accumulator and
token references are plain indices into the token arena built by that
sweep; nothing outlives the sweep that produced it.

Thread Safety:
    ``sweep`` is a pure function of its inputs. Safe to call from any thread.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace

from pincel.atomizer import Atom
from pincel.errors import InvariantError
from pincel.registry import PatternRegistry, PatternRole
from pincel.utils.logger import get_logger

logger = get_logger(__name__)

_OPENERS = frozenset({PatternRole.REGION_START, PatternRole.REGION_HYBRID})
_CLOSERS = frozenset(
    {PatternRole.REGION_END, PatternRole.REGION_HYBRID, PatternRole.INTERPOLATION_START}
)


@dataclass(frozen=True, slots=True)
class Location:
    """Position of an atom: line index and index within that line's atoms.

    Only meaningful together with the atom lists of the sweep that
    produced it.
    """

    line: int
    atom: int

    def __str__(self) -> str:
        return f"{self.line}:{self.atom}"


@dataclass(frozen=True, slots=True)
class KeywordToken:
    """A single-line keyword occurrence."""

    name: str
    at: Location

    @property
    def first_line(self) -> int:
        return self.at.line


@dataclass(frozen=True, slots=True)
class RegionToken:
    """A bounded region, possibly spanning many lines.

    Attributes:
        name: Tag name of the region.
        region: Region id in the registry.
        start: Location of the opening delimiter (or, for a continuation
            after an interpolation, of the interpolation end marker).
        end: Location of the closing atom, or None while unterminated.

    """

    name: str
    region: int
    start: Location
    end: Location | None = None

    @property
    def first_line(self) -> int:
        return self.start.line

    @property
    def is_open(self) -> bool:
        return self.end is None


type Token = KeywordToken | RegionToken


@dataclass(frozen=True, slots=True)
class Free:
    """No bounded region is open."""


@dataclass(frozen=True, slots=True)
class Open:
    """Region ``region`` is open; its token is ``token`` in the arena."""

    region: int
    token: int


@dataclass(frozen=True, slots=True)
class OpenInterpolating:
    """Inside an interpolation of region ``region``; no region token is open."""

    region: int


type SweepState = Free | Open | OpenInterpolating

FREE = Free()


@dataclass(frozen=True, slots=True)
class SweepResult:
    """Everything a full sweep produces.

    Attributes:
        tokens: Token arena, in creation order.
        line_refs: For each line, indices of the tokens touching it.
        final_state: State after the last line (Free unless the document
            ends inside a region or interpolation).

    """

    tokens: tuple[Token, ...]
    line_refs: tuple[tuple[int, ...], ...]
    final_state: SweepState


def sweep(
    lines_atoms: Sequence[Sequence[Atom]],
    registry: PatternRegistry,
    *,
    strict: bool = False,
) -> SweepResult:
    """Run the tokenizer over every line of a document.

    Args:
        lines_atoms: Atom tuples, one per line, as produced by ``atomize``.
        registry: Registry the atoms were produced with.
        strict: Raise InvariantError on inconsistent state instead of
            skipping the offending atom.

    Returns:
        A fresh SweepResult; nothing from an earlier sweep is reused.

    """
    tokens: list[Token] = []
    line_refs: list[tuple[int, ...]] = []
    state: SweepState = FREE
    for y, atoms in enumerate(lines_atoms):
        state, refs = sweep_line(state, y, atoms, tokens, registry, strict=strict)
        line_refs.append(tuple(refs))
    return SweepResult(tuple(tokens), tuple(line_refs), state)


def sweep_line(
    state: SweepState,
    y: int,
    atoms: Sequence[Atom],
    tokens: list[Token],
    registry: PatternRegistry,
    *,
    strict: bool = False,
) -> tuple[SweepState, list[int]]:
    """Advance the sweep over one line.

    Args:
        state: State on entry to line ``y``.
        y: Line index.
        atoms: The line's atoms, sorted by start column.
        tokens: Token arena of the current sweep; new tokens are appended
            and closed region tokens are replaced in place.
        registry: Registry the atoms were produced with.
        strict: See ``sweep``.

    Returns:
        The state on exit from the line and the indices of every token
        touching it, in creation order.

    """
    refs: list[int] = []
    if isinstance(state, Open):
        refs.append(state.token)

    consumed = 0
    for x, atom in enumerate(atoms):
        if atom.start < consumed:
            continue
        if atom.escaped and registry.is_escapable(atom.region):
            continue

        match state:
            case Free():
                if atom.role is PatternRole.KEYWORD:
                    refs.append(_push(tokens, KeywordToken(atom.name, Location(y, x))))
                elif atom.role in _OPENERS and atom.region is not None:
                    index = _push(tokens, RegionToken(atom.name, atom.region, Location(y, x)))
                    refs.append(index)
                    state = Open(atom.region, index)
                else:
                    continue
            case Open(region=region, token=index):
                if atom.region != region or atom.role not in _CLOSERS:
                    continue
                if not _close(tokens, index, Location(y, x), strict):
                    continue
                if atom.role is PatternRole.INTERPOLATION_START:
                    state = OpenInterpolating(region)
                else:
                    state = FREE
            case OpenInterpolating(region=region):
                if atom.role is PatternRole.KEYWORD:
                    refs.append(_push(tokens, KeywordToken(atom.name, Location(y, x))))
                elif atom.role is PatternRole.INTERPOLATION_END and atom.region == region:
                    index = _push(tokens, RegionToken(atom.name, region, Location(y, x)))
                    refs.append(index)
                    state = Open(region, index)
                else:
                    continue
        consumed = atom.end
    return state, refs


def _push(tokens: list[Token], token: Token) -> int:
    tokens.append(token)
    return len(tokens) - 1


def _close(tokens: list[Token], index: int, here: Location, strict: bool) -> bool:
    token = tokens[index] if 0 <= index < len(tokens) else None
    if isinstance(token, RegionToken) and token.is_open:
        tokens[index] = replace(token, end=here)
        return True
    message = f"closing atom at {here} has no open region token (token index {index})"
    if strict:
        raise InvariantError(message, line=here.line)
    logger.warning("Skipping inconsistent atom: %s", message)
    return False
