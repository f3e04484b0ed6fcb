"""Atomizer: one line of text to a sorted tuple of atoms.

An atom is a single-line occurrence of one registered pattern. Atoms carry
display-column ranges (a tab counts as ``tab_width`` columns) so the
coordinates stay valid after the line projector expands tabs, and an
``escaped`` flag set when the match is preceded by an odd run of
backslashes.

Purity:
    ``atomize`` depends only on the line text, the registry and the tab
    width. Running it twice on the same input yields equal tuples; the
    engine relies on this to decide whether an edit can skip a sweep.

Thread Safety:
    Pure functions over immutable inputs. Safe to call from any thread.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import NamedTuple

from pincel.registry import PatternRegistry, PatternRole

ESCAPE_CHAR = "\\"


class Atom(NamedTuple):
    """A single-line occurrence of a registered pattern.

    Attributes:
        name: Tag name of the pattern.
        role: Role of the pattern (keyword, region delimiter, ...).
        region: Owning region id; None for keywords.
        start: First display column covered.
        end: Display column after the last one covered.
        escaped: Preceded by an odd number of escape characters.
        order: Registration index of the pattern (tie-break).

    """

    name: str
    role: PatternRole
    region: int | None
    start: int
    end: int
    escaped: bool
    order: int

    def __repr__(self) -> str:
        flag = " escaped" if self.escaped else ""
        return f"Atom({self.role.name}, {self.name!r}, {self.start}..{self.end}{flag})"


# Position-free description of one atom: name, role, region, escaped and the
# indices of earlier atoms on the line it overlaps.
type AtomShape = tuple[str, PatternRole, int | None, bool, tuple[int, ...]]


def atomize(line: str, registry: PatternRegistry, *, tab_width: int = 4) -> tuple[Atom, ...]:
    """Run every pattern of ``registry`` against ``line``.

    Args:
        line: One line of source text, without its line terminator.
        registry: Patterns to match.
        tab_width: Display columns a tab occupies.

    Returns:
        Atoms sorted by start column, registration order breaking ties.
        Zero-length matches are discarded.

    """
    column = _column_mapper(line, tab_width)
    atoms: list[Atom] = []
    for pattern in registry.patterns:
        for match in pattern.matcher.finditer(line):
            start, end = _match_span(match)
            if start == end:
                continue
            escaped = _escape_run(line, start) % 2 == 1
            atoms.append(
                Atom(
                    pattern.name,
                    pattern.role,
                    pattern.region,
                    column(start),
                    column(end),
                    escaped,
                    pattern.order,
                )
            )
    atoms.sort(key=_sort_key)
    return tuple(atoms)


def atom_shape(atoms: Sequence[Atom]) -> tuple[AtomShape, ...]:
    """Describe a line's atoms without their positions.

    Two lines with equal shapes drive the tokenizer through identical
    transitions: same atoms in the same order, same escape flags, and the
    same atoms shadowed by overlapping predecessors.
    """
    shape: list[AtomShape] = []
    active: list[int] = []
    for i, atom in enumerate(atoms):
        # Starts never decrease, so an atom that ends before this one starts
        # cannot overlap anything later either.
        active = [j for j in active if atoms[j].end > atom.start]
        shape.append((atom.name, atom.role, atom.region, atom.escaped, tuple(active)))
        active.append(i)
    return tuple(shape)


def display_columns(line: str, tab_width: int = 4) -> list[int]:
    """Map every string index of ``line`` (and its end) to a display column.

    Example:
        >>> display_columns("\\ta", 4)
        [0, 4, 5]

    """
    columns: list[int] = []
    col = 0
    for ch in line:
        columns.append(col)
        col += tab_width if ch == "\t" else 1
    columns.append(col)
    return columns


def _column_mapper(line: str, tab_width: int) -> Callable[[int], int]:
    if "\t" not in line:
        return _identity
    return display_columns(line, tab_width).__getitem__


def _identity(index: int) -> int:
    return index


def _match_span(match: re.Match[str]) -> tuple[int, int]:
    # Last participating group wins; no groups means the whole match
    for group in range(match.re.groups, 0, -1):
        start, end = match.span(group)
        if start != -1:
            return start, end
    return match.span()


def _escape_run(line: str, index: int) -> int:
    count = 0
    i = index - 1
    while i >= 0 and line[i] == ESCAPE_CHAR:
        count += 1
        i -= 1
    return count


def _sort_key(atom: Atom) -> tuple[int, int]:
    return atom.start, atom.order
