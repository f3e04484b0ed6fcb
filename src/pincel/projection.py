"""Line projection: visible token spans to a run sequence.

A run sequence is the rendering-ready form of one line: alternating
tagged and untagged spans of text. Tabs are expanded first, using the
same width the atomizer used for its column coordinates, so the spans
line up with the expanded text.

Thread Safety:
    Pure functions. Safe to call from any thread.

"""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple


class Run(NamedTuple):
    """A span of text and the tag to render it with.

    Attributes:
        text: The text of the span (tabs already expanded).
        kind: Tag name (e.g. "keyword"), or None for plain text.

    """

    text: str
    kind: str | None = None

    @property
    def is_plain(self) -> bool:
        return self.kind is None


def expand_tabs(text: str, tab_width: int = 4) -> str:
    """Replace every tab with ``tab_width`` spaces."""
    if "\t" not in text:
        return text
    return text.replace("\t", " " * tab_width)


def project(
    text: str,
    spans: Iterable[tuple[int, int, str]],
    *,
    tab_width: int = 4,
) -> list[Run]:
    """Build the run sequence of one line.

    Args:
        text: Raw line text.
        spans: ``(start, end, name)`` display-column ranges to tag. Ranges
            are clipped to the line; empty ranges are ignored; when two
            spans start on the same column the first one given wins.
        tab_width: Display columns a tab occupies.

    Returns:
        Runs covering the whole expanded line, left to right. An empty
        line yields an empty list.

    Example:
        >>> project("*/ fn", [(0, 2, "comment"), (3, 5, "keyword")])
        [Run(text='*/', kind='comment'), Run(text=' ', kind=None), Run(text='fn', kind='keyword')]

    """
    line = expand_tabs(text, tab_width)
    length = len(line)
    starts: dict[int, tuple[int, str]] = {}
    for start, end, name in spans:
        start = max(0, min(start, length))
        end = min(end, length)
        if end > start:
            starts.setdefault(start, (end, name))

    runs: list[Run] = []
    plain_start = 0
    x = 0
    while x < length:
        hit = starts.get(x)
        if hit is None:
            x += 1
            continue
        if plain_start < x:
            runs.append(Run(line[plain_start:x]))
        end, name = hit
        runs.append(Run(line[x:end], name))
        x = plain_start = end
    if plain_start < length:
        runs.append(Run(line[plain_start:]))
    return runs
