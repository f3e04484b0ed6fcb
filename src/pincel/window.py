"""Viewport windowing over run sequences.

Cuts a horizontally scrolled, fixed-width slice out of a line's runs for
terminal rendering. Widths are display widths: East Asian wide and
fullwidth characters take two columns, combining marks none.

A wide character cut by either edge of the window is replaced by spaces
(keeping its tag) rather than dropped, so every column to its right
stays where it belongs.

Usage:
    >>> runs = [Run("hi"), Run("hello", "foo")]
    >>> window(runs, 1, 4)
    [Run(text='i', kind=None), Run(text='hel', kind='foo')]
    >>> trim(runs, 3)
    [Run(text='ello', kind='foo')]

Thread Safety:
    Pure functions over immutable runs. Safe to call from any thread.

"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable, Iterator

from pincel.projection import Run, expand_tabs

_WIDE = frozenset({"W", "F"})


def char_width(ch: str) -> int:
    """Display width of a single character."""
    if ch < "\u0300":
        return 1
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in _WIDE else 1


def text_width(text: str) -> int:
    """Display width of a string."""
    if text.isascii():
        return len(text)
    return sum(char_width(ch) for ch in text)


def run_width(runs: Iterable[Run]) -> int:
    """Total display width of a run sequence."""
    return sum(text_width(run.text) for run in runs)


def window(runs: Iterable[Run], start: int, length: int, *, tab_width: int = 4) -> list[Run]:
    """Clip runs to ``length`` display columns beginning at column ``start``.

    Args:
        runs: Run sequence of one line.
        start: First visible display column (negative values count as 0).
        length: Width of the viewport.
        tab_width: Width used for any tabs left in the runs.

    Returns:
        Runs whose total display width is exactly ``length``; columns past
        the end of the line are filled with plain spaces. Adjacent runs
        with the same tag are merged.

    """
    if length <= 0:
        return []
    start = max(start, 0)
    result = merge_runs(_slice(runs, start, start + length, tab_width))
    pad = length - run_width(result)
    if pad > 0:
        result = merge_runs([*result, Run(" " * pad)])
    return result


def trim(runs: Iterable[Run], start: int, *, tab_width: int = 4) -> list[Run]:
    """Drop the first ``start`` display columns of a run sequence.

    The front-trim-only counterpart of ``window``: nothing is cut from the
    right and no padding is added.

    """
    return merge_runs(_slice(runs, max(start, 0), None, tab_width))


def merge_runs(runs: Iterable[Run]) -> list[Run]:
    """Coalesce adjacent runs with the same tag and drop empty runs."""
    merged: list[Run] = []
    for run in runs:
        if not run.text:
            continue
        if merged and merged[-1].kind == run.kind:
            merged[-1] = Run(merged[-1].text + run.text, run.kind)
        else:
            merged.append(run)
    return merged


def _slice(runs: Iterable[Run], start: int, end: int | None, tab_width: int) -> Iterator[Run]:
    col = 0
    # Combining marks follow their base character in or out of the window
    intact = False
    for text, kind in runs:
        pieces: list[str] = []
        for ch in expand_tabs(text, tab_width):
            width = char_width(ch)
            ch_start = col
            col += width
            if width == 0:
                if intact:
                    pieces.append(ch)
                continue
            if col <= start:
                intact = False
                continue
            if end is not None and ch_start >= end:
                if pieces:
                    yield Run("".join(pieces), kind)
                return
            lo = max(ch_start, start)
            hi = col if end is None else min(col, end)
            intact = lo == ch_start and hi == col
            pieces.append(ch if intact else " " * (hi - lo))
        if pieces:
            yield Run("".join(pieces), kind)
