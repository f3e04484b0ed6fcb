"""Benchmark incremental edits vs full re-highlighting.

Compares Highlighter.edit for a same-shape keystroke, an edit that changes
the line's shape (forcing a sweep), and a full run of a large document.

Run with:
    pytest benchmarks/benchmark_incremental.py -v --benchmark-only
"""

import pytest

from pincel import Highlighter, window


@pytest.mark.benchmark(group="incremental")
def test_benchmark_same_shape_edit(benchmark, c_like, large_document):
    """Typing inside an identifier: no sweep."""
    h = Highlighter(c_like)
    h.run(large_document)
    y = len(large_document) // 2 + 3
    texts = [large_document[y] + "x", large_document[y]]
    state = {"i": 0}

    def edit():
        state["i"] ^= 1
        h.edit(y, texts[state["i"]])

    benchmark(edit)


@pytest.mark.benchmark(group="incremental")
def test_benchmark_shape_changing_edit(benchmark, c_like, large_document):
    """Opening and closing a block comment: one full sweep per edit."""
    h = Highlighter(c_like)
    h.run(large_document)
    y = len(large_document) // 2 + 3
    texts = [large_document[y] + " /*", large_document[y]]
    state = {"i": 0}

    def edit():
        state["i"] ^= 1
        h.edit(y, texts[state["i"]])

    benchmark(edit)


@pytest.mark.benchmark(group="incremental")
def test_benchmark_full_run(benchmark, c_like, large_document):
    """Highlight the whole document from scratch (baseline)."""
    h = Highlighter(c_like)
    benchmark(h.run, large_document)


@pytest.mark.benchmark(group="render")
def test_benchmark_render_viewport(benchmark, c_like, large_document):
    """Project and window one screenful of lines."""
    h = Highlighter(c_like)
    h.run(large_document)

    def render():
        for y in range(1000, 1050):
            window(h.line(y, large_document[y]), 4, 80)

    benchmark(render)
