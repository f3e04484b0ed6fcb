"""Thread safety tests for Pincel.

A PatternRegistry is immutable and may be shared; each Highlighter has a
single writer. These tests drive one engine per thread over a shared
registry and check every thread ends with the same result a single-threaded
run produces.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed

from pincel import Highlighter, Run
from tests.conftest import build_c_like


def _document(seed: int) -> list[str]:
    return [
        f"fn f{seed}() {{",
        "    /* block",
        f"       comment {seed} */",
        f'    let s = "v{{{seed}}}";',
        "    return 1;",
        "}",
    ]


def _work(registry, seed: int) -> list[list[Run]]:
    doc = _document(seed)
    h = Highlighter(registry)
    h.run(doc)
    for i in range(20):
        doc[4] = f"    return {i};"
        h.edit(4, doc[4])
        doc.insert(1, "// note")
        h.insert_line(1, doc[1])
        del doc[1]
        h.remove_line(1)
    return [h.line(y, text) for y, text in enumerate(doc)]


def _expected(registry, seed: int) -> list[list[Run]]:
    doc = _document(seed)
    doc[4] = "    return 19;"
    h = Highlighter(registry)
    h.run(doc)
    return [h.line(y, text) for y, text in enumerate(doc)]


class TestSharedRegistry:
    def test_engines_on_threads_agree_with_serial_run(self) -> None:
        registry = build_c_like()
        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = {pool.submit(_work, registry, seed): seed for seed in range(32)}
            results = {futures[f]: f.result() for f in as_completed(futures)}

        for seed, lines in results.items():
            assert lines == _expected(registry, seed)

    def test_registry_unchanged_by_concurrent_engines(self) -> None:
        registry = build_c_like()
        before = registry.patterns

        def extend(i: int) -> int:
            h = Highlighter(registry)
            h.keyword(f"extra{i}", str(i))
            return len(h.registry)

        with ThreadPoolExecutor(max_workers=4) as pool:
            sizes = list(pool.map(extend, range(16)))

        assert sizes == [len(before) + 1] * 16
        assert registry.patterns is before
