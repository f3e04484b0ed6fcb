"""Pincel SweepAccumulator — opt-in profiling for the highlighting engine.

This module provides accumulated metrics while a document is maintained:
- Full tokenizer sweeps vs. edits that skipped the sweep
- Lines atomized
- Atoms visited by sweeps

Zero overhead when disabled (get_sweep_accumulator() returns None).

Example:
    from pincel import Highlighter
    from pincel.profiling import profiled_sweeps

    with profiled_sweeps() as metrics:
        h.run(lines)
        h.edit(3, "let x = 1;")

    print(metrics.summary())
    # {"total_ms": 0.4, "full_sweeps": 1, "incremental_skips": 1, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class SweepAccumulator:
    """Accumulated metrics for engine maintenance.

    Attributes:
        start_time: Profiling start timestamp.
        full_sweeps: Number of whole-document tokenizer sweeps.
        incremental_skips: Edits whose atom shape was unchanged (no sweep).
        lines_atomized: Number of lines passed through the atomizer.
        atoms_swept: Total atoms visited across all sweeps.

    """

    start_time: float = field(default_factory=perf_counter)
    full_sweeps: int = 0
    incremental_skips: int = 0
    lines_atomized: int = 0
    atoms_swept: int = 0

    def record_sweep(self, atom_count: int) -> None:
        """Record one full sweep over ``atom_count`` atoms."""
        self.full_sweeps += 1
        self.atoms_swept += atom_count

    def record_skip(self) -> None:
        """Record an edit that only swapped a line's atoms."""
        self.incremental_skips += 1

    def record_atomize(self, lines: int = 1) -> None:
        self.lines_atomized += lines

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of engine metrics.

        Returns:
            Dict with total_ms, full_sweeps, incremental_skips,
            lines_atomized and atoms_swept.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "full_sweeps": self.full_sweeps,
            "incremental_skips": self.incremental_skips,
            "lines_atomized": self.lines_atomized,
            "atoms_swept": self.atoms_swept,
        }


_accumulator: ContextVar[SweepAccumulator | None] = ContextVar(
    "sweep_accumulator",
    default=None,
)


def get_sweep_accumulator() -> SweepAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_sweeps() -> Iterator[SweepAccumulator]:
    """Context manager for profiled engine maintenance.

    Creates a SweepAccumulator and makes it available via
    get_sweep_accumulator() for the duration of the with block.

    Yields:
        SweepAccumulator that will be populated by engine operations.

    """
    acc = SweepAccumulator()
    token: Token[SweepAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
