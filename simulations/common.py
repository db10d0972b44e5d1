# simulations/common.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple
import time

from memory_contention.models import Distribution


DEFAULT_PROCESSOR_COUNTS: Tuple[int, ...] = (2, 4, 8, 16, 32, 64)
DEFAULT_MIN_MODULES = 1
DEFAULT_MAX_MODULES = 2048
DEFAULT_DISTRIBUTIONS: Tuple[Distribution, ...] = (
    Distribution.UNIFORM,
    Distribution.GAUSSIAN,
)


@dataclass(frozen=True)
class SweepSpec:
    """
    Outer sweep parameters: every distribution, every processor count,
    every module count in [min_modules, max_modules].
    """
    processor_counts: Tuple[int, ...] = DEFAULT_PROCESSOR_COUNTS
    min_modules: int = DEFAULT_MIN_MODULES
    max_modules: int = DEFAULT_MAX_MODULES
    distributions: Tuple[Distribution, ...] = DEFAULT_DISTRIBUTIONS
    clamp: bool = False

    def __post_init__(self) -> None:
        if not self.processor_counts:
            raise ValueError("processor_counts must be non-empty")
        for p in self.processor_counts:
            if p <= 0:
                raise ValueError("processor counts must be > 0")
        if self.min_modules <= 0:
            raise ValueError("min_modules must be > 0")
        if self.max_modules < self.min_modules:
            raise ValueError("max_modules must be >= min_modules")
        if not self.distributions:
            raise ValueError("distributions must be non-empty")

    def module_counts(self) -> range:
        return range(self.min_modules, self.max_modules + 1)


@dataclass
class SweepRow:
    """
    One row of the results table: the mean waits for a fixed distribution
    and processor count, in ascending module-count order.
    """
    distribution: Distribution
    processor_count: int
    min_modules: int = DEFAULT_MIN_MODULES
    values: List[float] = field(default_factory=list)
    runtime_s: Optional[float] = None

    def module_counts(self) -> range:
        return range(self.min_modules, self.min_modules + len(self.values))


class Timer:
    """
    Tiny timing helper for simulations.
    Usage:
        with Timer() as t:
            ...
        elapsed = t.elapsed_s
    """
    def __init__(self) -> None:
        self._start: Optional[float] = None
        self.elapsed_s: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._start is not None:
            self.elapsed_s = time.perf_counter() - self._start


def value_range(rows: Sequence[SweepRow]) -> Tuple[float, float]:
    """
    Shared (ymin, ymax) across rows, so several charts can use one y-axis.
    """
    values = [v for r in rows for v in r.values]
    if not values:
        raise ValueError("rows must contain at least one value")
    return min(values), max(values)


def format_row_line(r: SweepRow) -> str:
    """
    Human-friendly one-liner for printing after a row completes.
    """
    if not r.values:
        return f"{r.distribution.value} p={r.processor_count}: no values"
    mn = min(r.values)
    mx = max(r.values)
    mean = sum(r.values) / len(r.values)
    return (
        f"{r.distribution.value} p={r.processor_count}: "
        f"m={r.min_modules}..{r.min_modules + len(r.values) - 1}, "
        f"min={mn:.4f}, max={mx:.4f}, mean={mean:.4f}"
        + (f", runtime={r.runtime_s:.3f}s" if r.runtime_s is not None else "")
    )
