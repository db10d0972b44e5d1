# simulations/sinks.py

from __future__ import annotations

from abc import ABC, abstractmethod
import csv
import logging
from pathlib import Path
from typing import IO, List, Optional, Union

from memory_contention.models import Distribution

from .common import SweepRow

logger = logging.getLogger(__name__)


class ResultsSink(ABC):
    """
    Consumer of sweep results.

    Call order per block: begin_block(distribution), then for every
    processor count begin_row(p), write_value(...) once per module count
    in ascending order, end_row(). Sinks must not raise on I/O failure;
    the sweep keeps running regardless of sink health.
    """

    @abstractmethod
    def begin_block(self, distribution: Distribution) -> None: ...

    @abstractmethod
    def begin_row(self, processor_count: int) -> None: ...

    @abstractmethod
    def write_value(self, mean_wait: float) -> None: ...

    @abstractmethod
    def end_row(self) -> None: ...

    def close(self) -> None:
        pass

    def __enter__(self) -> "ResultsSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class InMemoryResultsSink(ResultsSink):
    """
    Keeps every completed row. Used by tests and for plotting after a run.
    """

    def __init__(self, min_modules: int = 1) -> None:
        self.min_modules = min_modules
        self.rows: List[SweepRow] = []
        self._distribution: Optional[Distribution] = None
        self._current: Optional[SweepRow] = None

    def begin_block(self, distribution: Distribution) -> None:
        self._distribution = distribution

    def begin_row(self, processor_count: int) -> None:
        if self._distribution is None:
            raise RuntimeError("begin_block() must be called before begin_row().")
        self._current = SweepRow(
            distribution=self._distribution,
            processor_count=processor_count,
            min_modules=self.min_modules,
        )

    def write_value(self, mean_wait: float) -> None:
        if self._current is None:
            raise RuntimeError("begin_row() must be called before write_value().")
        self._current.values.append(float(mean_wait))

    def end_row(self) -> None:
        if self._current is not None:
            self.rows.append(self._current)
            self._current = None


class CsvResultsSink(ResultsSink):
    """
    Writes the results table as comma-separated text:

        Uniform Distribution
        2,<mean m=1>,<mean m=2>,...
        4,...
        Gaussian Distribution
        ...

    Write failures are logged and dropped.
    """

    def __init__(self, path: Union[str, Path], append: bool = True) -> None:
        self.path = Path(path)
        self.append = append
        self.failures = 0
        self._row: Optional[List[object]] = None
        self._fh: Optional[IO[str]] = None
        self._writer = None

        try:
            self._fh = open(self.path, "a" if append else "w", newline="")
            self._writer = csv.writer(self._fh, lineterminator="\n")
        except OSError as e:
            self._report(e)

    def begin_block(self, distribution: Distribution) -> None:
        self._write([distribution.label])

    def begin_row(self, processor_count: int) -> None:
        self._row = [processor_count]

    def write_value(self, mean_wait: float) -> None:
        if self._row is None:
            raise RuntimeError("begin_row() must be called before write_value().")
        self._row.append(repr(float(mean_wait)))

    def end_row(self) -> None:
        if self._row is None:
            return
        row, self._row = self._row, None
        self._write(row)

    def close(self) -> None:
        if self._fh is None:
            return
        fh, self._fh = self._fh, None
        self._writer = None
        try:
            fh.close()
        except OSError as e:
            self._report(e)

    def _write(self, row: List[object]) -> None:
        if self._writer is None:
            self._report(OSError(f"results file {self.path} is not open"))
            return
        try:
            self._writer.writerow(row)
            self._fh.flush()
        except OSError as e:
            self._report(e)

    def _report(self, e: OSError) -> None:
        self.failures += 1
        logger.error(f"Error: {e}")

