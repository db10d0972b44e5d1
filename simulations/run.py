# simulations/run.py

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from memory_contention.convergence import ConvergenceDetector
from memory_contention.models import Distribution, TrialConfig
from memory_contention.randomness import PythonRandomSource, RandomSource
from memory_contention.round_driver import run_trial

from .common import SweepRow, SweepSpec, Timer
from .sinks import ResultsSink

logger = logging.getLogger(__name__)


RngFactory = Callable[[], RandomSource]


def _rng_factory(seed: Optional[int], rng: Optional[RandomSource]) -> RngFactory:
    """
    Every trial gets a fresh source unless one shared source was passed in.
    """
    if rng is not None:
        return lambda: rng
    base = PythonRandomSource(seed)
    return base.spawn


def run_row(
    distribution: Distribution,
    processor_count: int,
    module_counts: Iterable[int],
    new_rng: RngFactory,
    detector: Optional[ConvergenceDetector] = None,
    sink: Optional[ResultsSink] = None,
    clamp: bool = False,
) -> SweepRow:
    """
    Run one trial per module count (ascending) for a fixed processor count.

    Each trial starts from fresh state; the final mean of each is appended
    to the returned row and forwarded to the sink as it completes.
    """
    modules = list(module_counts)
    row = SweepRow(
        distribution=distribution,
        processor_count=processor_count,
        min_modules=modules[0] if modules else 1,
    )

    if sink is not None:
        sink.begin_row(processor_count)

    with Timer() as t:
        for m in modules:
            config = TrialConfig(
                processor_count=processor_count,
                module_count=m,
                distribution=distribution,
                clamp=clamp,
            )
            result = run_trial(config, rng=new_rng(), detector=detector)
            row.values.append(result.mean_wait)
            if sink is not None:
                sink.write_value(result.mean_wait)

    if sink is not None:
        sink.end_row()

    row.runtime_s = t.elapsed_s
    logger.info(
        f"{distribution.value} p={processor_count}: {len(row.values)} module counts "
        f"in {row.runtime_s:.3f}s"
    )
    return row


def run_sweep(
    spec: SweepSpec,
    sink: Optional[ResultsSink] = None,
    seed: Optional[int] = None,
    rng: Optional[RandomSource] = None,
    detector: Optional[ConvergenceDetector] = None,
    on_row: Optional[Callable[[SweepRow], None]] = None,
) -> List[SweepRow]:
    """
    Run the full sweep and return every row.

    Parameters
    ----------
    spec:
        Distributions, processor counts and module range to cover.
    sink:
        Optional results sink; gets a block header per distribution and a
        row per processor count.
    seed:
        Base seed. None gives a different run every time.
    rng:
        A single source shared by all trials (overrides seed).
    detector:
        Convergence detector; defaults to the standard thresholds.
    on_row:
        Callback invoked with each finished row.

    Returns
    -------
    List[SweepRow]
    """
    new_rng = _rng_factory(seed, rng)
    rows: List[SweepRow] = []

    for distribution in spec.distributions:
        if sink is not None:
            sink.begin_block(distribution)
        for p in spec.processor_counts:
            row = run_row(
                distribution,
                p,
                spec.module_counts(),
                new_rng,
                detector=detector,
                sink=sink,
                clamp=spec.clamp,
            )
            rows.append(row)
            if on_row is not None:
                on_row(row)

    return rows
