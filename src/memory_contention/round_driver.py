from __future__ import annotations

import logging
from typing import List, Optional

from .arbiter import select_winner
from .convergence import ConvergenceDetector
from .models import IDLE, Distribution, Processor, RoundState, TrialConfig, TrialResult
from .randomness import PythonRandomSource, RandomSource
from .request_generator import draw_mean, generate_request

logger = logging.getLogger(__name__)


class TrialDidNotConvergeError(RuntimeError):
    """Raised when a trial hits its max_rounds cap before converging."""


def init_round_state(config: TrialConfig, rng: RandomSource) -> RoundState:
    """
    Fresh state for one (p, m) trial. Gaussian means are drawn here, once.
    """
    processors: List[Processor] = []
    for _ in range(config.processor_count):
        proc = Processor(requested_module=IDLE, cumulative_wait=0, priority=0)
        if config.distribution is Distribution.GAUSSIAN:
            proc.mean = draw_mean(config.module_count, rng)
        processors.append(proc)
    return RoundState(processors=processors)


def run_round(state: RoundState, config: TrialConfig, rng: RandomSource) -> List[int]:
    """
    Advance the trial by one round and return the granted processor indices
    (in module order).

    1) Idle processors issue a request; waiting ones lose one priority
       point and accumulate one cycle of wait.
    2) Every module grants at most one requester, which goes idle with
       its priority reset to p.
    3) The round counter advances.
    """
    p = config.processor_count
    m = config.module_count

    # 1) request / wait
    for proc in state.processors:
        if proc.is_idle:
            proc.requested_module = generate_request(
                proc, m, p, config.distribution, rng, clamp=config.clamp
            )
        else:
            proc.priority -= 1
            proc.cumulative_wait += 1

    # 2) arbitrate. Modules nobody requested have no winner, so only the
    # requested ones in [0, m) are scanned. Addresses >= m never win.
    requested = sorted(
        {proc.requested_module for proc in state.processors
         if proc.requested_module is not IDLE and proc.requested_module < m}
    )
    granted: List[int] = []
    for module in requested:
        winner = select_winner(module, state.processors)
        if winner is not None:
            state.processors[winner].requested_module = IDLE
            state.processors[winner].priority = p
            granted.append(winner)

    # 3) advance
    state.rounds += 1
    return granted


def run_trial(
    config: TrialConfig,
    rng: Optional[RandomSource] = None,
    detector: Optional[ConvergenceDetector] = None,
    max_rounds: Optional[int] = None,
) -> TrialResult:
    """
    Run rounds until the convergence detector says stop, and report the
    mean wait computed at that final check.

    Convergence is checked before each round, so the first check sees
    c == 0. With max_rounds=None convergence is the only exit.
    """
    if rng is None:
        rng = PythonRandomSource()
    if detector is None:
        detector = ConvergenceDetector()

    state = init_round_state(config, rng)

    while True:
        mean, stop = detector.check_and_advance(state)
        if stop:
            break
        if max_rounds is not None and state.rounds >= max_rounds:
            raise TrialDidNotConvergeError(
                f"p={config.processor_count} m={config.module_count} "
                f"did not converge within {max_rounds} rounds"
            )
        run_round(state, config, rng)

    total_wait = 0
    for proc in state.processors:
        total_wait += proc.cumulative_wait

    logger.debug(
        f"trial p={config.processor_count} m={config.module_count} "
        f"{config.distribution.value}: {state.rounds} rounds, mean_wait={mean:.6f}"
    )
    return TrialResult(config=config, mean_wait=mean, rounds=state.rounds, total_wait=total_wait)
