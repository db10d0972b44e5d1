from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .models import Processor, RoundState


DEFAULT_ZERO_STABLE_ROUNDS = 20
DEFAULT_STABLE_ROUNDS = 4
DEFAULT_GROWTH_THRESHOLD = 1.02


def mean_wait(processors: Sequence[Processor], rounds: int) -> float:
    """
    Average over processors of cumulative_wait / rounds.

    Defined as 0.0 before the first round completes.
    """
    if rounds == 0 or not processors:
        return 0.0

    total = 0.0
    for proc in processors:
        total += proc.cumulative_wait / rounds
    return total / len(processors)


@dataclass(frozen=True)
class ConvergenceDecision:
    mean_wait: float
    should_stop: bool
    # Bookkeeping to carry into the next check.
    previous_mean: float
    stable_streak: int


class ConvergenceDetector:
    """
    Decides when the running mean wait of a trial has settled.

    Each check compares the new mean n against a retained anchor prev:

      - n == 0 and prev == 0: extend the streak; stop after
        zero_stable_rounds such checks.
      - both nonzero and prev / n < growth_threshold: stop if the streak
        has already reached stable_rounds, otherwise extend it. The anchor
        is left alone while the streak builds, so several small drifts in a
        row are all measured against the same value.
      - anything else: reset the streak and re-anchor prev = n.
    """

    def __init__(
        self,
        zero_stable_rounds: int = DEFAULT_ZERO_STABLE_ROUNDS,
        stable_rounds: int = DEFAULT_STABLE_ROUNDS,
        growth_threshold: float = DEFAULT_GROWTH_THRESHOLD,
    ):
        if zero_stable_rounds < 1:
            raise ValueError("zero_stable_rounds must be >= 1")
        if stable_rounds < 0:
            raise ValueError("stable_rounds must be >= 0")
        if growth_threshold <= 0:
            raise ValueError("growth_threshold must be > 0")

        self.zero_stable_rounds = zero_stable_rounds
        self.stable_rounds = stable_rounds
        self.growth_threshold = float(growth_threshold)

    # ------------------------------------------------------------
    # Core API
    # ------------------------------------------------------------

    def check(self, state: RoundState) -> ConvergenceDecision:
        """
        Evaluate the stopping rule for the current state without mutating it.
        """
        n = mean_wait(state.processors, state.rounds)
        prev = state.previous_mean
        streak = state.stable_streak

        if n == 0 and prev == 0:
            streak += 1
            if streak >= self.zero_stable_rounds:
                return ConvergenceDecision(n, True, n, streak)
            return ConvergenceDecision(n, False, prev, streak)

        if n != 0 and prev != 0:
            if prev / n < self.growth_threshold:
                if streak >= self.stable_rounds:
                    return ConvergenceDecision(n, True, n, streak)
                return ConvergenceDecision(n, False, prev, streak + 1)
            return ConvergenceDecision(n, False, n, 0)

        return ConvergenceDecision(n, False, n, 0)

    def check_and_advance(self, state: RoundState) -> Tuple[float, bool]:
        """
        Evaluate the stopping rule and store the new bookkeeping on `state`.

        Returns (mean_wait, should_stop).
        """
        decision = self.check(state)
        state.previous_mean = decision.previous_mean
        state.stable_streak = decision.stable_streak
        return decision.mean_wait, decision.should_stop
