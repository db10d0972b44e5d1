from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


# A processor with no pending request.
IDLE: Optional[int] = None


class Distribution(str, Enum):
    """
    How idle processors pick the module they request next.
    """

    UNIFORM = "uniform"
    GAUSSIAN = "gaussian"

    @property
    def label(self) -> str:
        # Header text used by the CSV results table.
        return f"{self.value.capitalize()} Distribution"

    @classmethod
    def parse(cls, name: str) -> "Distribution":
        key = name.strip().lower()
        for d in cls:
            if d.value == key:
                return d
        raise ValueError(
            f"unknown distribution '{name}'. Available: {sorted(d.value for d in cls)}"
        )


@dataclass
class Processor:
    # Module index this processor is waiting on, or IDLE.
    requested_module: Optional[int] = IDLE
    # Rounds spent waiting since the start of the trial.
    cumulative_wait: int = 0
    # Lower wins. Decremented while waiting, reset to p on a grant.
    priority: int = 0
    # Gaussian mode only: fixed per-trial address mean.
    mean: Optional[int] = None

    @property
    def is_idle(self) -> bool:
        return self.requested_module is IDLE


@dataclass(frozen=True)
class TrialConfig:
    """
    Parameters of one trial: p processors contending for m modules.
    """
    processor_count: int
    module_count: int
    distribution: Distribution = Distribution.UNIFORM
    # Opt-in: keep Gaussian addresses inside [0, m).
    clamp: bool = False

    def __post_init__(self) -> None:
        if self.processor_count <= 0:
            raise ValueError("processor_count must be > 0")
        if self.module_count <= 0:
            raise ValueError("module_count must be > 0")


@dataclass
class RoundState:
    """
    Mutable state of a single trial, owned by the round driver.

    rounds is the number of completed rounds (c). previous_mean and
    stable_streak are the convergence bookkeeping.
    """
    processors: List[Processor]
    rounds: int = 0
    previous_mean: float = 0.0
    stable_streak: int = 0


@dataclass(frozen=True)
class TrialResult:
    config: TrialConfig
    # Mean wait reported when the trial converged.
    mean_wait: float
    # Completed rounds at the stopping check.
    rounds: int
    # Sum of cumulative_wait over all processors at the stop.
    total_wait: int = 0
