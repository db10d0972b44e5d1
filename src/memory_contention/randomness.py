from __future__ import annotations

import random
from typing import Optional, Protocol


class RandomSource(Protocol):
    """
    Randomness consumed by a trial.

    The core never touches the global `random` module; callers pass a
    source in so tests can fix or script the draws.
    """

    def randrange(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        ...

    def gauss(self) -> float:
        """Standard normal draw (mean 0, stddev 1)."""
        ...


class PythonRandomSource:
    """
    RandomSource backed by a private random.Random instance.

    With seed=None the generator is seeded from the OS, so results differ
    from run to run.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def randrange(self, n: int) -> int:
        if n <= 0:
            raise ValueError("n must be > 0")
        return self._rng.randrange(n)

    def gauss(self) -> float:
        return self._rng.gauss(0.0, 1.0)

    def spawn(self) -> "PythonRandomSource":
        """
        Derive an independent source for the next trial.

        Unseeded sources spawn unseeded children. Seeded sources spawn
        children seeded from their own stream, so a whole sweep is
        reproducible from one seed.
        """
        if self.seed is None:
            return PythonRandomSource()
        return PythonRandomSource(self._rng.getrandbits(32))
