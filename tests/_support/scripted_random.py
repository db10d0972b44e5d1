from __future__ import annotations

from typing import Iterable, List


class ScriptedRandomSource:
    """
    RandomSource that replays fixed draws, for deterministic tests.

    randrange(n) returns the next scripted int (which must lie in [0, n));
    gauss() returns the next scripted float. Running out is an error, so a
    test notices when the code draws more than expected.
    """

    def __init__(self, ints: Iterable[int] = (), gaussians: Iterable[float] = ()) -> None:
        self._ints: List[int] = list(ints)
        self._gaussians: List[float] = list(gaussians)
        self.int_calls: List[int] = []

    def randrange(self, n: int) -> int:
        if not self._ints:
            raise AssertionError("scripted ints exhausted")
        v = self._ints.pop(0)
        if not 0 <= v < n:
            raise AssertionError(f"scripted int {v} not in [0, {n})")
        self.int_calls.append(n)
        return v

    def gauss(self) -> float:
        if not self._gaussians:
            raise AssertionError("scripted gaussians exhausted")
        return self._gaussians.pop(0)


class ConstantRandomSource:
    """
    Always returns the same draws; never runs out.
    """

    def __init__(self, value: int = 0, gaussian: float = 0.0) -> None:
        self.value = value
        self.gaussian = gaussian

    def randrange(self, n: int) -> int:
        return min(self.value, n - 1)

    def gauss(self) -> float:
        return self.gaussian
