from __future__ import annotations

import math

from .models import Distribution, Processor
from .randomness import RandomSource


def draw_mean(module_count: int, rng: RandomSource) -> int:
    """
    Per-processor Gaussian mean, drawn once at the start of a trial.
    """
    return rng.randrange(module_count)


def gaussian_stddev(module_count: int, processor_count: int) -> float:
    return math.sqrt(module_count / (processor_count ** 2))


def generate_request(
    processor: Processor,
    module_count: int,
    processor_count: int,
    distribution: Distribution,
    rng: RandomSource,
    clamp: bool = False,
) -> int:
    """
    Pick the module an idle processor requests next.

    Uniform: any module in [0, m) with equal probability.

    Gaussian: N(processor.mean, sqrt(m / p^2)) rounded half-up to an
    integer. Negative results are folded to their absolute value instead
    of being resampled, which slightly favours low addresses. The fold
    does not bound the result above, so an address >= m can come back;
    no module ever grants it and the processor stays blocked for the rest
    of the trial. Pass clamp=True to cap the address at m - 1 instead.
    """
    if not processor.is_idle:
        raise ValueError("processor already holds a pending request")
    if module_count <= 0:
        raise ValueError("module_count must be > 0")

    if distribution is Distribution.UNIFORM:
        return rng.randrange(module_count)

    if processor.mean is None:
        raise ValueError("gaussian requests need a per-trial processor mean")

    x = rng.gauss() * gaussian_stddev(module_count, processor_count) + processor.mean
    address = abs(math.floor(x + 0.5))
    if clamp and address >= module_count:
        address = module_count - 1
    return address
