"""
Memory-module contention simulator.

Estimates the steady-state mean number of cycles a processor waits for
exclusive access to a shared memory module, for p processors and m
modules, under a round-based priority arbitration.

Core modules:
- models: dataclasses for processors, trial config and round state
- randomness: injectable random source
- request_generator: uniform / gaussian address requests
- arbiter: per-module winner selection
- convergence: running mean wait and stopping rule
- round_driver: rounds and whole trials
"""
from .arbiter import select_winner
from .convergence import ConvergenceDecision, ConvergenceDetector, mean_wait
from .models import IDLE, Distribution, Processor, RoundState, TrialConfig, TrialResult
from .randomness import PythonRandomSource, RandomSource
from .request_generator import draw_mean, generate_request
from .round_driver import TrialDidNotConvergeError, init_round_state, run_round, run_trial

__all__ = [
    "IDLE",
    "ConvergenceDecision",
    "ConvergenceDetector",
    "Distribution",
    "Processor",
    "PythonRandomSource",
    "RandomSource",
    "RoundState",
    "TrialConfig",
    "TrialDidNotConvergeError",
    "TrialResult",
    "draw_mean",
    "generate_request",
    "init_round_state",
    "mean_wait",
    "run_round",
    "run_trial",
    "select_winner",
]
