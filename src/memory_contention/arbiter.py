from __future__ import annotations

from typing import Optional, Sequence

from .models import Processor


def select_winner(module: int, processors: Sequence[Processor]) -> Optional[int]:
    """
    Return the index of the processor granted `module` this round, or None.

    Candidates are the processors whose pending request is `module`. The
    lowest priority value wins; on a tie the lowest index wins, because the
    running best is only replaced on a strict improvement.

    Pure: the caller applies the grant.
    """
    best: Optional[int] = None
    best_priority = 0

    for i, proc in enumerate(processors):
        if proc.requested_module != module:
            continue
        if best is None or proc.priority < best_priority:
            best = i
            best_priority = proc.priority

    return best
