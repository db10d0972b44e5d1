# simulations/plot.py

from __future__ import annotations

from typing import List, Optional, Sequence

import matplotlib.pyplot as plt

from memory_contention.models import Distribution

from .common import SweepRow, value_range


def plot_rows(rows: Sequence[SweepRow], title: Optional[str] = None):
    """
    One subplot per distribution, one line per processor count:
    mean wait against module count (log x-axis). All subplots share the
    same y-range so distributions compare directly.

    Returns the matplotlib Figure.
    """
    if not rows:
        raise ValueError("rows must be non-empty")

    distributions: List[Distribution] = []
    for r in rows:
        if r.distribution not in distributions:
            distributions.append(r.distribution)

    ymin, ymax = value_range(rows)
    pad = (ymax - ymin) * 0.05 or 0.05

    fig = plt.figure(figsize=(6 * len(distributions), 4))

    for i, d in enumerate(distributions):
        ax = fig.add_subplot(1, len(distributions), i + 1)
        for r in rows:
            if r.distribution is not d:
                continue
            ax.plot(list(r.module_counts()), r.values, label=f"p={r.processor_count}")
        ax.set_title(d.label)
        ax.set_xscale("log", base=2)
        ax.set_xlabel("Memory modules")
        if i == 0:
            ax.set_ylabel("Mean wait (cycles)")
        ax.set_ylim(ymin - pad, ymax + pad)
        ax.legend()

    if title:
        fig.suptitle(title)
    fig.tight_layout(rect=[0, 0.02, 1, 0.92] if title else None)
    return fig
