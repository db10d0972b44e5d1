import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from memory_contention.models import Distribution
from simulations.common import SweepRow
from simulations.plot import plot_rows


def test_one_subplot_per_distribution():
    rows = [
        SweepRow(Distribution.UNIFORM, 2, values=[0.5, 0.25, 0.0]),
        SweepRow(Distribution.UNIFORM, 4, values=[1.5, 0.75, 0.3]),
        SweepRow(Distribution.GAUSSIAN, 2, values=[0.5, 0.4, 0.2]),
    ]
    fig = plot_rows(rows, title="test")
    try:
        axes = fig.get_axes()
        assert [ax.get_title() for ax in axes] == ["Uniform Distribution", "Gaussian Distribution"]
        assert len(axes[0].get_lines()) == 2
        assert len(axes[1].get_lines()) == 1
        assert axes[0].get_ylim() == axes[1].get_ylim()
    finally:
        plt.close(fig)


def test_empty_rows_rejected():
    with pytest.raises(ValueError):
        plot_rows([])
