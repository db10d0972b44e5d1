import logging

import pytest

from memory_contention.models import Distribution
from simulations.common import SweepSpec
from simulations.run import run_sweep
from simulations.sinks import CsvResultsSink, InMemoryResultsSink


def write_block(sink, distribution, p, values):
    sink.begin_block(distribution)
    sink.begin_row(p)
    for v in values:
        sink.write_value(v)
    sink.end_row()


def test_csv_layout(tmp_path):
    path = tmp_path / "output.csv"
    with CsvResultsSink(path, append=False) as sink:
        write_block(sink, Distribution.UNIFORM, 2, [0.0, 0.5])
        write_block(sink, Distribution.GAUSSIAN, 4, [1.25])

    assert path.read_text() == (
        "Uniform Distribution\n"
        "2,0.0,0.5\n"
        "Gaussian Distribution\n"
        "4,1.25\n"
    )


def test_csv_appends_by_default(tmp_path):
    path = tmp_path / "output.csv"
    path.write_text("earlier\n")

    with CsvResultsSink(path) as sink:
        write_block(sink, Distribution.UNIFORM, 2, [0.0])

    assert path.read_text() == "earlier\nUniform Distribution\n2,0.0\n"


def test_csv_overwrite(tmp_path):
    path = tmp_path / "output.csv"
    path.write_text("earlier\n")

    with CsvResultsSink(path, append=False) as sink:
        write_block(sink, Distribution.UNIFORM, 2, [0.0])

    assert path.read_text() == "Uniform Distribution\n2,0.0\n"


def test_unwritable_sink_logs_and_keeps_going(tmp_path, caplog):
    path = tmp_path / "missing-dir" / "output.csv"

    with caplog.at_level(logging.ERROR, logger="simulations.sinks"):
        sink = CsvResultsSink(path)
        write_block(sink, Distribution.UNIFORM, 2, [0.0, 1.0])
        sink.close()

    # One failure opening, one per header line, one per row.
    assert sink.failures == 3
    assert all(r.levelno == logging.ERROR for r in caplog.records)
    assert len(caplog.records) == 3
    assert not path.exists()


def test_sink_failure_does_not_abort_sweep(tmp_path, caplog):
    """
    The sweep completes and returns every value even when the results file
    can never be written.
    """
    spec = SweepSpec(processor_counts=(2, 4), max_modules=4, distributions=(Distribution.UNIFORM,))
    sink = CsvResultsSink(tmp_path / "nope" / "output.csv")

    with caplog.at_level(logging.ERROR, logger="simulations.sinks"):
        rows = run_sweep(spec, sink=sink, seed=8)

    assert [len(r.values) for r in rows] == [4, 4]
    assert sink.failures > 0
    assert any("Error:" in r.getMessage() for r in caplog.records)


def test_in_memory_sink_collects_rows():
    sink = InMemoryResultsSink(min_modules=5)
    write_block(sink, Distribution.GAUSSIAN, 8, [0.1, 0.2])

    assert len(sink.rows) == 1
    row = sink.rows[0]
    assert row.distribution is Distribution.GAUSSIAN
    assert row.processor_count == 8
    assert row.values == [0.1, 0.2]
    assert list(row.module_counts()) == [5, 6]


def test_in_memory_sink_requires_block_before_row():
    sink = InMemoryResultsSink()
    with pytest.raises(RuntimeError):
        sink.begin_row(2)
